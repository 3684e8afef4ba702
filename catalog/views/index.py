import logging
from django.shortcuts import render

from ..models import Author, Book, BookInstance, Genre
from ..store import gather_settled


logger = logging.getLogger('catalog.views.index')


async def index(request):
    data, error = await gather_settled(
        book_count=Book.objects.acount(),
        book_instance_count=BookInstance.objects.acount(),
        book_instance_available_count=BookInstance.objects.filter(status=BookInstance.AVAILABLE).acount(),
        author_count=Author.objects.acount(),
        genre_count=Genre.objects.acount(),
    )
    if error is not None:
        logger.warning(f'Summary counts incomplete: {error!r}')
    return render(request, 'catalog/index.html', {
        'title': 'Local Library Home',
        'error': error,
        'data': data,
    })
