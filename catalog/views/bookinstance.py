import logging
from django.shortcuts import redirect, render

from ..errors import NotFound
from ..forms import BookInstanceForm
from ..models import Book, BookInstance
from ..store import fetch_all, find, gather, model_errors, overwrite, parse_id


logger = logging.getLogger('catalog.views.bookinstance')


def _books():
    return fetch_all(Book.objects.order_by('title'))


def _render_form(request, title, book_list, bookinstance=None, errors=()):
    return render(request, 'catalog/bookinstance_form.html', {
        'title': title,
        'book_list': book_list,
        'bookinstance': bookinstance,
        'selected_book': str(bookinstance.book_id) if bookinstance is not None and bookinstance.book_id else '',
        'status_choices': BookInstance.STATUS_CHOICES,
        'errors': list(errors),
    })


async def bookinstance_list(request):
    bookinstances = await fetch_all(BookInstance.objects.select_related('book'))
    return render(request, 'catalog/bookinstance_list.html', {
        'title': 'Book Instance List',
        'bookinstance_list': bookinstances,
    })


async def bookinstance_detail(request, id):
    bookinstance = await find(BookInstance.objects.select_related('book'), parse_id(BookInstance, id))
    if bookinstance is None:
        raise NotFound('Book copy not found')
    return render(request, 'catalog/bookinstance_detail.html', {
        'title': f'Copy: {bookinstance.book.title}',
        'bookinstance': bookinstance,
    })


async def bookinstance_create_get(request):
    return _render_form(request, 'Create BookInstance', await _books())


async def bookinstance_create_post(request):
    form = BookInstanceForm(data=request.POST)
    valid = form.is_valid()
    values = form.sanitized()
    fields = {
        'book_id': values.get('book') or None,
        'imprint': values.get('imprint', ''),
        'due_back': values.get('due_back'),
    }
    if values.get('status'):
        fields['status'] = values['status']
    bookinstance = BookInstance(**fields)

    if valid:
        bookinstance.book_id = parse_id(Book, values['book'])

    errors = form.messages if not valid else await model_errors(bookinstance, exclude=['book'])
    if errors:
        return _render_form(request, 'Create BookInstance', await _books(), bookinstance, errors)

    await bookinstance.asave()
    logger.debug(f'Created book instance {bookinstance.pk}')
    return redirect(bookinstance)


async def bookinstance_delete_get(request, id):
    bookinstance = await find(BookInstance.objects.select_related('book'), parse_id(BookInstance, id))
    if bookinstance is None:
        return redirect('bookinstance-list')
    return render(request, 'catalog/bookinstance_delete.html', {
        'title': f'Delete Copy: {bookinstance.book.title}',
        'bookinstance': bookinstance,
    })


async def bookinstance_delete_post(request, id):
    pk = parse_id(BookInstance, request.POST.get('bookinstanceid') or id)
    await BookInstance.objects.filter(pk=pk).adelete()
    logger.debug(f'Deleted book instance {pk}')
    return redirect('bookinstance-list')


async def bookinstance_update_get(request, id):
    results = await gather(
        bookinstance=find(BookInstance.objects.all(), parse_id(BookInstance, id)),
        book_list=_books(),
    )
    if results['bookinstance'] is None:
        return redirect('bookinstance-list')
    return _render_form(request, 'Update BookInstance', results['book_list'], results['bookinstance'])


async def bookinstance_update_post(request, id):
    bookinstance = await overwrite(BookInstance, parse_id(BookInstance, id), request.POST)
    return redirect(bookinstance)
