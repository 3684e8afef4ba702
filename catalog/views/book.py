import logging
from django.shortcuts import redirect, render

from ..errors import NotFound
from ..forms import BookForm
from ..models import Author, Book, BookInstance, Genre
from ..store import fetch_all, find, gather, model_errors, overwrite, parse_id, save
from ._util import selected


logger = logging.getLogger('catalog.views.book')


def _choices():
    return dict(
        authors=fetch_all(Author.objects.order_by('family_name')),
        genres=fetch_all(Genre.objects.order_by('name')),
    )


def _related(pk):
    return dict(
        book=find(Book.objects.select_related('author'), pk),
        book_instances=fetch_all(BookInstance.objects.filter(book=pk)),
    )


def _render_form(request, title, choices, book=None, genre_ids=(), errors=()):
    return render(request, 'catalog/book_form.html', {
        'title': title,
        'book': book,
        'selected_author': str(book.author_id) if book is not None and book.author_id else '',
        'selected_genres': selected(genre_ids),
        'errors': list(errors),
        **choices,
    })


async def book_list(request):
    books = await fetch_all(Book.objects.select_related('author').order_by('title'))
    return render(request, 'catalog/book_list.html', {'title': 'Book List', 'book_list': books})


async def book_detail(request, id):
    pk = parse_id(Book, id)
    results = await gather(
        book=find(Book.objects.select_related('author').prefetch_related('genre'), pk),
        book_instances=fetch_all(BookInstance.objects.filter(book=pk)),
    )
    if results['book'] is None:
        raise NotFound('Book not found')
    return render(request, 'catalog/book_detail.html', {'title': results['book'].title, **results})


async def book_create_get(request):
    choices = await gather(**_choices())
    return _render_form(request, 'Create Book', choices)


async def book_create_post(request):
    form = BookForm(data=request.POST)
    valid = form.is_valid()
    values = form.sanitized()
    genre_ids = values.pop('genre', [])
    book = Book(
        title=values.get('title', ''),
        author_id=values.get('author') or None,
        summary=values.get('summary', ''),
        isbn=values.get('isbn', ''),
    )

    if valid:
        book.author_id = parse_id(Author, values['author'])

    errors = form.messages if not valid else await model_errors(book, exclude=['author'])
    if errors:
        choices = await gather(**_choices())
        return _render_form(request, 'Create Book', choices, book, genre_ids, errors)

    await save(book, {'genre': genre_ids})
    logger.debug(f'Created book {book.pk}')
    return redirect(book)


async def book_delete_get(request, id):
    results = await gather(**_related(parse_id(Book, id)))
    if results['book'] is None:
        return redirect('book-list')
    return render(request, 'catalog/book_delete.html', {'title': 'Delete Book', **results})


async def book_delete_post(request, id):
    pk = parse_id(Book, request.POST.get('bookid') or id)
    results = await gather(**_related(pk))
    if results['book_instances']:
        logger.debug(f'Refusing to delete book {pk}: {len(results["book_instances"])} copies')
        return render(request, 'catalog/book_delete.html', {'title': 'Delete Book', **results})

    await Book.objects.filter(pk=pk).adelete()
    logger.debug(f'Deleted book {pk}')
    return redirect('book-list')


async def book_update_get(request, id):
    results = await gather(
        book=find(Book.objects.prefetch_related('genre'), parse_id(Book, id)),
        **_choices(),
    )
    book = results.pop('book')
    if book is None:
        return redirect('book-list')
    genre_ids = [genre.pk for genre in book.genre.all()]
    return _render_form(request, 'Update Book', results, book, genre_ids)


async def book_update_post(request, id):
    book = await overwrite(Book, parse_id(Book, id), request.POST)
    return redirect(book)
