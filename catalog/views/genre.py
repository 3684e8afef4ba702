import logging
from django.shortcuts import redirect, render

from ..errors import NotFound
from ..forms import GenreForm
from ..models import Book, Genre
from ..store import fetch_all, find, gather, model_errors, overwrite, parse_id


logger = logging.getLogger('catalog.views.genre')


def _related(pk):
    return dict(
        genre=find(Genre.objects.all(), pk),
        genre_books=fetch_all(Book.objects.filter(genre=pk)),
    )


def _render_form(request, title, genre=None, errors=()):
    return render(request, 'catalog/genre_form.html', {
        'title': title,
        'genre': genre,
        'errors': list(errors),
    })


async def genre_list(request):
    genres = await fetch_all(Genre.objects.order_by('name'))
    return render(request, 'catalog/genre_list.html', {'title': 'Genre List', 'genre_list': genres})


async def genre_detail(request, id):
    results = await gather(**_related(parse_id(Genre, id)))
    if results['genre'] is None:
        raise NotFound('Genre not found')
    return render(request, 'catalog/genre_detail.html', {'title': 'Genre Detail', **results})


async def genre_create_get(request):
    return _render_form(request, 'Create Genre')


async def genre_create_post(request):
    form = GenreForm(data=request.POST)
    valid = form.is_valid()
    genre = Genre(**form.sanitized())

    if not valid:
        return _render_form(request, 'Create Genre', genre, form.messages)

    # Not atomic: two concurrent creates of the same name can both get past this
    found = await Genre.objects.filter(name=genre.name).afirst()
    if found is not None:
        logger.debug(f'Genre "{genre.name}" already exists as {found.pk}')
        return redirect(found)

    errors = await model_errors(genre)
    if errors:
        return _render_form(request, 'Create Genre', genre, errors)

    await genre.asave()
    logger.debug(f'Created genre {genre.pk}')
    return redirect(genre)


async def genre_delete_get(request, id):
    results = await gather(**_related(parse_id(Genre, id)))
    if results['genre'] is None:
        return redirect('genre-list')
    return render(request, 'catalog/genre_delete.html', {'title': 'Delete Genre', **results})


async def genre_delete_post(request, id):
    pk = parse_id(Genre, request.POST.get('genreid') or id)
    results = await gather(**_related(pk))
    if results['genre_books']:
        logger.debug(f'Refusing to delete genre {pk}: {len(results["genre_books"])} books')
        return render(request, 'catalog/genre_delete.html', {'title': 'Delete Genre', **results})

    await Genre.objects.filter(pk=pk).adelete()
    logger.debug(f'Deleted genre {pk}')
    return redirect('genre-list')


async def genre_update_get(request, id):
    genre = await find(Genre.objects.all(), parse_id(Genre, id))
    if genre is None:
        return redirect('genre-list')
    return _render_form(request, 'Update Genre', genre)


async def genre_update_post(request, id):
    genre = await overwrite(Genre, parse_id(Genre, id), request.POST)
    return redirect(genre)
