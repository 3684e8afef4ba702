import logging
from django.shortcuts import redirect, render

from ..errors import NotFound
from ..forms import AuthorForm
from ..models import Author, Book
from ..store import fetch_all, find, gather, model_errors, overwrite, parse_id


logger = logging.getLogger('catalog.views.author')


def _related(pk):
    return dict(
        author=find(Author.objects.all(), pk),
        author_books=fetch_all(Book.objects.filter(author=pk)),
    )


def _render_form(request, title, author=None, errors=()):
    return render(request, 'catalog/author_form.html', {
        'title': title,
        'author': author,
        'errors': list(errors),
    })


async def author_list(request):
    authors = await fetch_all(Author.objects.order_by('family_name'))
    return render(request, 'catalog/author_list.html', {'title': 'Author List', 'author_list': authors})


async def author_detail(request, id):
    results = await gather(**_related(parse_id(Author, id)))
    if results['author'] is None:
        raise NotFound('Author not found')
    return render(request, 'catalog/author_detail.html', {'title': 'Author Detail', **results})


async def author_create_get(request):
    return _render_form(request, 'Create Author')


async def author_create_post(request):
    form = AuthorForm(data=request.POST)
    valid = form.is_valid()
    author = Author(**form.sanitized())

    errors = form.messages if not valid else await model_errors(author)
    if errors:
        return _render_form(request, 'Create Author', author, errors)

    await author.asave()
    logger.debug(f'Created author {author.pk}')
    return redirect(author)


async def author_delete_get(request, id):
    results = await gather(**_related(parse_id(Author, id)))
    if results['author'] is None:
        return redirect('author-list')
    return render(request, 'catalog/author_delete.html', {'title': 'Delete Author', **results})


async def author_delete_post(request, id):
    pk = parse_id(Author, request.POST.get('authorid') or id)
    results = await gather(**_related(pk))
    if results['author_books']:
        logger.debug(f'Refusing to delete author {pk}: {len(results["author_books"])} books')
        return render(request, 'catalog/author_delete.html', {'title': 'Delete Author', **results})

    await Author.objects.filter(pk=pk).adelete()
    logger.debug(f'Deleted author {pk}')
    return redirect('author-list')


async def author_update_get(request, id):
    author = await find(Author.objects.all(), parse_id(Author, id))
    if author is None:
        return redirect('author-list')
    return _render_form(request, 'Update Author', author)


async def author_update_post(request, id):
    author = await overwrite(Author, parse_id(Author, id), request.POST)
    return redirect(author)
