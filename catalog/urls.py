'''
Catalog routes. The ``/catalog/`` prefix is part of the patterns so this module
can serve as a ``ROOT_URLCONF`` on its own.
'''

from django.urls import path
from django.views.generic import RedirectView

from .views import author, book, bookinstance, genre, index
from .views._util import by_method


def _entity_patterns(name, module):
    def view(action):
        return getattr(module, f'{name}_{action}')

    return [
        path(f'catalog/{name}s', by_method(get=view('list')), name=f'{name}-list'),
        path(
            f'catalog/{name}/create',
            by_method(get=view('create_get'), post=view('create_post')),
            name=f'{name}-create',
        ),
        path(f'catalog/{name}/<str:id>', by_method(get=view('detail')), name=f'{name}-detail'),
        path(
            f'catalog/{name}/<str:id>/delete',
            by_method(get=view('delete_get'), post=view('delete_post')),
            name=f'{name}-delete',
        ),
        path(
            f'catalog/{name}/<str:id>/update',
            by_method(get=view('update_get'), post=view('update_post')),
            name=f'{name}-update',
        ),
    ]


urlpatterns = [
    path('', RedirectView.as_view(url='/catalog/', permanent=False)),
    path('catalog/', by_method(get=index), name='index'),
    *_entity_patterns('book', book),
    *_entity_patterns('author', author),
    *_entity_patterns('genre', genre),
    *_entity_patterns('bookinstance', bookinstance),
]
