from . import author, book, bookinstance, genre
from .index import index

__all__ = [
    'author',
    'book',
    'bookinstance',
    'genre',
    'index',
]
