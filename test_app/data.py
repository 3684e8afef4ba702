from catalog.models import Author, Book, BookInstance, Genre


def make_author(first_name='Patrick', family_name='Rothfuss', **kwargs):
    return Author.objects.create(first_name=first_name, family_name=family_name, **kwargs)


def make_genre(name='Fantasy'):
    return Genre.objects.create(name=name)


def make_book(title='The Name of the Wind', author=None, genres=(), **kwargs):
    kwargs.setdefault('summary', 'A young man grows to be a legendary wizard.')
    kwargs.setdefault('isbn', '9781473211896')
    book = Book.objects.create(title=title, author=author or make_author(), **kwargs)
    book.genre.set(genres)
    return book


def make_copy(book=None, imprint='Gollancz, 2011', status=BookInstance.AVAILABLE, due_back=None):
    return BookInstance.objects.create(
        book=book or make_book(),
        imprint=imprint,
        status=status,
        due_back=due_back,
    )
