import datetime
from django.test import Client
from test_app.app import reset
from test_app.data import make_book, make_copy

from catalog.models import BookInstance


def test_list_joins_book():
    reset()
    make_copy(make_book('Foundation'), imprint='Gnome Press')

    response = Client().get('/catalog/bookinstances')

    assert response.status_code == 200
    assert b'Foundation : Gnome Press' in response.content


def test_detail():
    reset()
    copy = make_copy(make_book('Foundation'), status=BookInstance.LOANED, due_back=datetime.date(2024, 5, 1))

    response = Client().get(f'/catalog/bookinstance/{copy.pk}')

    assert response.status_code == 200
    assert response.context['title'] == 'Copy: Foundation'
    assert b'May 01, 2024' in response.content


def test_detail_not_found():
    reset()
    response = Client().get('/catalog/bookinstance/999')
    assert response.status_code == 404
    assert b'Book copy not found' in response.content


def test_create_form_lists_books():
    reset()
    make_book('Foundation')
    response = Client().get('/catalog/bookinstance/create')
    assert response.status_code == 200
    assert [b.title for b in response.context['book_list']] == ['Foundation']
    assert response.context['selected_book'] == ''


def test_create_with_blank_due_back():
    reset()
    book = make_book()

    response = Client().post('/catalog/bookinstance/create', {
        'book': book.pk,
        'imprint': 'Gollancz',
        'status': 'Available',
        'due_back': '',
    })

    copy = BookInstance.objects.get()
    assert response.status_code == 302
    assert response['Location'] == f'/catalog/bookinstance/{copy.pk}'
    assert copy.due_back is None
    assert copy.status == BookInstance.AVAILABLE
    assert copy.book == book


def test_create_with_due_back():
    reset()
    book = make_book()

    Client().post('/catalog/bookinstance/create', {
        'book': book.pk,
        'imprint': 'Gollancz',
        'status': 'Loaned',
        'due_back': '2024-06-30',
    })

    assert BookInstance.objects.get().due_back == datetime.date(2024, 6, 30)


def test_create_without_status_uses_default():
    reset()
    book = make_book()

    Client().post('/catalog/bookinstance/create', {'book': book.pk, 'imprint': 'Gollancz'})

    assert BookInstance.objects.get().status == BookInstance.MAINTENANCE


def test_create_invalid_date():
    reset()
    book = make_book()

    response = Client().post('/catalog/bookinstance/create', {
        'book': book.pk,
        'imprint': 'Gollancz',
        'status': 'Loaned',
        'due_back': '2024-13-40',
    })

    assert response.status_code == 200
    assert response.context['errors'] == ['Invalid date']
    assert response.context['selected_book'] == str(book.pk)
    assert response.context['bookinstance'].imprint == 'Gollancz'
    assert BookInstance.objects.count() == 0


def test_create_missing_fields():
    reset()
    make_book()

    response = Client().post('/catalog/bookinstance/create', {'status': 'Available'})

    assert response.status_code == 200
    assert response.context['errors'] == ['Book must be specified', 'Imprint must be specified']
    assert len(response.context['book_list']) == 1
    assert BookInstance.objects.count() == 0


def test_delete():
    reset()
    copy = make_copy()
    make_copy(copy.book)

    confirm = Client().get(f'/catalog/bookinstance/{copy.pk}/delete')
    assert confirm.status_code == 200
    assert confirm.context['bookinstance'] == copy

    response = Client().post(f'/catalog/bookinstance/{copy.pk}/delete', {'bookinstanceid': copy.pk})
    assert response.status_code == 302
    assert response['Location'] == '/catalog/bookinstances'
    assert BookInstance.objects.count() == 1


def test_delete_missing_redirects_to_list():
    reset()
    response = Client().get('/catalog/bookinstance/999/delete')
    assert response.status_code == 302
    assert response['Location'] == '/catalog/bookinstances'


def test_update():
    reset()
    copy = make_copy(status=BookInstance.AVAILABLE)
    client = Client()

    form = client.get(f'/catalog/bookinstance/{copy.pk}/update')
    assert form.status_code == 200
    assert form.context['selected_book'] == str(copy.book_id)

    response = client.post(f'/catalog/bookinstance/{copy.pk}/update', {
        'book': copy.book_id,
        'imprint': 'Gollancz, 2012',
        'status': 'Loaned',
        'due_back': '',
    })
    assert response.status_code == 302
    assert response['Location'] == f'/catalog/bookinstance/{copy.pk}'

    copy.refresh_from_db()
    assert copy.imprint == 'Gollancz, 2012'
    assert copy.status == BookInstance.LOANED
    assert copy.due_back is None


def test_update_missing_redirects_to_list():
    reset()
    response = Client().get('/catalog/bookinstance/999/update')
    assert response.status_code == 302
    assert response['Location'] == '/catalog/bookinstances'


def test_create_malformed_book_is_server_error():
    reset()
    response = Client().post('/catalog/bookinstance/create', {
        'book': 'abc',
        'imprint': 'Gollancz',
    })

    assert response.status_code == 500
    assert b'Cast to Book id failed' in response.content
    assert BookInstance.objects.count() == 0


def test_create_unknown_book_is_server_error():
    reset()
    response = Client(raise_request_exception=False).post('/catalog/bookinstance/create', {
        'book': '999',
        'imprint': 'Gollancz',
    })

    assert response.status_code == 500
    assert BookInstance.objects.count() == 0


def test_update_invalid_date_is_server_error():
    reset()
    copy = make_copy(due_back=datetime.date(2024, 5, 1))

    response = Client(raise_request_exception=False).post(f'/catalog/bookinstance/{copy.pk}/update', {
        'due_back': '2024-13-40',
    })

    assert response.status_code == 500
    copy.refresh_from_db()
    assert copy.due_back == datetime.date(2024, 5, 1)
