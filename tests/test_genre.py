from django.test import Client
from test_app.app import reset
from test_app.data import make_book, make_genre

from catalog.models import Genre


def test_list_sorted_by_name():
    reset()
    make_genre('Poetry')
    make_genre('Fantasy')
    make_genre('Horror')

    response = Client().get('/catalog/genres')

    assert response.status_code == 200
    assert [g.name for g in response.context['genre_list']] == ['Fantasy', 'Horror', 'Poetry']


def test_detail_shows_books():
    reset()
    fantasy = make_genre('Fantasy')
    make_book('The Wise Man\'s Fear', genres=[fantasy])

    response = Client().get(f'/catalog/genre/{fantasy.pk}')

    assert response.status_code == 200
    assert response.context['genre'] == fantasy
    assert [b.title for b in response.context['genre_books']] == ['The Wise Man\'s Fear']


def test_detail_not_found():
    reset()
    response = Client().get('/catalog/genre/999')
    assert response.status_code == 404
    assert b'Genre not found' in response.content


def test_detail_malformed_id():
    reset()
    response = Client().get('/catalog/genre/not-an-id')
    assert response.status_code == 500
    assert b'Cast to Genre id failed' in response.content


def test_create_redirects_to_detail():
    reset()
    response = Client().post('/catalog/genre/create', {'name': '  Fantasy '})

    genre = Genre.objects.get()
    assert genre.name == 'Fantasy'
    assert response.status_code == 302
    assert response['Location'] == f'/catalog/genre/{genre.pk}'
    assert Client().get(response['Location']).status_code == 200


def test_create_existing_name_redirects_to_existing():
    reset()
    client = Client()
    first = client.post('/catalog/genre/create', {'name': 'Fantasy'})
    second = client.post('/catalog/genre/create', {'name': 'Fantasy'})

    assert Genre.objects.count() == 1
    assert second.status_code == 302
    assert second['Location'] == first['Location']


def test_create_name_too_short():
    reset()
    response = Client().post('/catalog/genre/create', {'name': 'S'})

    assert response.status_code == 200
    assert response.context['errors'] == ['Genre name required']
    assert b'Genre name required' in response.content
    assert Genre.objects.count() == 0


def test_create_two_letters_rejected_by_model():
    reset()
    response = Client().post('/catalog/genre/create', {'name': 'Sc'})

    assert response.status_code == 200
    assert len(response.context['errors']) == 1
    assert 'at least 3 characters' in response.context['errors'][0]
    assert response.context['genre'].name == 'Sc'
    assert Genre.objects.count() == 0


def test_create_missing_name():
    reset()
    response = Client().post('/catalog/genre/create', {})
    assert response.status_code == 200
    assert response.context['errors'] == ['Genre name required']
    assert Genre.objects.count() == 0


def test_create_escapes_name():
    reset()
    Client().post('/catalog/genre/create', {'name': 'Sci <b>& Fi'})
    assert Genre.objects.get().name == 'Sci &lt;b&gt;&amp; Fi'


def test_create_form():
    reset()
    response = Client().get('/catalog/genre/create')
    assert response.status_code == 200
    assert response.context['title'] == 'Create Genre'
    assert response.context['errors'] == []


def test_delete_refused_while_books_reference_it():
    reset()
    fantasy = make_genre('Fantasy')
    make_book(genres=[fantasy])

    response = Client().post(f'/catalog/genre/{fantasy.pk}/delete', {'genreid': fantasy.pk})

    assert response.status_code == 200
    assert len(response.context['genre_books']) == 1
    assert b'Delete the following books' in response.content
    assert Genre.objects.count() == 1


def test_delete():
    reset()
    fantasy = make_genre('Fantasy')
    make_genre('Poetry')

    response = Client().post(f'/catalog/genre/{fantasy.pk}/delete', {'genreid': fantasy.pk})

    assert response.status_code == 302
    assert response['Location'] == '/catalog/genres'
    assert Genre.objects.count() == 1
    assert not Genre.objects.filter(pk=fantasy.pk).exists()


def test_delete_confirmation():
    reset()
    fantasy = make_genre('Fantasy')
    response = Client().get(f'/catalog/genre/{fantasy.pk}/delete')
    assert response.status_code == 200
    assert response.context['genre'] == fantasy
    assert response.context['genre_books'] == []


def test_delete_missing_redirects_to_list():
    reset()
    response = Client().get('/catalog/genre/999/delete')
    assert response.status_code == 302
    assert response['Location'] == '/catalog/genres'


def test_update():
    reset()
    fantasy = make_genre('Fantasy')
    client = Client()

    form = client.get(f'/catalog/genre/{fantasy.pk}/update')
    assert form.status_code == 200
    assert form.context['genre'] == fantasy

    response = client.post(f'/catalog/genre/{fantasy.pk}/update', {'name': 'High Fantasy'})
    assert response.status_code == 302
    assert response['Location'] == f'/catalog/genre/{fantasy.pk}'
    assert Genre.objects.get().name == 'High Fantasy'


def test_update_missing():
    reset()
    client = Client()
    assert client.get('/catalog/genre/999/update')['Location'] == '/catalog/genres'
    assert client.post('/catalog/genre/999/update', {'name': 'Horror'}).status_code == 404


def test_method_not_allowed():
    reset()
    assert Client().post('/catalog/genres').status_code == 405


def test_head_is_answered_like_get():
    reset()
    make_genre('Fantasy')
    client = Client()
    assert client.head('/catalog/genres').status_code == 200
    assert client.head('/catalog/genre/create').status_code == 200
    assert Client().post('/catalog/genres')['Allow'] == 'GET, HEAD'
