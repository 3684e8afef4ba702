from django.test import RequestFactory
from test_app.app import reset

from catalog.errors import CatalogError, ErrorKind, MalformedReference, NotFound
from catalog.middleware import CatalogErrorMiddleware


def _middleware():
    return CatalogErrorMiddleware(lambda request: None)


def test_not_found_maps_to_404():
    reset()
    request = RequestFactory().get('/catalog/book/1')
    response = _middleware().process_exception(request, NotFound('Book not found'))
    assert response.status_code == 404
    assert b'Book not found' in response.content


def test_malformed_reference_maps_to_500():
    reset()
    request = RequestFactory().get('/catalog/book/x')
    response = _middleware().process_exception(request, MalformedReference('bad id'))
    assert response.status_code == 500


def test_kind_override():
    reset()
    request = RequestFactory().get('/catalog/book/1')
    response = _middleware().process_exception(request, CatalogError('gone', kind=ErrorKind.NOT_FOUND))
    assert response.status_code == 404


def test_other_exceptions_pass_through():
    reset()
    request = RequestFactory().get('/catalog/book/1')
    assert _middleware().process_exception(request, RuntimeError('boom')) is None
