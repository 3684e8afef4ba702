import logging
from django.shortcuts import render
from django.utils.deprecation import MiddlewareMixin

from .errors import CatalogError, ErrorKind


logger = logging.getLogger('catalog.middleware')

STATUS_FOR_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.MALFORMED_REFERENCE: 500,
}


class CatalogErrorMiddleware(MiddlewareMixin):
    '''
    Turns :class:`CatalogError` raised by the catalog views into an error page.

    Anything else is left for Django's own exception handling.
    '''

    def process_exception(self, request, exception):
        if not isinstance(exception, CatalogError):
            return None

        status = STATUS_FOR_KIND.get(exception.kind, 500)
        if status == 404:
            logger.warning(f'{request.method} {request.path}: {exception.message}')
        else:
            logger.error(f'{request.method} {request.path}: {exception.message}', exc_info=exception)

        return render(
            request,
            'catalog/error.html',
            {'title': 'Error', 'message': exception.message, 'status': status},
            status=status,
        )
