from enum import Enum, auto
from typing import Optional


class ErrorKind(Enum):
    NOT_FOUND = auto()
    MALFORMED_REFERENCE = auto()


class CatalogError(Exception):
    '''
    An error that :class:`catalog.middleware.CatalogErrorMiddleware` answers
    according to its :attr:`kind`.
    '''
    kind: ErrorKind = ErrorKind.MALFORMED_REFERENCE

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind


class NotFound(CatalogError):
    kind = ErrorKind.NOT_FOUND


class MalformedReference(CatalogError):
    kind = ErrorKind.MALFORMED_REFERENCE


class UnknownEntityKind(Exception):
    pass
