from ._export import ExportContainer
from ._import import ImportContainer, ImportReport

__all__ = [
    'ExportContainer',
    'ImportContainer',
    'ImportReport',
]
