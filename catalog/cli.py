'''
Command line entry point for the catalog.

Call it like this::

    python -m catalog.cli --database library.sqlite dump library.yaml
    python -m catalog.cli --database library.sqlite load library.yaml
    python -m catalog.cli show library.yaml
    python -m catalog.cli --database library.sqlite serve 127.0.0.1:8000
'''

import argparse
import logging
import django
from django.conf import settings
from django.core.management import call_command


logger = logging.getLogger('catalog.cli')


def configure(database: str, debug: bool = False):
    settings.configure(
        DEBUG=debug,
        ALLOWED_HOSTS=['localhost', '127.0.0.1'],
        DATABASES={
            'default': {
                'ENGINE': 'django.db.backends.sqlite3',
                'NAME': database,
            },
        },
        INSTALLED_APPS=[
            'catalog',
        ],
        MIDDLEWARE=[
            'catalog.middleware.CatalogErrorMiddleware',
        ],
        ROOT_URLCONF='catalog.urls',
        TEMPLATES=[
            {
                'BACKEND': 'django.template.backends.django.DjangoTemplates',
                'APP_DIRS': True,
            },
        ],
        SECRET_KEY='catalog-cli',
        LOGGING={
            'version': 1,
            'disable_existing_loggers': False,
            'handlers': {
                'console': {'class': 'logging.StreamHandler'},
            },
            'loggers': {
                'catalog': {
                    'handlers': ['console'],
                    'level': 'DEBUG' if debug else 'INFO',
                },
            },
        },
    )
    django.setup()


def _migrate():
    call_command('migrate', '--run-syncdb', interactive=False, verbosity=0)


def dump(path: str):
    from .containers import ExportContainer
    from .models import Author, Book, BookInstance, Genre

    container = ExportContainer()
    for model_cls in (Genre, Author, Book, BookInstance):
        container.export_objects(model_cls.objects.all())
    with open(path, 'wb') as f:
        container.write(f)
    logger.info(f'Wrote {len(list(container.iter_objects()))} documents to {path}')


def load(path: str):
    from .containers import ImportContainer

    _migrate()
    container = ImportContainer()
    with open(path, 'rb') as f:
        with container.read(f):
            report = container.import_objects()
    logger.info(
        f'Loaded {len(report.loaded_objects)} documents: '
        f'{len(report.imported_objects)} created, '
        f'{len(report.linked_objects)} linked, '
        f'{len(report.discarded_objects)} discarded'
    )


def show(path: str):
    from .containers import ImportContainer

    container = ImportContainer(ignore_unknown=True)
    with open(path, 'rb') as f:
        with container.read(f):
            container.dump_objects()


def serve(addrport: str):
    _migrate()
    call_command('runserver', addrport, use_reloader=False)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Local Library catalog')
    parser.add_argument('--database', type=str, default='db.sqlite')
    parser.add_argument('--debug', action='store_true')
    subparsers = parser.add_subparsers(dest='command', required=True)
    for name in ('dump', 'load', 'show'):
        subparsers.add_parser(name).add_argument('path', type=str)
    subparsers.add_parser('serve').add_argument('addrport', type=str, nargs='?', default='127.0.0.1:8000')
    args = parser.parse_args(argv)

    configure(args.database, debug=args.debug)

    if args.command == 'serve':
        serve(args.addrport)
    else:
        commands = {'dump': dump, 'load': load, 'show': show}
        commands[args.command](args.path)


if __name__ == '__main__':
    main()
