import django
from django.db import connections
import os
from django.conf import settings
from django.core.management import call_command
from django.test.utils import setup_test_environment
from pathlib import Path


def setup():
    if setup._configured:
        return
    setup._configured = True
    settings.configure(
        DATABASES={
            'default': {
                'ENGINE': 'django.db.backends.sqlite3',
                'NAME': str(Path(os.getcwd()) / 'db.sqlite'),
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
        LOGGING={
            'version': 1,
            'disable_existing_loggers': False,
            'loggers': {
                'catalog': {'level': 'DEBUG'},
            },
        },
        SECRET_KEY='test',
    )
    django.setup()
    setup_test_environment()


def reset():
    connections.close_all()

    try:
        os.unlink('db.sqlite')
    except FileNotFoundError:
        pass

    setup()
    call_command('migrate', '--run-syncdb', interactive=False, verbosity=0)


setattr(setup, '_configured', False)
