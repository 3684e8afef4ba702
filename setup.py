#!/usr/bin/env python

"""The setup script."""

from setuptools import setup, find_packages

with open('README.rst') as readme_file:
    readme = readme_file.read()

requirements = [
    'django>=4.2',
    'djangorestframework>=3',
    'ruamel.yaml>=0.17',
]

test_requirements = ['pytest>=3']

setup(
    author="Local Library maintainers",
    python_requires='>=3.9',
    classifiers=[
        'Development Status :: 2 - Pre-Alpha',
        'Framework :: Django',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
    description="Local library catalog: books, authors, genres and copies as a Django app",
    install_requires=requirements,
    extras_require={'test': test_requirements},
    license="MIT",
    long_description=readme,
    long_description_content_type='text/x-rst',
    include_package_data=True,
    package_data={'catalog': ['templates/catalog/*.html']},
    keywords=['django', 'library', 'catalog'],
    name='django-locallibrary',
    packages=find_packages(include=['catalog', 'catalog.*']),
    test_suite='tests',
    tests_require=test_requirements,
    version='0.1.0',
    zip_safe=False,
)
