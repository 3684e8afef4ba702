'''
Validation and sanitization of submitted catalog forms.

The form classes are DRF serializers fed straight from ``request.POST``. Text
fields are trimmed, checked and then HTML-escaped; a field that fails reports
a single message regardless of which of its checks failed.
'''

from django.core.validators import RegexValidator
from django.utils.html import escape
from rest_framework import ISO_8601, serializers
from rest_framework.fields import empty
from typing import Any, Dict, List


_MISSING_KEYS = ('required', 'blank', 'null', 'min_length')


def _flatten(errors) -> List[str]:
    if isinstance(errors, dict):
        return [message for value in errors.values() for message in _flatten(value)]
    if isinstance(errors, (list, tuple)):
        return [message for value in errors for message in _flatten(value)]
    return [str(errors)]


class SanitizedCharField(serializers.CharField):
    def __init__(self, message=None, **kwargs):
        if message:
            error_messages = kwargs.setdefault('error_messages', {})
            for key in _MISSING_KEYS:
                error_messages.setdefault(key, message)
        super().__init__(**kwargs)

    def run_validation(self, data=empty):
        value = super().run_validation(data)
        return escape(value) if value else value


class MultiValueField(serializers.ListField):
    '''
    A multi-select input. An absent value becomes an empty list and a single
    value a one-element list.
    '''

    def __init__(self, **kwargs):
        kwargs.setdefault('child', SanitizedCharField(trim_whitespace=False, allow_blank=True))
        kwargs.setdefault('default', list)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if data is None:
            data = []
        elif isinstance(data, str):
            data = [data]
        return super().to_internal_value(data)


class OptionalDateField(serializers.DateField):
    '''
    An ISO 8601 date that may be left out. Falsy input is stored as ``None``.
    '''

    def __init__(self, message, **kwargs):
        kwargs.setdefault('error_messages', {}).update({
            'invalid': message,
            'datetime': message,
            'date': message,
        })
        super().__init__(required=False, allow_null=True, input_formats=[ISO_8601], **kwargs)

    def validate_empty_values(self, data):
        if data is empty or not data:
            return (True, None)
        return super().validate_empty_values(data)


class CatalogForm(serializers.Serializer):
    @property
    def messages(self) -> List[str]:
        return _flatten(self.errors)

    def sanitized(self) -> Dict[str, Any]:
        '''
        Cleaned values to re-populate the form with, including best-effort
        values for the fields that failed. Call after :func:`is_valid`.
        '''
        if not self.errors:
            return dict(self.validated_data)
        values = {}
        for name, field in self.fields.items():
            raw = field.get_value(self.initial_data)
            try:
                values[name] = field.run_validation(raw)
            except serializers.SkipField:
                continue
            except serializers.ValidationError:
                if isinstance(raw, str):
                    values[name] = escape(raw.strip())
        return values


class GenreForm(CatalogForm):
    name = SanitizedCharField('Genre name required', min_length=2)


ALPHANUMERIC = r'^[0-9A-Za-z]+$'


class AuthorForm(CatalogForm):
    first_name = SanitizedCharField(
        'First name must be specified.',
        validators=[RegexValidator(ALPHANUMERIC, 'First name has non-alphanumeric characters.')],
    )
    family_name = SanitizedCharField(
        'Family name must be specified.',
        validators=[RegexValidator(ALPHANUMERIC, 'Family name has non-alphanumeric characters.')],
    )
    date_of_birth = OptionalDateField('Invalid date of birth')
    date_of_death = OptionalDateField('Invalid date of death')


class BookForm(CatalogForm):
    title = SanitizedCharField('Title must not be empty.')
    author = SanitizedCharField('Author must not be empty.')
    summary = SanitizedCharField('Summary must not be empty.')
    isbn = SanitizedCharField('ISBN must not be empty')
    genre = MultiValueField()


class BookInstanceForm(CatalogForm):
    book = SanitizedCharField('Book must be specified')
    imprint = SanitizedCharField('Imprint must be specified')
    status = SanitizedCharField(required=False, allow_blank=True)
    due_back = OptionalDateField('Invalid date')

    def validate(self, attrs):
        # A blank status falls back to the model default
        if not attrs.get('status'):
            attrs.pop('status', None)
        return attrs
