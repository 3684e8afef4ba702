'''
DRF ``ModelSerializer`` subclasses used to dump and load catalog documents.

References to other documents are written as :class:`~catalog.types.ID`
values and read back as :class:`~catalog.types.Ref` placeholders, which the
import container resolves once the referenced documents exist.
'''

from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from .models import Author, Book, BookInstance, Genre
from .types import ID, Ref


class Reference(serializers.Field):
    def __init__(self, *args, many=False, **kwargs):
        super().__init__(*args, **kwargs)
        self._many = many

    def get_attribute(self, instance):
        value = getattr(instance, self.source)
        return value.all() if self._many else value

    def to_representation(self, value):
        if self._many:
            return [ID.from_object(instance) for instance in value]
        return ID.from_object(value)

    def to_internal_value(self, data):
        if self._many:
            return Ref(ids=list(data or []), field=self.source, many=True)
        return Ref(ids=[data], field=self.source)


class Exporter(serializers.ModelSerializer):
    def build_standard_field(self, field_name, model_field):
        cls, kwargs = super().build_standard_field(field_name, model_field)
        if 'validators' in kwargs:
            kwargs['validators'] = [x for x in kwargs['validators'] if not isinstance(x, UniqueValidator)]
        kwargs.pop('read_only', None)
        kwargs['required'] = False
        return cls, kwargs


class GenreExporter(Exporter):
    class Meta:
        fields = '__all__'
        model = Genre


class AuthorExporter(Exporter):
    class Meta:
        fields = '__all__'
        model = Author


class BookExporter(Exporter):
    author = Reference()
    genre = Reference(many=True, required=False)

    class Meta:
        fields = '__all__'
        model = Book


class BookInstanceExporter(Exporter):
    book = Reference()

    class Meta:
        fields = '__all__'
        model = BookInstance


EXPORTERS = [GenreExporter, AuthorExporter, BookExporter, BookInstanceExporter]
