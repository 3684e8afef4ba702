import logging
from django.db.models import Model
from io import TextIOWrapper
from typing import Any, Dict, IO, Iterable, Set

from ..types import ID, Ref, ObjectData
from .._util import UncloseableStream

from .base import BaseContainer
from ._yaml import get_yaml


logger = logging.getLogger('catalog.export')


class ExportContainer(BaseContainer):
    '''
    Collects catalog documents and writes them out as a YAML stream.
    '''

    def export_objects(self, objects: Iterable[Model]):
        '''
        Serializes objects and adds them to the container, along with every
        document they reference.
        '''
        objects = list(objects)
        if not objects:
            return

        if len(set(ID.kind_for_model(obj) for obj in objects)) > 1:
            raise ValueError('Objects must be of the same class')

        kind = ID.kind_for_model(objects[0])
        objects = [instance for instance in objects if ID.from_object(instance) not in self._objects]
        if not objects:
            return

        exporter_cls = self._exporter_for_model(objects[0])
        exporter = exporter_cls(objects, many=True)
        outstanding_refs: Dict[str, Set[ID]] = {}

        logger.debug(f'Exporting {len(objects)} objects of kind {kind}')
        for instance, serialized_data in zip(objects, exporter.data):
            serialized_data = dict(serialized_data)
            pk = serialized_data.pop(instance._meta.pk.name)
            serialized_obj = ObjectData(ID(kind, pk), serialized_data)

            for key, value in serialized_data.items():
                if isinstance(value, ID):
                    ref = Ref([value], key)
                elif isinstance(value, list) and all(isinstance(x, ID) for x in value):
                    ref = Ref(list(value), key, many=True)
                else:
                    continue
                serialized_obj.add_reference(ref)
                for target in ref.ids:
                    outstanding_refs.setdefault(target.kind, set()).add(target)

            self._objects[serialized_obj.id] = serialized_obj

        for kind, ids in outstanding_refs.items():
            ids = ids - self._objects.keys()
            if ids:
                model_cls = ID.model_for_kind(kind)
                self.export_objects(model_cls.objects.filter(pk__in=[x.pk for x in ids]))

    def iter_objects(self) -> Iterable[ObjectData]:
        return self._objects.values()

    def write(self, stream: IO[bytes], metadata: Any = None):
        '''
        Writes the serialized objects into a binary stream.

        :param metadata: a free-form object stored in the header and available
            later through :attr:`ImportContainer.metadata`.
        '''
        yaml = get_yaml()
        with TextIOWrapper(UncloseableStream(stream), encoding='utf-8') as text:  # type: ignore
            header = {
                '_': 'header',
                'version': 1,
                'object_kinds': sorted(set(x.kind for x in self._objects.keys())),
                'metadata': metadata,
            }
            text.write('\n---\n')
            yaml.dump(header, text)
            for obj in self._objects.values():
                text.write('\n---\n')
                yaml.dump({'_': 'object', 'id': obj.id, 'data': obj.serialized_data}, text)
