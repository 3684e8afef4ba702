import graphlib
import logging
from contextlib import contextmanager
from django.db import transaction
from django.db.models import Model
from io import TextIOWrapper
from typing import Any, BinaryIO, Dict, Iterable, List, Optional, Set, Type

from ..errors import UnknownEntityKind
from ..models import Genre
from ..serializers import Exporter
from ..types import ID, Ref, ObjectData
from .._util import UncloseableStream, get_model_options

from .base import BaseContainer
from ._yaml import get_yaml


logger = logging.getLogger('catalog.import')

#: Documents of these models are matched to existing ones by these fields
#: instead of being created again
LINK_BY_FIELDS: Dict[Type[Model], tuple] = {
    Genre: ('name',),
}


class ImportReport:
    loaded_objects: Set[ObjectData]
    imported_objects: Set[Model]
    linked_objects: Set[Model]
    discarded_objects: Set[ObjectData]
    pk_map: Dict[ID, Model]

    def __init__(self):
        self.loaded_objects = set()
        self.imported_objects = set()
        self.linked_objects = set()
        self.discarded_objects = set()
        self.pk_map = {}


class ImportContainer(BaseContainer):
    '''
    Reads a YAML stream written by :class:`ExportContainer` and recreates its
    documents, referenced documents first.
    '''
    __instance_map: Dict[ID, Model]
    __discarded_objects: Set[ID]

    #: free-form metadata as stored by :func:`ExportContainer.write`
    metadata: Any = None

    def __init__(self, exporters: Optional[List[Type[Exporter]]] = None, ignore_unknown=False):
        super().__init__(exporters, ignore_unknown)
        self.__instance_map = {}
        self.__discarded_objects = set()
        self.__open = False
        self.report = ImportReport()

    @contextmanager
    def read(self, stream: BinaryIO):
        '''
        Reads a data stream and stores the deserialized documents inside the container.

        This is a context manager which has to be kept open when :func:`import_objects` is called::

            c = ImportContainer()
            with open(...) as f:
                with c.read(f):
                    c.import_objects()
        '''
        stream.seek(0)
        with TextIOWrapper(UncloseableStream(stream), encoding='utf-8') as text:  # type: ignore
            yaml = get_yaml()
            for document in yaml.load_all(text):
                if document is None:
                    continue
                if document['_'] == 'header':
                    if document['version'] != 1:
                        raise ValueError(f'Unknown container version {document["version"]}')
                    unknown_kinds = [
                        kind for kind in document['object_kinds']
                        if not self._exporter_for_kind(kind, raise_exception=False)
                    ]
                    if unknown_kinds and not self.ignore_unknown:
                        raise UnknownEntityKind(', '.join(unknown_kinds))
                    self.metadata = document.get('metadata')
                    if self.metadata:
                        logger.debug(f'Container metadata: {self.metadata}')
                elif document['_'] == 'object':
                    obj = ObjectData(id=document['id'], serialized_data=document['data'] or {})
                    logger.debug(f'Extracting object {obj.id}')
                    if obj.id in self._objects:
                        raise ValueError(f'Duplicate object {obj.id} found')
                    self._objects[obj.id] = obj
                    self.report.loaded_objects.add(obj)
                else:
                    raise ValueError(f'Unknown container segment "{document["_"]}"')

        try:
            self.__open = True
            yield
        finally:
            self.__open = False

    def _discard_objects(self, objects: Iterable[ObjectData], reason=None):
        for obj in objects:
            logger.debug(f'Discarding {obj.id} {reason or ""}')
            self.__discarded_objects.add(obj.id)
            self.report.discarded_objects.add(obj)

    def import_objects(self) -> ImportReport:
        '''
        Orders the documents by their references and saves them into the database.
        '''
        if not self.__open:
            raise RuntimeError('Container is not open - open a .read() context first')

        # ----------------
        # Deserialize data

        for kind, objects in self.__group_by_kind(self._objects.values()).items():
            exporter_cls = self._exporter_for_kind(kind, raise_exception=not self.ignore_unknown)
            if exporter_cls is None:
                self._discard_objects(objects, reason='due to unknown type')
                continue

            exporter = exporter_cls(data=[x.serialized_data for x in objects], many=True)
            exporter.is_valid(raise_exception=True)
            logger.debug(f'Deserialized {len(objects)} {kind} objects')

            for obj, deserialized_data in zip(objects, exporter.validated_data):
                obj.fields = dict(deserialized_data)
                for value in obj.fields.values():
                    if isinstance(value, Ref):
                        obj.add_reference(value)

        for obj in self._objects.values():
            for ref in obj.refs:
                for id in ref.ids:
                    if id not in self._objects:
                        raise ValueError(f'Unresolved reference to {id} from {obj.id} via {ref.field}')

        # -------------------
        # Order by references

        sorter: graphlib.TopologicalSorter = graphlib.TopologicalSorter()
        for obj in self._objects.values():
            sorter.add(obj, *[self._objects[id] for id in obj.refers_to])

        with transaction.atomic():
            for obj in sorter.static_order():
                if obj.id in self.__discarded_objects:
                    continue
                self._import_object(obj)

        self.report.pk_map = self.__instance_map
        return self.report

    def _import_object(self, obj: ObjectData):
        assert obj.fields is not None
        model_cls = ID.model_for_kind(obj.id.kind)
        model_meta = get_model_options(model_cls)

        fields = {}
        many_to_many = {}
        for key, value in obj.fields.items():
            if not isinstance(value, Ref):
                fields[key] = value
                continue

            targets = [id for id in value.ids if id not in self.__discarded_objects]
            if value.many:
                many_to_many[key] = [self.__instance_map[id] for id in targets]
            elif not targets:
                self._discard_objects([obj], reason=f'due to a broken reference via {key}')
                return
            else:
                fields[key] = self.__instance_map[targets[0]]

        fields.pop(model_meta.pk.name, None)

        instance = None
        lookup_fields = LINK_BY_FIELDS.get(model_cls)
        if lookup_fields:
            instance = model_cls.objects.filter(**{k: fields.get(k) for k in lookup_fields}).first()

        if instance is not None:
            logger.debug(f'Linked {obj.id} to existing {instance.pk}')
            self.report.linked_objects.add(instance)
        else:
            instance = model_cls.objects.create(**fields)
            for key, values in many_to_many.items():
                getattr(instance, key).set(values)
            logger.debug(f'Imported {obj.id} as {instance.pk}')
            self.report.imported_objects.add(instance)

        self.__instance_map[obj.id] = instance

    def __group_by_kind(self, objects: Iterable[ObjectData]) -> Dict[str, List[ObjectData]]:
        kind_map: Dict[str, List[ObjectData]] = {}
        for obj in objects:
            kind_map.setdefault(obj.id.kind, []).append(obj)
        return kind_map
