from dataclasses import dataclass, field, asdict
from django.apps import registry
from django.db.models import Model
from typing import Any, Dict, List, Optional, Set, Type, Union


@dataclass(frozen=True)
class ID:
    '''
    A document reference that survives a dump: the model kind plus the
    primary key the document had in the source database.
    '''
    kind: str
    pk: Any

    yaml_tag = '!ID'

    def __str__(self):
        return f'{self.kind}-{self.pk}'

    @classmethod
    def from_object(cls, obj: Model) -> 'ID':
        return ID(ID.kind_for_model(obj), obj.pk)

    @staticmethod
    def kind_for_model(obj: Union[Model, Type[Model]]):
        return f'{obj._meta.app_label}:{obj._meta.model_name}'

    @staticmethod
    def model_for_kind(kind: str) -> Type[Model]:
        app_label, name, *_ = kind.split(':')
        return registry.apps.get_model(app_label, name)

    @classmethod
    def to_yaml(cls, representer, node):
        return representer.represent_mapping(cls.yaml_tag, asdict(node))

    @classmethod
    def from_yaml(cls, loader, node):
        return ID(**loader.construct_mapping(node, deep=True))


@dataclass(frozen=True)
class Ref:
    ids: List[ID]
    field: str
    many: bool = False


@dataclass
class ObjectData:
    id: ID
    serialized_data: Dict[str, Any]
    fields: Optional[Dict[str, Any]] = None
    refs: List[Ref] = field(default_factory=list)
    refers_to: Set[ID] = field(default_factory=set)

    def add_reference(self, ref: Ref):
        self.refs.append(ref)
        self.refers_to |= set(ref.ids)

    def __hash__(self) -> int:
        return hash(self.id)
