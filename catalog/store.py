'''
Async access to the catalog documents.

Views run as coroutines, so every read goes through Django's async query API or
``sync_to_async``. Querysets passed in here should carry all the
``select_related``/``prefetch_related`` calls the templates need: nothing may
hit the database lazily while a page is rendered.
'''

import asyncio
import logging
from asgiref.sync import sync_to_async
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Model, QuerySet
from typing import Any, Awaitable, Dict, Iterable, List, Mapping, Optional, Tuple, Type

from .errors import MalformedReference, NotFound
from ._util import get_model_options


logger = logging.getLogger('catalog.store')


def parse_id(model_cls: Type[Model], raw: Any) -> Any:
    '''
    Casts a raw path or form value to the model's primary key type.
    '''
    try:
        return get_model_options(model_cls).pk.to_python(raw)
    except (ValidationError, TypeError, ValueError):
        logger.warning(f'Malformed {model_cls.__name__} id {raw!r}')
        raise MalformedReference(f'Cast to {model_cls.__name__} id failed for value "{raw}"')


async def find(queryset: QuerySet, pk: Any) -> Optional[Model]:
    return await queryset.filter(pk=pk).afirst()


async def fetch_all(queryset: QuerySet) -> List[Model]:
    return await sync_to_async(list)(queryset)


async def gather(**awaitables: Awaitable) -> Dict[str, Any]:
    '''
    Runs independent reads concurrently and returns their results by name.

    The first failure cancels the remaining reads and is re-raised.
    '''
    tasks = {key: asyncio.ensure_future(aw) for key, aw in awaitables.items()}
    try:
        await asyncio.gather(*tasks.values())
    except BaseException:
        for task in tasks.values():
            task.cancel()
        raise
    return {key: task.result() for key, task in tasks.items()}


async def gather_settled(**awaitables: Awaitable) -> Tuple[Dict[str, Any], Optional[BaseException]]:
    '''
    Like :func:`gather`, but never raises: failed reads come back as ``None``
    and the first failure is returned alongside the results.
    '''
    keys = list(awaitables)
    results = await asyncio.gather(*awaitables.values(), return_exceptions=True)
    error = next((x for x in results if isinstance(x, BaseException)), None)
    data = {
        key: None if isinstance(result, BaseException) else result
        for key, result in zip(keys, results)
    }
    return data, error


def _model_errors(instance: Model, exclude: Optional[Iterable[str]] = None) -> List[str]:
    try:
        instance.full_clean(exclude=exclude)
    except ValidationError as e:
        return [message for messages in e.message_dict.values() for message in messages]
    return []


model_errors = sync_to_async(_model_errors)


def _save(instance: Model, many_to_many: Optional[Mapping[str, List[Any]]] = None) -> Model:
    with transaction.atomic():
        instance.save()
        for field, values in (many_to_many or {}).items():
            getattr(instance, field).set(values)
    return instance


save = sync_to_async(_save)


def _overwrite(model_cls: Type[Model], pk: Any, data: Mapping[str, Any]) -> Model:
    '''
    Replaces the fields of an existing document with the submitted values as-is.
    '''
    instance = model_cls.objects.filter(pk=pk).first()
    if instance is None:
        raise NotFound(f'{model_cls.__name__} not found')

    model_meta = get_model_options(model_cls)
    for field in model_meta.concrete_fields:
        if field.primary_key or field.name not in data:
            continue
        value = data[field.name]
        if value == '' and field.null:
            value = None
        setattr(instance, field.attname, value)

    many_to_many = {}
    for field in model_meta.many_to_many:
        if field.name in data:
            if hasattr(data, 'getlist'):
                many_to_many[field.name] = data.getlist(field.name)
            else:
                many_to_many[field.name] = list(data[field.name] or [])

    logger.debug(f'Overwriting {model_cls.__name__} {pk}')
    return _save(instance, many_to_many)


overwrite = sync_to_async(_overwrite)
