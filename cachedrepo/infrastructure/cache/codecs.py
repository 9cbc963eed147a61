"""Entity codecs: convert entities to and from what a cache backend stores.

In-process caches hold entity objects (PassthroughCodec); Redis stores JSON,
so entities go through a dict form (PydanticCodec, OrmCodec).
"""

from __future__ import annotations

import enum
import uuid
from collections.abc import Callable
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Protocol

from pydantic import BaseModel
from sqlalchemy import inspect as sa_inspect


class EntityCodec[EntityT](Protocol):
    """Two-way mapping between an entity and its cached form."""

    def dump(self, entity: EntityT) -> Any:
        """Return the cacheable form of entity."""
        ...

    def load(self, data: Any) -> EntityT:
        """Rebuild an entity from its cached form."""
        ...


class PassthroughCodec[EntityT]:
    """Caches entity objects as-is (for caches that keep Python objects)."""

    def dump(self, entity: EntityT) -> Any:
        return entity

    def load(self, data: Any) -> EntityT:
        return data


class PydanticCodec[ModelT: BaseModel]:
    """JSON-safe dict via model_dump(mode='json'); rebuilt with model_validate."""

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    def dump(self, entity: ModelT) -> dict[str, Any]:
        return entity.model_dump(mode="json")

    def load(self, data: Any) -> ModelT:
        return self.model.model_validate(data)


def _parser_for(python_type: type) -> Callable[[Any], Any] | None:
    """Return the callable that rebuilds a column value from its JSON form."""
    if issubclass(python_type, enum.Enum):
        return python_type
    if python_type in (datetime, date, time):
        return python_type.fromisoformat
    if python_type in (uuid.UUID, Decimal):
        return python_type
    return None


def _to_json_value(value: Any) -> Any:
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (uuid.UUID, Decimal)):
        return str(value)
    return value


class OrmCodec[ModelT]:
    """Column dict for SQLAlchemy models, safe to store as JSON.

    Datetimes, dates and times round-trip as ISO-8601 strings, UUID and
    Decimal columns as strings, and enum columns as their values. Loaded
    instances are transient (not attached to any session).
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model
        mapper = sa_inspect(model)
        self._columns = [attr.key for attr in mapper.column_attrs]
        self._parsers: dict[str, tuple[type, Callable[[Any], Any]]] = {}
        for attr in mapper.column_attrs:
            try:
                python_type = attr.columns[0].type.python_type
            except NotImplementedError:
                continue
            parse = _parser_for(python_type)
            if parse is not None:
                self._parsers[attr.key] = (python_type, parse)

    def dump(self, entity: ModelT) -> dict[str, Any]:
        return {name: _to_json_value(getattr(entity, name)) for name in self._columns}

    def load(self, data: Any) -> ModelT:
        values = dict(data)
        for name, (python_type, parse) in self._parsers.items():
            value = values.get(name)
            if value is not None and not isinstance(value, python_type):
                values[name] = parse(value)
        return self.model(**values)
