"""SQLAlchemy repository: generic add/find/update/remove over an async session."""

from typing import Any

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import object_session

from cachedrepo.domain.exceptions import PersistentStoreError, ResourceNotFoundException
from cachedrepo.infrastructure.persistence.database import Base


class SqlAlchemyRepository[ModelType: Base]:
    """IRepository over one declarative model keyed by its single primary key.

    Flushes but never commits: the session owner decides the transaction
    boundary. Missing records raise ResourceNotFoundException (so remove is
    not idempotent); other driver errors are wrapped in PersistentStoreError.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model
        pk_columns = sa_inspect(model).primary_key
        if len(pk_columns) != 1:
            raise ValueError(
                f"{model.__name__} must have exactly one primary key column, "
                f"found {len(pk_columns)}"
            )
        self._pk_name = pk_columns[0].key

    def _key_of(self, obj: ModelType) -> Any:
        return getattr(obj, self._pk_name)

    async def add(self, entity: ModelType) -> ModelType:
        """Persist a new record; return it refreshed with generated key and defaults."""
        try:
            self.db.add(entity)
            await self.db.flush()
            await self.db.refresh(entity)
        except SQLAlchemyError as e:
            raise PersistentStoreError("add", str(e)) from e
        return entity

    async def find(self, key: Any) -> ModelType | None:
        """Return a single record by primary key, or None."""
        try:
            return await self.db.get(self.model, key)
        except SQLAlchemyError as e:
            raise PersistentStoreError("find", str(e)) from e

    async def update(self, entity: ModelType) -> ModelType:
        """Update an existing record (merge if detached).

        Verifies the record exists by primary key before merging; raises
        ValueError when the key is missing and ResourceNotFoundException when
        no row is found. Objects already attached to this session skip the
        existence check.
        """
        key = self._key_of(entity)
        if key is None:
            raise ValueError(
                f"Cannot update: primary key '{self._pk_name}' is missing on "
                f"{self.model.__name__} instance."
            )
        try:
            if object_session(entity) is not self.db.sync_session:
                if await self.db.get(self.model, key) is None:
                    raise ResourceNotFoundException(self.model.__name__, str(key))
                entity = await self.db.merge(entity)
            await self.db.flush()
            await self.db.refresh(entity)
        except SQLAlchemyError as e:
            raise PersistentStoreError("update", str(e)) from e
        return entity

    async def remove(self, key: Any) -> None:
        """Delete the record with the given key; raise ResourceNotFoundException if absent."""
        try:
            obj = await self.db.get(self.model, key)
            if obj is None:
                raise ResourceNotFoundException(self.model.__name__, str(key))
            await self.db.delete(obj)
            await self.db.flush()
        except SQLAlchemyError as e:
            raise PersistentStoreError("remove", str(e)) from e
