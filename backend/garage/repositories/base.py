"""Base repository with the CRUD patterns every table shares.

Subclasses set ``model_class`` and ``response_class``; the base converts
between schema field names and ORM attributes and turns rows into the
pydantic records the storage interface returns.

Repositories only flush. The caller owns the session and commits.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import inspect
from sqlalchemy.orm import Query, Session

from ..database import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Shared repository logic for SQLAlchemy models.

    Class variables to set in subclasses:
        model_class:     The SQLAlchemy model (e.g., Toolkit)
        response_class:  Pydantic record built from a row
        renamed_fields:  schema field -> ORM attribute, where they differ
    """

    model_class: Type[ModelT]
    response_class: Type[BaseModel]
    renamed_fields: Dict[str, str] = {}

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self) -> Query:
        return self.db.query(self.model_class)

    def get_by_id_optional(self, entity_id: int) -> Optional[ModelT]:
        """Get entity by primary key, or None if not found."""
        return self._base_query().filter(self.model_class.id == entity_id).first()

    def filter_by(self, **criteria) -> List[ModelT]:
        """Rows matching every keyword on equality, oldest first."""
        return (
            self._base_query()
            .filter_by(**self._to_columns(criteria))
            .order_by(self.model_class.id)
            .all()
        )

    def count(self) -> int:
        return self._base_query().count()

    def add(self, values: dict) -> ModelT:
        row = self.model_class(**self._to_columns(values))
        self.db.add(row)
        self.db.flush()
        return row

    def update(self, entity_id: int, changes: dict) -> Optional[ModelT]:
        """Apply ``changes`` to the row. Returns None if it doesn't exist."""
        row = self.get_by_id_optional(entity_id)
        if row is None:
            return None
        for attr, value in self._to_columns(changes).items():
            setattr(row, attr, value)
        self.db.flush()
        return row

    def delete(self, entity_id: int) -> bool:
        row = self.get_by_id_optional(entity_id)
        if row is None:
            return False
        self.db.delete(row)
        self.db.flush()
        return True

    def to_response(self, row: ModelT) -> BaseModel:
        """Build the pydantic record for ``row``."""
        columns = {attr.key: getattr(row, attr.key) for attr in inspect(row).mapper.column_attrs}
        values = {}
        for field, attr in self._field_to_attr(columns).items():
            value = columns[attr]
            # SQLite hands back naive datetimes; everything is stored as UTC.
            if isinstance(value, datetime) and value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            values[field] = value
        return self.response_class.model_validate(values)

    def _to_columns(self, values: dict) -> dict:
        columns = {}
        for field, value in values.items():
            if isinstance(value, Enum):
                value = value.value
            columns[self.renamed_fields.get(field, field)] = value
        return columns

    def _field_to_attr(self, columns: dict) -> Dict[str, str]:
        by_attr = {attr: field for field, attr in self.renamed_fields.items()}
        return {by_attr.get(attr, attr): attr for attr in columns}
