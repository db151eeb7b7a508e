"""
Shared mapping between domain entities and database models.
"""

from enum import Enum
from typing import Any, Dict, Generic, Tuple, Type, TypeVar

E = TypeVar("E")
M = TypeVar("M")

ENTITY_FIELDS = ("id", "created_at", "updated_at")


class ColumnMapper(Generic[E, M]):
    """
    Copies a fixed list of attributes between an entity and a model.
    Enum values are stored by value.
    """

    entity_class: Type[E]
    model_class: Type[M]
    fields: Tuple[str, ...] = ()

    def _column_values(self, entity: E) -> Dict[str, Any]:
        values = {}
        for name in ENTITY_FIELDS + self.fields:
            value = getattr(entity, name)
            values[name] = value.value if isinstance(value, Enum) else value
        return values

    def domain_to_model(self, entity: E) -> M:
        """Convert a domain entity to a new database model."""
        return self.model_class(**self._column_values(entity))

    def update_model(self, model: M, entity: E) -> M:
        """Copy entity values onto an already persisted model."""
        for name, value in self._column_values(entity).items():
            if name != "id":
                setattr(model, name, value)
        return model

    def model_to_domain(self, model: M) -> E:
        """Convert a database model to a domain entity."""
        return self.entity_class(**{
            name: getattr(model, name) for name in ENTITY_FIELDS + self.fields
        })
