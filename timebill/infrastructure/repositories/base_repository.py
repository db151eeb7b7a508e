"""
Shared SQLAlchemy repository behaviour.
"""

from typing import Generic, List, Optional, TypeVar

from sqlalchemy.orm import Session

E = TypeVar("E")


class SQLAlchemyRepository(Generic[E]):
    """save/get/list over one mapped table."""

    model = None
    mapper_class = None

    def __init__(self, session: Session):
        self.session = session
        self.mapper = self.mapper_class()

    def save(self, entity: E) -> E:
        """Insert or update, then return the entity as stored."""
        model = self.session.get(self.model, entity.id)
        if model is None:
            model = self.mapper.domain_to_model(entity)
            self.session.add(model)
        else:
            self.mapper.update_model(model, entity)

        self.session.flush()
        return self.mapper.model_to_domain(model)

    def get_by_id(self, entity_id: str) -> Optional[E]:
        model = self.session.get(self.model, entity_id)
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def _to_domain(self, models) -> List[E]:
        return [self.mapper.model_to_domain(model) for model in models]
