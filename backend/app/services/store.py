"""
Entity store adapter.

Thin get/create/update/delete/query layer over the SQLAlchemy session.
Each mutating call commits its own unit of work, so a failure on one
record never rolls back writes already made for another.
"""

from typing import Any, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from app.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class EntityStore:

    def __init__(self, db: Session):
        self.db = db

    def get(self, model: Type[ModelT], entity_id: str) -> Optional[ModelT]:
        if not entity_id:
            return None
        return self.db.get(model, entity_id)

    def query(self, model: Type[ModelT], **filters: Any) -> List[ModelT]:
        """All records where every `field == value` holds."""
        return self.db.query(model).filter_by(**filters).all()

    def first(self, model: Type[ModelT], **filters: Any) -> Optional[ModelT]:
        return self.db.query(model).filter_by(**filters).first()

    def create(self, model: Type[ModelT], **fields: Any) -> ModelT:
        obj = model(**fields)
        self.db.add(obj)
        self._commit()
        self.db.refresh(obj)
        return obj

    def update(self, obj: ModelT, **fields: Any) -> ModelT:
        for key, value in fields.items():
            setattr(obj, key, value)
        self.db.add(obj)
        self._commit()
        self.db.refresh(obj)
        return obj

    def delete(self, obj: ModelT) -> None:
        self.db.delete(obj)
        self._commit()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
