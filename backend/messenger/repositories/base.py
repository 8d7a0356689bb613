"""
Generic repository with the save and paging operations shared by all stores.
"""
from typing import Generic, List, Tuple, Type, TypeVar
from sqlalchemy.orm import Query, Session
from messenger.db.base import BaseModel

T = TypeVar("T", bound=BaseModel)


class SqlAlchemyRepository(Generic[T]):
    def __init__(self, session: Session, model_cls: Type[T]):
        self.session = session
        self.model_cls = model_cls

    def save(self, entity: T) -> T:
        """Add, commit and refresh the entity."""
        self.session.add(entity)
        self.session.commit()
        self.session.refresh(entity)
        return entity

    def paginate(self, query: Query, page: int, size: int) -> Tuple[List[T], int]:
        """Return one slice of ``query`` in natural (id) order plus the total match count."""
        total = query.order_by(None).count()
        items = (
            query.order_by(self.model_cls.id)
            .offset(page * size)
            .limit(size)
            .all()
        )
        return items, total
