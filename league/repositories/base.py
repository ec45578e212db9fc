"""
Base repository class with common CRUD operations.

Provides a foundation for all repository classes with:
- Common query methods (get, get_many, get_all)
- Lookups by a named foreign key (``get_by_foreign_key('team', 3)``)
- Flushing writes so store-level constraint failures surface here
"""

from typing import Generic, Iterable, List, Optional, Tuple, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from league import db

T = TypeVar('T')

# Primary keys are signed 64-bit integers in every supported store
MAX_ID = 2 ** 63 - 1


def storable_id(value: int) -> bool:
    """True when ``value`` fits a primary key column."""
    return -MAX_ID - 1 <= value <= MAX_ID


class RepositoryError(Exception):
    """Base class for failures reported by the persistence layer."""


class RecordNotFound(RepositoryError):
    """No row with the requested primary key."""


class ConstraintViolation(RepositoryError):
    """The store rejected a write (unique, not-null or foreign key)."""


class BaseRepository(Generic[T]):
    """Base repository providing common data access operations.

    Attributes:
        model: The SQLAlchemy model class this repository manages.
        foreign_keys: Kinds accepted by ``get_by_foreign_key``; each kind
            maps to a ``get_by_<kind>`` method on the subclass.
    """

    foreign_keys: Tuple[str, ...] = ()

    def __init__(self, model: Type[T]):
        """Initialize repository with a model class.

        Args:
            model: SQLAlchemy model class.
        """
        self.model = model

    def get(self, id: int) -> Optional[T]:
        """Get a single entity by ID.

        Args:
            id: Primary key value.

        Returns:
            Entity instance or None if not found.
        """
        if not storable_id(id):
            return None
        return db.session.get(self.model, id)

    def get_or_raise(self, id: int) -> T:
        """Get a single entity by ID.

        Raises:
            RecordNotFound: If no entity has this ID.
        """
        instance = self.get(id)
        if instance is None:
            raise RecordNotFound(f'{self.model.__name__} {id} not found')
        return instance

    def get_many(self, ids: Iterable[int]) -> List[T]:
        """Get the entities whose IDs are in ``ids``; unknown IDs are skipped."""
        ids = [i for i in ids if storable_id(i)]
        if not ids:
            return []
        return db.session.execute(
            select(self.model).where(self.model.id.in_(ids))
        ).scalars().all()

    def get_all(self) -> List[T]:
        """Get all entities ordered by ID.

        Returns:
            List of all entity instances.
        """
        return db.session.execute(
            select(self.model).order_by(self.model.id)
        ).scalars().all()

    def get_by_foreign_key(self, kind: str, id: int) -> List[T]:
        """Get entities related to another entity.

        Args:
            kind: Name of the related entity, e.g. 'team' or 'user'.
            id: Primary key of the related entity.

        Raises:
            ValueError: If this repository has no lookup for ``kind``.
        """
        if kind not in self.foreign_keys:
            raise ValueError(f'{self.model.__name__} has no lookup by {kind}')
        if not storable_id(id):
            return []
        return getattr(self, f'get_by_{kind}')(id)

    def create(self, **kwargs) -> T:
        """Create a new entity and flush it so its ID is assigned.

        Args:
            **kwargs: Entity attributes.

        Returns:
            Created entity instance (not yet committed).

        Raises:
            ConstraintViolation: If the store rejects the row.
        """
        instance = self.model(**kwargs)
        db.session.add(instance)
        self._flush()
        return instance

    def update(self, instance: T, **kwargs) -> T:
        """Apply attribute changes to an entity and flush them.

        Raises:
            ConstraintViolation: If the store rejects the change.
        """
        for key, value in kwargs.items():
            setattr(instance, key, value)
        self._flush()
        return instance

    def delete(self, instance: T) -> None:
        """Hard delete an entity.

        Raises:
            ConstraintViolation: If other rows still reference it.
        """
        db.session.delete(instance)
        self._flush()

    def _flush(self) -> None:
        try:
            db.session.flush()
        except IntegrityError as e:
            raise ConstraintViolation(str(e.orig)) from e
