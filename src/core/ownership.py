"""
Owner-scoped persistence shared by every owned resource kind.

Every read and write folds the ownership predicate (``id`` and ``created_by``)
into the statement itself, so a record owned by someone else is indistinguishable
from one that does not exist.
"""
import logging
from typing import Any, Dict, Generic, List, Type, TypeVar
from sqlalchemy import Column, ForeignKey, Integer, delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import declared_attr

from ..exceptions import ResourceNotFoundException, StorageFailureException

# Set up logging
logger = logging.getLogger(__name__)

class OwnedMixin:
    """Adds the immutable owner column to a model."""

    @declared_attr
    def created_by(cls):
        return Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)


ModelT = TypeVar("ModelT", bound=OwnedMixin)

# Columns an update payload may never touch
PROTECTED_FIELDS = frozenset({"id", "created_by", "created_at", "updated_at"})


class OwnershipPolicy(Generic[ModelT]):
    """
    Create, list, get, update and delete records scoped to their creator.
    
    Attributes:
        model: Mapped class carrying ``id`` and ``created_by``
        resource_name: Name used in not-found messages and logs
    """
    def __init__(self, model: Type[ModelT], resource_name: str):
        self.model = model
        self.resource_name = resource_name

    def _not_found(self) -> ResourceNotFoundException:
        return ResourceNotFoundException(f"{self.resource_name} not found")

    async def _commit(self, db: AsyncSession, action: str) -> None:
        try:
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error during {self.resource_name} {action}: {str(e)}")
            raise StorageFailureException()

    async def create(self, db: AsyncSession, owner_id: int, data: Dict[str, Any]) -> ModelT:
        """
        Store a new record owned by the caller.
        
        Args:
            db: Database session
            owner_id: ID of the creating identity
            data: Field values for the record
            
        Returns:
            The stored record
        """
        values = {key: value for key, value in data.items() if key not in PROTECTED_FIELDS}
        record = self.model(**values, created_by=owner_id)
        db.add(record)
        await self._commit(db, "create")
        await db.refresh(record)
        logger.info(f"{self.resource_name} {record.id} created by user {owner_id}")
        return record

    async def list(self, db: AsyncSession, owner_id: int) -> List[ModelT]:
        """Return every record the caller owns, oldest first."""
        result = await db.execute(
            select(self.model)
            .where(self.model.created_by == owner_id)
            .order_by(self.model.id)
        )
        return list(result.scalars().all())

    async def get(self, db: AsyncSession, resource_id: int, owner_id: int) -> ModelT:
        """
        Fetch one record owned by the caller.
        
        Raises:
            ResourceNotFoundException: If no record matches both id and owner
        """
        result = await db.execute(
            select(self.model).where(
                self.model.id == resource_id,
                self.model.created_by == owner_id
            )
        )
        record = result.scalar_one_or_none()
        if record is None:
            raise self._not_found()
        return record

    async def update(self, db: AsyncSession, resource_id: int, owner_id: int, changes: Dict[str, Any]) -> ModelT:
        """
        Merge the supplied fields into a record owned by the caller.
        
        Fields that are omitted or null keep their stored value. The ownership
        check and the write happen in a single UPDATE ... RETURNING statement.
        
        Args:
            db: Database session
            resource_id: ID of the record
            owner_id: ID of the calling identity
            changes: Fields to change
            
        Returns:
            The updated record
            
        Raises:
            ResourceNotFoundException: If no record matches both id and owner
        """
        values = {
            key: value for key, value in changes.items()
            if value is not None and key not in PROTECTED_FIELDS
        }
        if not values:
            return await self.get(db, resource_id, owner_id)

        statement = (
            update(self.model)
            .where(
                self.model.id == resource_id,
                self.model.created_by == owner_id
            )
            .values(**values)
            .returning(self.model)
        )
        try:
            result = await db.execute(statement)
            record = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error updating {self.resource_name} {resource_id}: {str(e)}")
            raise StorageFailureException()

        if record is None:
            await db.rollback()
            raise self._not_found()

        await self._commit(db, "update")
        logger.info(f"{self.resource_name} {resource_id} updated by user {owner_id}")
        return record

    async def delete(self, db: AsyncSession, resource_id: int, owner_id: int) -> None:
        """
        Remove a record owned by the caller.
        
        Raises:
            ResourceNotFoundException: If no row was removed
        """
        statement = (
            delete(self.model)
            .where(
                self.model.id == resource_id,
                self.model.created_by == owner_id
            )
            .returning(self.model.id)
        )
        try:
            result = await db.execute(statement)
            deleted_id = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error deleting {self.resource_name} {resource_id}: {str(e)}")
            raise StorageFailureException()

        if deleted_id is None:
            await db.rollback()
            raise self._not_found()

        await self._commit(db, "delete")
        logger.info(f"{self.resource_name} {resource_id} deleted by user {owner_id}")
