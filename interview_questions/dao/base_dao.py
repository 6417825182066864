from typing import Any, Generic, TypeVar, Type, Optional, List
from sqlmodel import SQLModel, select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

logger = structlog.get_logger()

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseDAO(Generic[ModelType]):
    """Row access shared by every table keyed by a string ``id``."""

    def __init__(self, model: Type[ModelType]):
        self.model = model

    @property
    def table(self) -> str:
        return self.model.__tablename__

    async def create(self, db: AsyncSession, *, obj_in: dict) -> ModelType:
        """Insert one row and commit. Integrity errors propagate after rollback."""
        db_obj = self.model(**obj_in)
        db.add(db_obj)
        try:
            await db.commit()
        except Exception as e:
            await db.rollback()
            logger.error("Insert failed", table=self.table, error_type=type(e).__name__, error=str(e))
            raise
        await db.refresh(db_obj)
        logger.info("Row inserted", table=self.table, id=db_obj.id)
        return db_obj

    async def get_by_id(self, db: AsyncSession, id: str) -> Optional[ModelType]:
        try:
            return await db.get(self.model, id)
        except Exception as e:
            logger.error("Lookup by id failed", table=self.table, id=id, error=str(e))
            raise

    async def exists(self, db: AsyncSession, id: str) -> bool:
        result = await db.execute(select(self.model.id).where(self.model.id == id))
        return result.first() is not None

    async def list_where(
        self, db: AsyncSession, *criteria: Any, order_by: Any = None, limit: Optional[int] = None
    ) -> List[ModelType]:
        """Rows matching every criterion, ordered by ``order_by`` (or ``created_at``)."""
        statement = select(self.model)
        if criteria:
            statement = statement.where(*criteria)
        statement = statement.order_by(order_by if order_by is not None else self.model.created_at)
        if limit is not None:
            statement = statement.limit(limit)
        try:
            result = await db.execute(statement)
            return list(result.scalars().all())
        except Exception as e:
            logger.error("Listing failed", table=self.table, error=str(e))
            raise
