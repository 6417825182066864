from typing import Iterable, List, Tuple
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession
from interview_questions.dao.base_dao import BaseDAO
from interview_questions.models.lookup import QuestionTypeRecord, DifficultyLevelRecord
import structlog

logger = structlog.get_logger()


class LookupDAO(BaseDAO):
    """Read access to a fixed lookup table, plus idempotent seeding."""

    async def get_all(self, db: AsyncSession) -> List:
        try:
            result = await db.execute(select(self.model).order_by(self.model.id))
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Error listing {self.model.__name__}", error=str(e))
            raise

    async def seed(self, db: AsyncSession, rows: Iterable[Tuple[str, str]]) -> int:
        """Insert missing (id, name) rows. Returns the number inserted."""
        try:
            result = await db.execute(select(self.model.id))
            existing = set(result.scalars().all())
            added = 0
            for row_id, name in rows:
                if row_id not in existing:
                    db.add(self.model(id=row_id, name=name))
                    added += 1
            if added:
                await db.commit()
                logger.info(f"Seeded {self.model.__name__}", count=added)
            return added
        except Exception as e:
            await db.rollback()
            logger.error(f"Error seeding {self.model.__name__}", error=str(e))
            raise


question_type_dao = LookupDAO(QuestionTypeRecord)
difficulty_level_dao = LookupDAO(DifficultyLevelRecord)
