from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from interview_questions.dao.base_dao import BaseDAO
from interview_questions.models.job_description import JobDescription


class JobDescriptionDAO(BaseDAO[JobDescription]):
    def __init__(self):
        super().__init__(JobDescription)

    async def get_all(self, db: AsyncSession) -> List[JobDescription]:
        return await self.list_where(db, order_by=JobDescription.created_at)


job_description_dao = JobDescriptionDAO()
