from sqlmodel import SQLModel, Field


class LookupBase(SQLModel):
    name: str


class QuestionTypeRecord(LookupBase, table=True):
    __tablename__ = "question_types"

    id: str = Field(primary_key=True)


class DifficultyLevelRecord(LookupBase, table=True):
    __tablename__ = "difficulty_levels"

    id: str = Field(primary_key=True)


class LookupRead(LookupBase):
    id: str
