from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def created_at_field():
    """Timezone-aware creation timestamp, set on construction."""
    return Field(default_factory=utc_now, sa_type=DateTime(timezone=True), nullable=False)
