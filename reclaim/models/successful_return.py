from typing import Optional
import uuid
from sqlmodel import Field, SQLModel
from datetime import datetime, timezone


class SuccessfulReturn(SQLModel, table=True):
    __tablename__ = "successful_returns"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    # Linked reports
    claim_id: uuid.UUID = Field(foreign_key="claims.id", unique=True)
    found_item_id: uuid.UUID = Field(foreign_key="found_items.id", unique=True)
    lost_item_id: Optional[uuid.UUID] = Field(default=None, foreign_key="lost_items.id", index=True)

    return_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
