from typing import Optional
import uuid
from sqlmodel import Field, SQLModel
from datetime import datetime, timezone


class LostItem(SQLModel, table=True):
    __tablename__ = "lost_items"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Owner info
    user_id: int = Field(foreign_key="users.id", index=True)

    # Item fields
    title: str
    category: str = Field(index=True)
    description: str
    location: str
    date: datetime  # when it was lost
    image: Optional[str] = Field(default=None)
    reward: Optional[str] = Field(default=None)

    contact_email: str
    contact_phone: str

    is_claimed: bool = Field(default=False, index=True)
