from typing import Optional
import uuid
from sqlmodel import Field, SQLModel
from datetime import datetime, timezone


class FoundItem(SQLModel, table=True):
    __tablename__ = "found_items"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Finder info
    user_id: int = Field(foreign_key="users.id", index=True)

    # Item fields
    title: str
    category: str = Field(index=True)
    description: str
    location: str
    date: datetime  # when it was found
    image: Optional[str] = Field(default=None)

    # Only revealed to a claimant whose claim was accepted
    contact_email: str
    contact_phone: str

    # Prompt the claimant has to answer
    security_question: str

    # Flipped only by the resolution coordinator
    is_claimed: bool = Field(default=False, index=True)
