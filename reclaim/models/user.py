from typing import Optional
from sqlmodel import Field, SQLModel
from datetime import datetime, timezone


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    public_id: str = Field(index=True, unique=True)
    google_id: Optional[str] = Field(default=None, index=True, unique=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # User fields
    name: str
    email: str
    phone: Optional[str] = Field(default=None)
    image: Optional[str] = Field(default=None)

    role: str = Field(default="user")  # Possible roles: user, admin
