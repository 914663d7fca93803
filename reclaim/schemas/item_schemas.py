from datetime import datetime
from typing import Literal, Optional
import uuid
from pydantic import BaseModel, Field, field_validator

from reclaim.models.found_item import FoundItem
from reclaim.models.lost_item import LostItem

CategoryType = Literal["electronics", "clothing", "bags", "keys-wallets", "documents", "others"]


class _ItemCreateBase(BaseModel):
    title: str = Field(min_length=3, max_length=60)
    description: str = Field(min_length=10, max_length=500)
    category: CategoryType
    location: str = Field(min_length=3, max_length=60)
    date: datetime
    contact_email: str = Field(min_length=3, max_length=120)
    contact_phone: str = Field(min_length=5, max_length=20)

    @field_validator("title", "description", "location", "contact_email", "contact_phone", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class FoundItemCreateSchema(_ItemCreateBase):
    security_question: str = Field(min_length=5, max_length=200)


class LostItemCreateSchema(_ItemCreateBase):
    reward: Optional[str] = Field(None, max_length=60)


class LostItemStatusSchema(BaseModel):
    is_claimed: bool


class FoundItemPublic(BaseModel):
    """Found item as anybody may see it: no finder contact details."""

    id: uuid.UUID
    user_id: int
    title: str
    category: str
    description: str
    location: str
    date: datetime
    image: Optional[str] = None
    security_question: str
    is_claimed: bool
    created_at: datetime


class FoundItemWithContact(FoundItemPublic):
    contact_email: str
    contact_phone: str


class LostItemPublic(BaseModel):
    id: uuid.UUID
    user_id: int
    title: str
    category: str
    description: str
    location: str
    date: datetime
    image: Optional[str] = None
    reward: Optional[str] = None
    is_claimed: bool
    created_at: datetime


class LostItemWithContact(LostItemPublic):
    contact_email: str
    contact_phone: str


def found_item_view(item: FoundItem, viewer_id: Optional[int] = None) -> dict:
    # The finder sees their own contact details; claimants get them through an accepted claim
    schema = FoundItemWithContact if viewer_id == item.user_id else FoundItemPublic
    return schema.model_validate(item, from_attributes=True).model_dump(mode="json")


def lost_item_view(item: LostItem, viewer_id: Optional[int] = None) -> dict:
    # Owners see their own contact details, everybody else gets the public view
    schema = LostItemWithContact if viewer_id == item.user_id else LostItemPublic
    return schema.model_validate(item, from_attributes=True).model_dump(mode="json")
