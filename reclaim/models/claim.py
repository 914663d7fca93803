from enum import Enum
from typing import Optional
import uuid
from sqlalchemy import Index, text
from sqlmodel import Field, SQLModel
from datetime import datetime, timezone


class ClaimStatus(str, Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"


class Decision(str, Enum):
    accept = "accept"
    reject = "reject"


class Claim(SQLModel, table=True):
    __tablename__ = "claims"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Claimant
    claimant_id: int = Field(foreign_key="users.id", index=True)

    # Linked reports
    found_item_id: uuid.UUID = Field(foreign_key="found_items.id", index=True)
    lost_item_id: Optional[uuid.UUID] = Field(default=None, foreign_key="lost_items.id", index=True)

    status: ClaimStatus = Field(default=ClaimStatus.pending, index=True)

    # Claimant's answer to the found item's security question
    answer: str

    decided_at: Optional[datetime] = None

    __table_args__ = (
        # One pending claim per claimant and item
        Index(
            "uq_claims_pending_claimant_item",
            "found_item_id",
            "claimant_id",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
        # One accepted claim per item
        Index(
            "uq_claims_accepted_item",
            "found_item_id",
            unique=True,
            sqlite_where=text("status = 'accepted'"),
            postgresql_where=text("status = 'accepted'"),
        ),
    )
