from datetime import datetime
from typing import Optional
import uuid
from pydantic import BaseModel, Field

from reclaim.models.claim import Claim, ClaimStatus, Decision
from reclaim.models.found_item import FoundItem
from reclaim.models.lost_item import LostItem
from reclaim.models.user import User
from reclaim.schemas.item_schemas import FoundItemPublic, FoundItemWithContact, LostItemPublic


class ClaimCreateRequest(BaseModel):
    found_item_id: uuid.UUID
    lost_item_id: Optional[uuid.UUID] = None
    answer: str = Field(min_length=1, max_length=500)


class ClaimRespondRequest(BaseModel):
    decision: Decision


class ClaimRead(BaseModel):
    id: uuid.UUID
    found_item_id: uuid.UUID
    lost_item_id: Optional[uuid.UUID] = None
    claimant_id: int
    answer: str
    status: ClaimStatus
    created_at: datetime
    decided_at: Optional[datetime] = None


def claim_read(claim: Claim) -> dict:
    return ClaimRead.model_validate(claim, from_attributes=True).model_dump(mode="json")


def _lost_item_summary(lost_item: Optional[LostItem]) -> Optional[dict]:
    if lost_item is None:
        return None

    return LostItemPublic.model_validate(lost_item, from_attributes=True).model_dump(mode="json")


def submitted_claim_view(claim: Claim, found_item: FoundItem, lost_item: Optional[LostItem] = None) -> dict:
    # Finder contact details only once the claim has been accepted
    item_schema = FoundItemWithContact if claim.status == ClaimStatus.accepted else FoundItemPublic

    data = claim_read(claim)
    data["found_item"] = item_schema.model_validate(found_item, from_attributes=True).model_dump(mode="json")
    data["lost_item"] = _lost_item_summary(lost_item)

    return data


def received_claim_view(
    claim: Claim,
    found_item: FoundItem,
    claimant: User,
    lost_item: Optional[LostItem] = None,
) -> dict:
    data = claim_read(claim)
    data["found_item"] = FoundItemPublic.model_validate(found_item, from_attributes=True).model_dump(mode="json")
    data["claimant"] = {
        "public_id": claimant.public_id,
        "name": claimant.name,
        "email": claimant.email,
    }
    data["lost_item"] = _lost_item_summary(lost_item)

    return data


def claims_for_user_view(claims: dict) -> dict:
    return {
        "submitted": [
            submitted_claim_view(claim, item, lost_item)
            for claim, item, _, lost_item in claims["submitted"]
        ],
        "received": [
            received_claim_view(claim, item, claimant, lost_item)
            for claim, item, claimant, lost_item in claims["received"]
        ],
    }
