from typing import List, Literal, Optional
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select, func
from sqlalchemy.orm import aliased
from pydantic import BaseModel

from reclaim.db.db import get_session
from reclaim.models.claim import Claim, ClaimStatus
from reclaim.models.found_item import FoundItem
from reclaim.models.lost_item import LostItem
from reclaim.models.successful_return import SuccessfulReturn
from reclaim.models.user import User
from reclaim.schemas.item_schemas import FoundItemWithContact, LostItemWithContact
from reclaim.utils.auth_helper import get_current_user_required, get_db_user

router = APIRouter()


# Response Models
class OverviewStats(BaseModel):
    total_users: int
    total_found_items: int
    claims_pending: int
    successful_returns: int
    items_with_pending_claims: int
    unclaimed_found_items: int


class UserDetail(BaseModel):
    id: int
    public_id: str
    name: str
    email: str
    phone: Optional[str]
    role: str
    created_at: datetime


class ClaimDetail(BaseModel):
    id: str
    status: str
    answer: str
    created_at: datetime
    decided_at: Optional[datetime]
    found_item_id: str
    found_item_title: str
    lost_item_id: Optional[str]
    finder_name: str
    finder_id: str
    claimant_name: str
    claimant_id: str
    claimant_email: str


class ReturnDetail(BaseModel):
    id: str
    claim_id: str
    found_item_id: str
    found_item_title: str
    lost_item_id: Optional[str]
    lost_item_title: Optional[str]
    return_date: datetime


def require_admin(
    session: Session = Depends(get_session),
    current_user=Depends(get_current_user_required),
):
    user = get_db_user(session, current_user)

    if user.role != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


@router.get("/stats", response_model=OverviewStats)
def get_overview_stats(
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    """Get overview statistics for the admin dashboard"""
    total_users = session.exec(select(func.count(User.id))).one()

    total_found_items = session.exec(select(func.count(FoundItem.id))).one()

    claims_pending = session.exec(
        select(func.count(Claim.id)).where(Claim.status == ClaimStatus.pending)
    ).one()

    successful_returns = session.exec(select(func.count(SuccessfulReturn.id))).one()

    # Distinct found items with at least one pending claim
    items_with_pending_claims = session.exec(
        select(func.count(func.distinct(Claim.found_item_id))).where(Claim.status == ClaimStatus.pending)
    ).one()

    unclaimed_found_items = session.exec(
        select(func.count(FoundItem.id)).where(FoundItem.is_claimed == False)  # noqa: E712
    ).one()

    return OverviewStats(
        total_users=total_users,
        total_found_items=total_found_items,
        claims_pending=claims_pending,
        successful_returns=successful_returns,
        items_with_pending_claims=items_with_pending_claims,
        unclaimed_found_items=unclaimed_found_items,
    )


@router.get("/users", response_model=List[UserDetail])
def get_users(
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    users = session.exec(select(User).order_by(User.created_at.desc())).all()

    return [UserDetail.model_validate(user, from_attributes=True) for user in users]


@router.get("/items/found")
def get_all_found_items(
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    # Claimed ones included, unlike the public listing
    items = session.exec(select(FoundItem).order_by(FoundItem.created_at.desc())).all()

    return {
        "items": [
            FoundItemWithContact.model_validate(item, from_attributes=True).model_dump(mode="json")
            for item in items
        ]
    }


@router.get("/items/lost")
def get_all_lost_items(
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    items = session.exec(select(LostItem).order_by(LostItem.created_at.desc())).all()

    return {
        "items": [
            LostItemWithContact.model_validate(item, from_attributes=True).model_dump(mode="json")
            for item in items
        ]
    }


@router.get("/claims", response_model=List[ClaimDetail])
def get_all_claims(
    status: Optional[Literal["pending", "accepted", "rejected"]] = None,
    limit: int = Query(50, ge=1, le=200),
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    """Read-only; claims are decided by the finder only."""

    Finder = aliased(User)

    query = (
        select(Claim, FoundItem, User, Finder)
        .join(FoundItem, Claim.found_item_id == FoundItem.id)
        .join(User, Claim.claimant_id == User.id)
        .join(Finder, FoundItem.user_id == Finder.id)
        .order_by(Claim.created_at.desc())
        .limit(limit)
    )

    if status:
        query = query.where(Claim.status == ClaimStatus(status))

    results = session.exec(query).all()

    claims = []

    for claim, item, claimant, finder in results:
        claims.append(ClaimDetail(
            id=str(claim.id),
            status=claim.status.value,
            answer=claim.answer,
            created_at=claim.created_at,
            decided_at=claim.decided_at,
            found_item_id=str(item.id),
            found_item_title=item.title,
            lost_item_id=str(claim.lost_item_id) if claim.lost_item_id else None,
            finder_name=finder.name,
            finder_id=finder.public_id,
            claimant_name=claimant.name,
            claimant_id=claimant.public_id,
            claimant_email=claimant.email,
        ))

    return claims


@router.get("/returns", response_model=List[ReturnDetail])
def get_all_returns(
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    results = session.exec(
        select(SuccessfulReturn, FoundItem, LostItem)
        .join(FoundItem, SuccessfulReturn.found_item_id == FoundItem.id)
        .outerjoin(LostItem, SuccessfulReturn.lost_item_id == LostItem.id)
        .order_by(SuccessfulReturn.return_date.desc())
    ).all()

    return [
        ReturnDetail(
            id=str(record.id),
            claim_id=str(record.claim_id),
            found_item_id=str(found.id),
            found_item_title=found.title,
            lost_item_id=str(lost.id) if lost else None,
            lost_item_title=lost.title if lost else None,
            return_date=record.return_date,
        )
        for record, found, lost in results
    ]
