import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select, update

from reclaim.models.claim import Claim, ClaimStatus
from reclaim.models.found_item import FoundItem
from reclaim.models.lost_item import LostItem
from reclaim.models.user import User
from reclaim.services.item_registry import ItemRegistry
from reclaim.utils.errors import Conflict, Forbidden, NotFound

logger = logging.getLogger(__name__)

ClaimRow = Tuple[Claim, FoundItem, User, Optional[LostItem]]


class ClaimLedger:
    """
    Claims and their state machine: pending -> accepted | rejected.

    Decided claims are never written again.
    """

    def __init__(self, session: Session, registry: Optional[ItemRegistry] = None):
        self.session = session
        self.registry = registry or ItemRegistry(session)

    def create_claim(
        self,
        found_item_id: uuid.UUID,
        claimant_id: int,
        lost_item_id: Optional[uuid.UUID],
        answer: str,
    ) -> Claim:
        # A self-claim is Forbidden whatever the item state
        found_item = self.session.get(FoundItem, found_item_id)
        if found_item and found_item.user_id == claimant_id:
            raise Forbidden("Cannot claim your own item")

        if not found_item or found_item.is_claimed:
            raise Conflict("Item not available for claiming")

        existing = self.session.exec(
            select(Claim)
            .where(Claim.found_item_id == found_item_id)
            .where(Claim.claimant_id == claimant_id)
            .where(Claim.status == ClaimStatus.pending)
        ).first()

        if existing:
            raise Conflict("You already have a pending claim for this item")

        if lost_item_id is not None:
            lost_item = self.registry.get_lost_item(lost_item_id)
            if lost_item.user_id != claimant_id:
                raise Forbidden("Cannot link someone else's lost item")

        claim = Claim(
            found_item_id=found_item_id,
            claimant_id=claimant_id,
            lost_item_id=lost_item_id,
            answer=answer,
        )

        self.session.add(claim)

        try:
            self.session.flush()
        except IntegrityError:
            # A concurrent submission by the same claimant won the unique index
            self.session.rollback()
            raise Conflict("You already have a pending claim for this item")

        return claim

    def get_claim(self, claim_id: uuid.UUID) -> Claim:
        claim = self.session.get(Claim, claim_id)
        if not claim:
            raise NotFound("Claim not found")

        return claim

    def try_transition(
        self,
        claim_id: uuid.UUID,
        to_status: ClaimStatus,
        from_status: ClaimStatus = ClaimStatus.pending,
    ) -> bool:
        """
        Compare-and-swap on ``Claim.status``.

        Succeeds only if the claim is still in ``from_status``.
        """
        result = self.session.exec(
            update(Claim)
            .where(Claim.id == claim_id)
            .where(Claim.status == from_status)
            .values(status=to_status, decided_at=datetime.now(timezone.utc))
        )

        return result.rowcount == 1

    def claims_for_user(self, user_id: int) -> Tuple[List[ClaimRow], List[ClaimRow]]:
        """
        Claims the user submitted and claims received on items they found.

        Each row is (claim, found item, claimant, linked lost item or None).
        """
        base = (
            select(Claim, FoundItem, User, LostItem)
            .join(FoundItem, Claim.found_item_id == FoundItem.id)
            .join(User, Claim.claimant_id == User.id)
            .outerjoin(LostItem, Claim.lost_item_id == LostItem.id)
            .order_by(Claim.created_at.desc())
        )

        submitted = self.session.exec(base.where(Claim.claimant_id == user_id)).all()
        received = self.session.exec(base.where(FoundItem.user_id == user_id)).all()

        return list(submitted), list(received)
