import logging
import uuid
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from reclaim.models.claim import Claim, ClaimStatus, Decision
from reclaim.models.found_item import FoundItem
from reclaim.models.lost_item import LostItem
from reclaim.services.claim_ledger import ClaimLedger
from reclaim.services.item_registry import ItemRegistry
from reclaim.services.return_recorder import ReturnRecorder
from reclaim.utils.errors import Conflict, Forbidden, InternalError, ResolutionError

logger = logging.getLogger(__name__)


class ResolutionCoordinator:
    """
    Entry point for submitting and deciding claims.

    One coordinator wraps one session, and each public call is one
    transaction: it either commits everything it wrote or nothing. No lock is
    held across a call; exclusivity of an accept comes from the conditional
    updates in ItemRegistry and ClaimLedger, so of N concurrent accepts on the
    same found item exactly one succeeds and the rest get a Conflict.
    """

    def __init__(self, session: Session):
        self.session = session
        self.registry = ItemRegistry(session)
        self.ledger = ClaimLedger(session, self.registry)
        self.recorder = ReturnRecorder(session)

    def get_item(self, found_item_id: uuid.UUID) -> FoundItem:
        return self.registry.get_found_item(found_item_id)

    def get_lost_item(self, lost_item_id: uuid.UUID) -> LostItem:
        return self.registry.get_lost_item(lost_item_id)

    def submit_claim(
        self,
        found_item_id: uuid.UUID,
        claimant_id: int,
        lost_item_id: Optional[uuid.UUID],
        answer: str,
    ) -> Claim:
        # Existence only; availability and ownership are decided by the ledger
        self.registry.get_found_item(found_item_id)

        try:
            claim = self.ledger.create_claim(found_item_id, claimant_id, lost_item_id, answer)
            self.session.commit()
        except ResolutionError as e:
            self.session.rollback()
            logger.info("Claim on item %s by user %s refused: %s", found_item_id, claimant_id, e)
            raise

        self.session.refresh(claim)
        logger.info("Claim %s submitted on item %s by user %s", claim.id, found_item_id, claimant_id)

        return claim

    def respond_to_claim(self, claim_id: uuid.UUID, responder_id: int, decision: Decision) -> Claim:
        claim = self.ledger.get_claim(claim_id)
        found_item = self.registry.get_found_item(claim.found_item_id)

        if found_item.user_id != responder_id:
            logger.warning("User %s tried to decide claim %s on an item they did not report", responder_id, claim_id)
            raise Forbidden("Only the item reporter can respond to claims")

        # Advisory; the conditional updates below are what actually guard the transition
        if claim.status != ClaimStatus.pending:
            raise Conflict("Claim already resolved")

        if decision == Decision.reject:
            return self._reject(claim)

        return self._accept(claim, found_item)

    def get_claims_for_user(self, user_id: int) -> dict:
        submitted, received = self.ledger.claims_for_user(user_id)

        return {
            "submitted": submitted,
            "received": received,
        }

    def _reject(self, claim: Claim) -> Claim:
        if not self.ledger.try_transition(claim.id, ClaimStatus.rejected):
            self.session.rollback()
            logger.info("Reject of claim %s lost to a concurrent decision", claim.id)
            raise Conflict("Claim already resolved")

        self.session.commit()
        self.session.refresh(claim)

        logger.info("Claim %s rejected", claim.id)

        return claim

    def _accept(self, claim: Claim, found_item: FoundItem) -> Claim:
        claim_id = claim.id
        found_item_id = found_item.id
        lost_item_id = claim.lost_item_id

        # Reserve the item; whoever flips the flag first wins
        if not self.registry.try_mark_claimed(found_item_id, expected_claimed=False):
            self.session.rollback()
            logger.info("Accept of claim %s refused, item %s already claimed", claim_id, found_item_id)
            raise Conflict("Item already claimed")

        try:
            if not self.ledger.try_transition(claim_id, ClaimStatus.accepted):
                raise InternalError("Claim changed after the item was reserved")

            self.recorder.record_return(found_item_id, lost_item_id, claim_id)

            if lost_item_id is not None:
                self.registry.mark_lost_item_claimed(lost_item_id)

            self.session.commit()
        except (InternalError, SQLAlchemyError) as e:
            # Undoes the reservation along with everything else in the transaction
            self.session.rollback()
            logger.exception("Accept of claim %s on item %s rolled back", claim_id, found_item_id)

            if isinstance(e, InternalError):
                raise
            raise InternalError("Could not complete the return, please try again") from e

        self.session.refresh(claim)

        logger.info("Claim %s accepted, item %s returned", claim_id, found_item_id)

        return claim
