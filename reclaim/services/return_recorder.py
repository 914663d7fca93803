import uuid
from typing import List, Optional
from sqlmodel import Session, or_, select

from reclaim.models.found_item import FoundItem
from reclaim.models.lost_item import LostItem
from reclaim.models.successful_return import SuccessfulReturn


class ReturnRecorder:
    def __init__(self, session: Session):
        self.session = session

    def record_return(
        self,
        found_item_id: uuid.UUID,
        lost_item_id: Optional[uuid.UUID],
        claim_id: uuid.UUID,
    ) -> SuccessfulReturn:
        # Append-only; uniqueness of claim_id and found_item_id is enforced by the table
        record = SuccessfulReturn(
            claim_id=claim_id,
            found_item_id=found_item_id,
            lost_item_id=lost_item_id,
        )

        self.session.add(record)
        self.session.flush()

        return record

    def returns_for_user(self, user_id: int) -> List[SuccessfulReturn]:
        """Returns where the user was either the finder or the one who lost the item."""
        found_ids = select(FoundItem.id).where(FoundItem.user_id == user_id)
        lost_ids = select(LostItem.id).where(LostItem.user_id == user_id)

        records = self.session.exec(
            select(SuccessfulReturn)
            .where(
                or_(
                    SuccessfulReturn.found_item_id.in_(found_ids),
                    SuccessfulReturn.lost_item_id.in_(lost_ids),
                )
            )
            .order_by(SuccessfulReturn.return_date.desc())
        ).all()

        return list(records)
