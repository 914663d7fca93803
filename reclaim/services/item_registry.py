import logging
import uuid
from sqlmodel import Session, update

from reclaim.models.found_item import FoundItem
from reclaim.models.lost_item import LostItem
from reclaim.utils.errors import Forbidden, NotFound

logger = logging.getLogger(__name__)


class ItemRegistry:
    """
    Found and lost item reports.

    The registry is the only writer of ``is_claimed``. Writes are flushed into
    the caller's transaction and never committed here.
    """

    def __init__(self, session: Session):
        self.session = session

    def get_found_item(self, found_item_id: uuid.UUID) -> FoundItem:
        item = self.session.get(FoundItem, found_item_id)
        if not item:
            raise NotFound("Found item not found")

        return item

    def get_lost_item(self, lost_item_id: uuid.UUID) -> LostItem:
        item = self.session.get(LostItem, lost_item_id)
        if not item:
            raise NotFound("Lost item not found")

        return item

    def try_mark_claimed(self, found_item_id: uuid.UUID, expected_claimed: bool = False) -> bool:
        """
        Compare-and-swap on ``FoundItem.is_claimed``.

        Flips the flag only if it currently equals ``expected_claimed``. Returns
        False, with nothing written, when another writer got there first.
        """
        result = self.session.exec(
            update(FoundItem)
            .where(FoundItem.id == found_item_id)
            .where(FoundItem.is_claimed == expected_claimed)
            .values(is_claimed=not expected_claimed)
        )

        return result.rowcount == 1

    def mark_lost_item_claimed(self, lost_item_id: uuid.UUID):
        self.session.exec(
            update(LostItem)
            .where(LostItem.id == lost_item_id)
            .values(is_claimed=True)
        )

    def set_lost_item_claimed(self, lost_item_id: uuid.UUID, actor_id: int, claimed: bool) -> LostItem:
        # Manual correction by the person who lost the item
        item = self.get_lost_item(lost_item_id)

        if item.user_id != actor_id:
            raise Forbidden("Not authorized to update this item")

        item.is_claimed = claimed
        self.session.add(item)

        logger.info("Lost item %s marked is_claimed=%s by its reporter", lost_item_id, claimed)

        return item
