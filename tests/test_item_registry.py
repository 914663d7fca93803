import uuid

import pytest

from reclaim.models.found_item import FoundItem
from reclaim.models.lost_item import LostItem
from reclaim.services.item_registry import ItemRegistry
from reclaim.utils.errors import Forbidden, NotFound


def test_get_found_item_missing_raises_not_found(session):
    with pytest.raises(NotFound):
        ItemRegistry(session).get_found_item(uuid.uuid4())


def test_get_lost_item_missing_raises_not_found(session):
    with pytest.raises(NotFound):
        ItemRegistry(session).get_lost_item(uuid.uuid4())


def test_try_mark_claimed_only_succeeds_once(session, make_user, make_found_item):
    item = make_found_item(make_user("Finder"))
    registry = ItemRegistry(session)

    assert registry.try_mark_claimed(item.id) is True
    assert registry.try_mark_claimed(item.id) is False
    session.commit()

    session.expire_all()
    assert session.get(FoundItem, item.id).is_claimed is True


def test_try_mark_claimed_respects_expected_value(session, make_user, make_found_item):
    item = make_found_item(make_user("Finder"))
    registry = ItemRegistry(session)

    # Item is unclaimed, so expecting True must not touch it
    assert registry.try_mark_claimed(item.id, expected_claimed=True) is False
    session.commit()

    session.expire_all()
    assert session.get(FoundItem, item.id).is_claimed is False


def test_try_mark_claimed_unknown_item(session):
    assert ItemRegistry(session).try_mark_claimed(uuid.uuid4()) is False


def test_mark_lost_item_claimed(session, make_user, make_lost_item):
    lost = make_lost_item(make_user("Owner"))

    ItemRegistry(session).mark_lost_item_claimed(lost.id)
    session.commit()

    session.expire_all()
    assert session.get(LostItem, lost.id).is_claimed is True


def test_set_lost_item_claimed_by_owner(session, make_user, make_lost_item):
    owner = make_user("Owner")
    lost = make_lost_item(owner)
    registry = ItemRegistry(session)

    registry.set_lost_item_claimed(lost.id, owner.id, True)
    session.commit()
    assert session.get(LostItem, lost.id).is_claimed is True

    registry.set_lost_item_claimed(lost.id, owner.id, False)
    session.commit()
    assert session.get(LostItem, lost.id).is_claimed is False


def test_set_lost_item_claimed_by_someone_else_is_forbidden(session, make_user, make_lost_item):
    lost = make_lost_item(make_user("Owner"))
    stranger = make_user("Stranger")

    with pytest.raises(Forbidden):
        ItemRegistry(session).set_lost_item_claimed(lost.id, stranger.id, True)
