from fastapi import APIRouter, Depends
from sqlmodel import Session, select

from reclaim.db.db import get_session
from reclaim.models.found_item import FoundItem
from reclaim.models.lost_item import LostItem
from reclaim.schemas.item_schemas import found_item_view, lost_item_view
from reclaim.services.return_recorder import ReturnRecorder
from reclaim.utils.auth_helper import get_current_user_required, get_db_user


router = APIRouter()


@router.get("/me")
def get_my_profile(
    session: Session = Depends(get_session),
    current_user=Depends(get_current_user_required),
):
    return get_db_user(session, current_user)


@router.get("/items")
def get_my_items(
    session: Session = Depends(get_session),
    current_user=Depends(get_current_user_required),
):
    user = get_db_user(session, current_user)

    lost_items = session.exec(
        select(LostItem)
        .where(LostItem.user_id == user.id)
        .order_by(LostItem.created_at.desc())
    ).all()

    found_items = session.exec(
        select(FoundItem)
        .where(FoundItem.user_id == user.id)
        .order_by(FoundItem.created_at.desc())
    ).all()

    returns = ReturnRecorder(session).returns_for_user(user.id)

    return {
        "lost_items": [lost_item_view(item, user.id) for item in lost_items],
        "found_items": [found_item_view(item, user.id) for item in found_items],
        "successful_returns": [record.model_dump(mode="json") for record in returns],
    }
