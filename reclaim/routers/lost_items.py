import uuid
from fastapi import APIRouter, Depends
from sqlmodel import Session, select

from reclaim.db.db import get_session
from reclaim.models.lost_item import LostItem
from reclaim.schemas.item_schemas import LostItemCreateSchema, LostItemStatusSchema, lost_item_view
from reclaim.services.item_registry import ItemRegistry
from reclaim.services.resolution_coordinator import ResolutionCoordinator
from reclaim.utils.auth_helper import get_current_user_optional, get_current_user_required, get_db_user, get_viewer_id

router = APIRouter()


@router.post("/", status_code=201)
def add_lost_item(
    payload: LostItemCreateSchema,
    session: Session = Depends(get_session),
    current_user=Depends(get_current_user_required),
):
    user = get_db_user(session, current_user)

    db_item = LostItem(user_id=user.id, **payload.model_dump())

    session.add(db_item)
    session.commit()
    session.refresh(db_item)

    return lost_item_view(db_item, user.id)


@router.get("/")
def get_lost_items(session: Session = Depends(get_session)):
    items = session.exec(
        select(LostItem)
        .where(LostItem.is_claimed == False)  # noqa: E712
        .order_by(LostItem.created_at.desc())
    ).all()

    return {"items": [lost_item_view(item) for item in items]}


@router.get("/{item_id}")
def get_lost_item(
    item_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user=Depends(get_current_user_optional),
):
    item = ResolutionCoordinator(session).get_lost_item(item_id)

    return {"item": lost_item_view(item, get_viewer_id(session, current_user))}


@router.patch("/{item_id}/status")
def update_lost_item_status(
    item_id: uuid.UUID,
    payload: LostItemStatusSchema,
    session: Session = Depends(get_session),
    current_user=Depends(get_current_user_required),
):
    user = get_db_user(session, current_user)

    item = ItemRegistry(session).set_lost_item_claimed(item_id, user.id, payload.is_claimed)
    session.commit()
    session.refresh(item)

    return {"item": lost_item_view(item, user.id)}
