import uuid
from datetime import datetime, timedelta, timezone
from fastapi import APIRouter, Depends
from sqlmodel import Session, func, select

from reclaim.db.db import get_session
from reclaim.models.found_item import FoundItem
from reclaim.models.lost_item import LostItem
from reclaim.models.user import User
from reclaim.schemas.item_schemas import FoundItemCreateSchema, found_item_view
from reclaim.services.resolution_coordinator import ResolutionCoordinator
from reclaim.utils.auth_helper import get_current_user_optional, get_current_user_required, get_db_user, get_viewer_id


router = APIRouter()

TRENDING_WINDOW_DAYS = 7
TRENDING_LIMIT = 5


@router.post("/", status_code=201)
def add_found_item(
    payload: FoundItemCreateSchema,
    session: Session = Depends(get_session),
    current_user=Depends(get_current_user_required),
):
    user = get_db_user(session, current_user)

    db_item = FoundItem(user_id=user.id, **payload.model_dump())

    session.add(db_item)
    session.commit()
    session.refresh(db_item)

    return found_item_view(db_item, user.id)


@router.get("/")
def get_found_items(session: Session = Depends(get_session)):
    # Only items still waiting for their owner
    items = session.exec(
        select(FoundItem)
        .where(FoundItem.is_claimed == False)  # noqa: E712
        .order_by(FoundItem.created_at.desc())
    ).all()

    return {"items": [found_item_view(item) for item in items]}


@router.get("/stats/trending-categories")
def get_trending_categories(
    session: Session = Depends(get_session),
    current_user=Depends(get_current_user_required),
):
    since = datetime.now(timezone.utc) - timedelta(days=TRENDING_WINDOW_DAYS)

    combined: dict[str, int] = {}

    for Type in (FoundItem, LostItem):
        rows = session.exec(
            select(Type.category, func.count(Type.id))
            .where(Type.date >= since)
            .group_by(Type.category)
        ).all()

        for category, count in rows:
            combined[category] = combined.get(category, 0) + count

    trends = sorted(combined.items(), key=lambda entry: entry[1], reverse=True)[:TRENDING_LIMIT]

    return [{"category": category, "count": count} for category, count in trends]


@router.get("/{item_id}")
def get_found_item(
    item_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user=Depends(get_current_user_optional),
):
    item = ResolutionCoordinator(session).get_item(item_id)
    reporter = session.get(User, item.user_id)

    return {
        "item": found_item_view(item, get_viewer_id(session, current_user)),
        "reporter": {
            "public_id": reporter.public_id,
            "name": reporter.name,
        },
    }
