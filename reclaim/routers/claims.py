import uuid
from fastapi import APIRouter, Depends
from sqlmodel import Session

from reclaim.db.db import get_session
from reclaim.schemas.claim_schemas import ClaimCreateRequest, ClaimRespondRequest, claim_read, claims_for_user_view
from reclaim.services.resolution_coordinator import ResolutionCoordinator
from reclaim.utils.auth_helper import get_current_user_required, get_db_user


router = APIRouter()


@router.post("/", status_code=201)
def submit_claim(
    payload: ClaimCreateRequest,
    session: Session = Depends(get_session),
    current_user=Depends(get_current_user_required),
):
    user = get_db_user(session, current_user)

    claim = ResolutionCoordinator(session).submit_claim(
        found_item_id=payload.found_item_id,
        claimant_id=user.id,
        lost_item_id=payload.lost_item_id,
        answer=payload.answer.strip(),
    )

    return {"claim": claim_read(claim)}


@router.post("/{claim_id}/respond")
def respond_to_claim(
    claim_id: uuid.UUID,
    payload: ClaimRespondRequest,
    session: Session = Depends(get_session),
    current_user=Depends(get_current_user_required),
):
    """
    Accept or reject a claim - accessible only by the finder of the item.
    """
    user = get_db_user(session, current_user)

    claim = ResolutionCoordinator(session).respond_to_claim(claim_id, user.id, payload.decision)

    return {"claim": claim_read(claim)}


@router.get("/")
def get_my_claims(
    session: Session = Depends(get_session),
    current_user=Depends(get_current_user_required),
):
    """
    Claims the user submitted and claims received on items they found.
    """
    user = get_db_user(session, current_user)

    claims = ResolutionCoordinator(session).get_claims_for_user(user.id)

    return claims_for_user_view(claims)
