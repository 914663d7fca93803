import os
import secrets
from datetime import datetime, timedelta, timezone
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from jose import jwt
from sqlmodel import Session, select
from google.oauth2 import id_token
from google.auth.transport import requests as grequests

from reclaim.db.db import get_session
from reclaim.models.user import User
from reclaim.utils.auth_helper import ALGORITHM, get_jwt_secret

router = APIRouter()

ACCESS_TOKEN_EXPIRE_MINUTES = 24 * 60  # 1 day


class GoogleIDToken(BaseModel):
    id_token: str


class TokenResponse(BaseModel):
    access_token: str
    user_id: str


@router.post("/google", response_model=TokenResponse)
def google_auth(payload: GoogleIDToken, session: Session = Depends(get_session)):
    client_id = os.getenv("GOOGLE_CLIENT_ID")
    if not client_id:
        raise HTTPException(status_code=500, detail="Google sign-in not configured")

    try:
        idinfo = id_token.verify_oauth2_token(payload.id_token, grequests.Request(), client_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid Google ID token")

    # idinfo now trusted and parsed by Google libs
    google_id = idinfo["sub"]

    db_user = session.exec(select(User).where(User.google_id == google_id)).first()
    if not db_user:
        db_user = User(
            public_id=secrets.token_urlsafe(12),
            google_id=google_id,
            name=idinfo.get("name") or "",
            email=idinfo.get("email") or "",
            image=idinfo.get("picture"),
        )
        session.add(db_user)
        session.commit()
        session.refresh(db_user)

    expiry = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    jwt_payload = {
        "sub": db_user.public_id,
        "role": db_user.role,
        "iat": datetime.now(timezone.utc),
        "exp": expiry,
    }

    token = jwt.encode(jwt_payload, get_jwt_secret(), algorithm=ALGORITHM)

    return TokenResponse(
        access_token=token,
        user_id=db_user.public_id,
    )
