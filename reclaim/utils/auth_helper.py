import os
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import jwt, JWTError
from sqlmodel import Session, select

from reclaim.models.user import User

ALGORITHM = "HS256"


def get_jwt_secret():
    secret = os.getenv("JWT_SECRET")

    if not secret:
        raise HTTPException(status_code=500, detail="JWT secret not configured")

    return secret


bearer_scheme_optional = HTTPBearer(auto_error=False)


def get_current_user_optional(token: HTTPAuthorizationCredentials = Depends(bearer_scheme_optional)):
    if not token:
        return None

    try:
        payload = jwt.decode(token.credentials, get_jwt_secret(), algorithms=[ALGORITHM])
        return payload
    except JWTError:
        return None


bearer_scheme_required = HTTPBearer(auto_error=True)


def get_current_user_required(token: HTTPAuthorizationCredentials = Depends(bearer_scheme_required)):
    try:
        payload = jwt.decode(
            token.credentials,
            get_jwt_secret(),
            algorithms=[ALGORITHM],
        )
        return payload
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")


def get_db_user(session: Session, current_user):
    user = session.exec(
        select(User).where(User.public_id == current_user["sub"])
    ).first()

    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    return user


def get_viewer_id(session: Session, current_user):
    # user lookup for optional-auth routes
    if current_user:
        user = session.exec(
            select(User).where(User.public_id == current_user.get("sub"))
        ).first()

        if user:
            return user.id

    return None
