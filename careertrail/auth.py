"""
JWT Token Authentication

Tokens carry the user id in ``sub``; they are minted by ``careertrail token``.
"""

from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel
from sqlalchemy.orm import Session

from careertrail.config import get_config
from careertrail.db.database import get_db
from careertrail.db.models import User

security = HTTPBearer()


class TokenData(BaseModel):
    user_id: str
    email: Optional[str] = None


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token"""
    cfg = get_config().auth
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=cfg.token_expire_minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, cfg.secret_key, algorithm=cfg.algorithm)


def token_for_user(user: User, expires_delta: Optional[timedelta] = None) -> str:
    return create_access_token({"sub": user.id, "email": user.email}, expires_delta)


def verify_token(token: str) -> TokenData:
    """Verify and decode a JWT token"""
    cfg = get_config().auth
    try:
        payload = jwt.decode(token, cfg.secret_key, algorithms=[cfg.algorithm])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token"
        )
    user_id = payload.get("sub")
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token"
        )
    return TokenData(user_id=user_id, email=payload.get("email"))


def user_from_token(token: str, db: Session) -> User:
    """Resolve a token to an active user (shared by HTTP and WebSocket auth)."""
    token_data = verify_token(token)
    user = db.get(User, token_data.user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User is inactive"
        )
    return user


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """Get the current authenticated user from JWT token"""
    return user_from_token(credentials.credentials, db)
