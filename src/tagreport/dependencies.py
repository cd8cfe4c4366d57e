"""
FastAPI dependencies for authentication and authorization
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt, ExpiredSignatureError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .config import settings
from .database.core import get_db
from .models.revoked_tokens import RevokedToken
from .models.users import User
from .schemas.auth import TokenPayload
from .services.permissions import Capability, has_capability

ALLOWED_JWT_ALGORITHMS = ("HS256",)

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token with jti for revocation tracking"""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    claims = {
        "sub": user.username,
        "user_id": user.id,
        "role": user.role,
        "jti": str(uuid.uuid4()),
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(claims, settings.session_secret, algorithm=settings.algorithm)


def verify_token(token: str) -> TokenPayload:
    """Verify JWT token and return token data"""
    try:
        payload = jwt.decode(
            token,
            settings.session_secret,
            algorithms=list(ALLOWED_JWT_ALGORITHMS),
            options={
                "verify_signature": True,
                "verify_exp": True,
                "require_exp": True,
            },
        )
    except ExpiredSignatureError:
        raise _unauthorized("Token expired")
    except JWTError:
        raise _unauthorized("Invalid token")

    username = payload.get("sub")
    user_id = payload.get("user_id")
    jti = payload.get("jti")
    exp = payload.get("exp")

    if not username or user_id is None or not jti or not exp:
        raise _unauthorized("Invalid token - missing required claims")

    try:
        return TokenPayload(
            username=username,
            user_id=int(user_id),
            role=payload.get("role") or "technician",
            jti=jti,
            exp=exp,
        )
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token - malformed claims")


async def is_token_revoked(db: AsyncSession, jti: Optional[str]) -> bool:
    if jti is None:
        return False

    result = await db.execute(
        select(RevokedToken).where(
            RevokedToken.token_jti == jti,
            RevokedToken.expires_at > datetime.now(timezone.utc)
        )
    )
    return result.scalar_one_or_none() is not None


def extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    """Bearer header first, then the session cookie set at login"""
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.cookie_name)


async def get_current_active_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> TokenPayload:
    """Validate the token, the revocation list and the account's current state"""
    token = extract_token(request, credentials)
    if not token:
        raise _unauthorized("Not authenticated")

    token_data = verify_token(token)

    if await is_token_revoked(db, token_data.jti):
        raise _unauthorized("Token has been revoked")

    result = await db.execute(select(User).where(User.id == token_data.user_id))
    user = result.scalar_one_or_none()
    if user is None or not user.is_active:
        raise _unauthorized("Account is inactive or no longer exists")

    # Role changes take effect without a fresh login
    return token_data.model_copy(update={"role": user.role})


def require_capability(capability: Capability):
    """Dependency factory rejecting users whose role lacks a capability"""

    async def checker(
        current_user: TokenPayload = Depends(get_current_active_user)
    ) -> TokenPayload:
        if not has_capability(current_user.role, capability):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires the {capability.value} capability"
            )
        return current_user

    return checker


def get_password_hash(password: str) -> str:
    """Hash password for storage"""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash"""
    try:
        return bcrypt.checkpw(
            plain_password.encode('utf-8'),
            hashed_password.encode('utf-8')
        )
    except ValueError:
        # Malformed stored hash
        return False
