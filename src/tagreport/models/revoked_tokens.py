"""
Revoked token list for logged-out JWTs
"""

from sqlalchemy import Column, DateTime, Index, Integer, String, func

from ..database.core import Base


class RevokedToken(Base):
    __tablename__ = 'revoked_tokens'

    id = Column(Integer, primary_key=True, autoincrement=True)
    token_jti = Column(String(64), unique=True, nullable=False)
    user_id = Column(Integer, nullable=True)
    revoked_at = Column(DateTime(timezone=True), server_default=func.now())
    expires_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index('idx_revoked_tokens_expires', 'expires_at'),
    )
