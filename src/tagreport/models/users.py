"""
SQLAlchemy model for Users
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from ..database.core import Base


class User(Base):
    """
    SQLAlchemy model for Users table

    A technician or administrator account. The role decides which
    capabilities the account resolves to.
    """
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True, autoincrement=True)

    username = Column(
        Text,
        nullable=False,
        unique=True,
        doc="Unique username for authentication"
    )
    password_hash = Column(
        Text,
        nullable=False,
        doc="bcrypt hash of the user's password"
    )
    full_name = Column(Text, nullable=False)
    role = Column(
        String(32),
        nullable=False,
        default='technician',
        server_default='technician',
        doc="technician, support_center or super_admin"
    )
    is_active = Column(
        Boolean,
        nullable=False,
        default=True,
        server_default='true',
        doc="Inactive accounts cannot log in"
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

    test_sessions = relationship("TestSession", back_populates="owner")
    environments = relationship(
        "Environment",
        back_populates="owner",
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
