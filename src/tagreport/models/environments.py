"""
SQLAlchemy model for Environments
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from ..database.core import Base


class Environment(Base):
    """
    A technician's reusable set of item presets for one service type
    (e.g. "Office kitchen" with kettle, toaster, fridge).
    """
    __tablename__ = 'environments'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey('users.id', ondelete='CASCADE'),
        nullable=False
    )
    name = Column(Text, nullable=False)
    service_type = Column(String(32), nullable=False)
    items = Column(
        JSONB,
        nullable=False,
        default=list,
        server_default='[]',
        doc="Ordered list of {type, name, icon, description}"
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    owner = relationship("User", back_populates="environments")

    def __repr__(self):
        return f"<Environment(id={self.id}, name='{self.name}', items={len(self.items or [])})>"
