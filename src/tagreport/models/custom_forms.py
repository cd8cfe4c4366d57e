"""
SQLAlchemy models for admin-defined custom form types
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from ..database.core import Base


class CustomFormType(Base):
    """Named code -> item name list used to pre-populate item pickers"""
    __tablename__ = 'custom_form_types'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, unique=True)
    service_type = Column(
        String(32),
        nullable=False,
        default='electrical',
        server_default='electrical'
    )
    csv_data = Column(Text, nullable=False, doc="Raw code,itemName lines as uploaded")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    items = relationship(
        "CustomFormItem",
        back_populates="form_type",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CustomFormItem.position"
    )

    def __repr__(self):
        return f"<CustomFormType(id={self.id}, name='{self.name}')>"


class CustomFormItem(Base):
    __tablename__ = 'custom_form_items'

    id = Column(Integer, primary_key=True, autoincrement=True)
    form_type_id = Column(
        Integer,
        ForeignKey('custom_form_types.id', ondelete='CASCADE'),
        nullable=False
    )
    code = Column(Text, nullable=False)
    item_name = Column(Text, nullable=False)
    position = Column(Integer, nullable=False, default=0)

    form_type = relationship("CustomFormType", back_populates="items")

    def __repr__(self):
        return f"<CustomFormItem(code='{self.code}', item_name='{self.item_name}')>"
