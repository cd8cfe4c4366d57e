"""
SQLAlchemy model for Test Results
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from ..database.core import Base


class TestResult(Base):
    """
    SQLAlchemy model for Test Results table

    One tested item within a session. asset_number is stored as text but
    always holds a positive integer inside the band of the item's frequency.
    """
    __tablename__ = 'test_results'
    __table_args__ = (
        Index('ix_test_results_session_id', 'session_id'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    session_id = Column(
        Integer,
        ForeignKey('test_sessions.id', ondelete='CASCADE'),
        nullable=False
    )

    asset_number = Column(Text, nullable=False, doc="Tag number written on the item")
    item_name = Column(Text, nullable=False)
    item_type = Column(Text, nullable=False)
    location = Column(Text, nullable=False)
    classification = Column(Text, nullable=False)
    result = Column(String(8), nullable=False, doc="pass or fail")
    frequency = Column(String(32), nullable=False, doc="Inspection cadence")
    failure_reason = Column(Text, nullable=True)
    action_taken = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    photo_data = Column(Text, nullable=True, doc="Base64 encoded photo")

    vision_inspection = Column(Boolean, default=True, server_default='true')
    electrical_test = Column(Boolean, default=True, server_default='true')

    # Emergency exit light fields (AS/NZS 2293.2:2019)
    maintenance_type = Column(Text, nullable=True)
    globe_type = Column(Text, nullable=True)
    discharge_test = Column(Boolean, nullable=True)
    switching_test = Column(Boolean, nullable=True)
    charging_test = Column(Boolean, nullable=True)
    manufacturer_info = Column(Text, nullable=True)
    installation_date = Column(Text, nullable=True)
    lux_test = Column(Boolean, nullable=True)
    lux_reading = Column(Text, nullable=True)
    lux_compliant = Column(Boolean, nullable=True)

    # Fire equipment fields (AS 1851 / NZS 4503)
    equipment_type = Column(Text, nullable=True)
    extinguisher_type = Column(Text, nullable=True)
    size = Column(Text, nullable=True)
    weight = Column(Text, nullable=True)
    test_type = Column(Text, nullable=True)
    fire_visual_inspection = Column(Boolean, nullable=True)
    accessibility_check = Column(Boolean, nullable=True)
    signage_check = Column(Boolean, nullable=True)
    operational_test = Column(Boolean, nullable=True)
    pressure_test = Column(Boolean, nullable=True)
    push_button_test = Column(Boolean, nullable=True)
    injection_timed_test = Column(Boolean, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    session = relationship("TestSession", back_populates="results")

    def __repr__(self):
        return f"<TestResult(id={self.id}, asset='{self.asset_number}', result='{self.result}')>"
