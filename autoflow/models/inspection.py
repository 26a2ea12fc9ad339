"""
Vehicle inspection model for database.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.sql import func
from autoflow.database import Base
import enum


class InspectionStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Inspection(Base):
    """Multi-point vehicle inspection database model."""

    __tablename__ = "inspections"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False)
    repair_order_id = Column(Integer, ForeignKey("repair_orders.id", ondelete="SET NULL"), nullable=True)
    technician_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    service_type = Column(String(100), nullable=False)
    status = Column(SQLEnum(InspectionStatus), default=InspectionStatus.PENDING, nullable=False)
    checklist_items = Column(Integer, default=12, nullable=False)
    completed_items = Column(Integer, default=0, nullable=False)
    notes = Column(Text, nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
