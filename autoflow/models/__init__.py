"""
SQLAlchemy database models.
"""
from autoflow.models.user import User, UserRole
from autoflow.models.customer import Customer
from autoflow.models.vehicle import Vehicle
from autoflow.models.appointment import Appointment, AppointmentStatus
from autoflow.models.repair_order import RepairOrder, RepairOrderStatus, RepairOrderPriority
from autoflow.models.invoice import Invoice, InvoiceStatus
from autoflow.models.inspection import Inspection, InspectionStatus

__all__ = [
    "User", "UserRole", "Customer", "Vehicle",
    "Appointment", "AppointmentStatus",
    "RepairOrder", "RepairOrderStatus", "RepairOrderPriority",
    "Invoice", "InvoiceStatus",
    "Inspection", "InspectionStatus",
]
