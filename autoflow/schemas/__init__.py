"""
Pydantic schemas for request/response validation.
"""
from autoflow.schemas.customer import CustomerBase, CustomerCreate, CustomerUpdate, Customer
from autoflow.schemas.vehicle import VehicleBase, VehicleCreate, VehicleUpdate, Vehicle
from autoflow.schemas.appointment import AppointmentBase, AppointmentCreate, AppointmentUpdate, Appointment
from autoflow.schemas.repair_order import RepairOrderBase, RepairOrderCreate, RepairOrderUpdate, RepairOrder
from autoflow.schemas.invoice import InvoiceBase, InvoiceCreate, InvoiceUpdate, Invoice
from autoflow.schemas.inspection import InspectionBase, InspectionCreate, InspectionUpdate, Inspection
from autoflow.schemas.user import UserBase, UserCreate, UserUpdate, RoleUpdate, User, Token, LoginRequest
from autoflow.schemas.access import Navigation, AccessCheck, GuardDecision

__all__ = [
    "CustomerBase", "CustomerCreate", "CustomerUpdate", "Customer",
    "VehicleBase", "VehicleCreate", "VehicleUpdate", "Vehicle",
    "AppointmentBase", "AppointmentCreate", "AppointmentUpdate", "Appointment",
    "RepairOrderBase", "RepairOrderCreate", "RepairOrderUpdate", "RepairOrder",
    "InvoiceBase", "InvoiceCreate", "InvoiceUpdate", "Invoice",
    "InspectionBase", "InspectionCreate", "InspectionUpdate", "Inspection",
    "UserBase", "UserCreate", "UserUpdate", "RoleUpdate", "User", "Token", "LoginRequest",
    "Navigation", "AccessCheck", "GuardDecision",
]
