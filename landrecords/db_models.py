from datetime import UTC, datetime
import uuid

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


def utc_now() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


def new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    full_name: Mapped[str] = mapped_column(String(200))
    email: Mapped[str] = mapped_column(String(255), unique=True)
    role: Mapped[str] = mapped_column(String(32), index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class Customer(Base):
    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    reference_id: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    customer_type: Mapped[str] = mapped_column(String(32))
    status: Mapped[str] = mapped_column(String(32), default="DRAFT")
    created_by: Mapped[str] = mapped_column(String(36))
    approved_by: Mapped[str | None] = mapped_column(String(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now, onupdate=utc_now)


class CustomerPerson(Base):
    __tablename__ = "customer_person"

    customer_id: Mapped[str] = mapped_column(ForeignKey("customers.id", ondelete="CASCADE"), primary_key=True)
    property_id: Mapped[str] = mapped_column(String(50))
    full_name: Mapped[str] = mapped_column(String(200))
    mothers_name: Mapped[str] = mapped_column(String(200))
    date_of_birth: Mapped[str] = mapped_column(String(10))
    place_of_birth: Mapped[str] = mapped_column(String(200))
    gender: Mapped[str] = mapped_column(String(8))
    nationality: Mapped[str] = mapped_column(String(100))
    mobile_number_1: Mapped[str] = mapped_column(String(32))
    email: Mapped[str] = mapped_column(String(255))
    id_type: Mapped[str] = mapped_column(String(100))
    id_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    place_of_issue: Mapped[str | None] = mapped_column(String(200), nullable=True)
    issue_date: Mapped[str | None] = mapped_column(String(10), nullable=True)
    expiry_date: Mapped[str | None] = mapped_column(String(10), nullable=True)
    mobile_number_2: Mapped[str | None] = mapped_column(String(32), nullable=True)
    carrier_mobile_1: Mapped[str | None] = mapped_column(String(100), nullable=True)
    carrier_mobile_2: Mapped[str | None] = mapped_column(String(100), nullable=True)
    emergency_contact_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    emergency_contact_number: Mapped[str | None] = mapped_column(String(32), nullable=True)


class CustomerBusiness(Base):
    __tablename__ = "customer_business"

    customer_id: Mapped[str] = mapped_column(ForeignKey("customers.id", ondelete="CASCADE"), primary_key=True)
    property_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
    business_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    business_license_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    business_address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    rental_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    mobile_number_1: Mapped[str | None] = mapped_column(String(32), nullable=True)
    mobile_number_2: Mapped[str | None] = mapped_column(String(32), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    size: Mapped[str | None] = mapped_column(String(100), nullable=True)
    floor: Mapped[str | None] = mapped_column(String(50), nullable=True)
    file_number: Mapped[str | None] = mapped_column(String(100), nullable=True)


class CustomerGovernment(Base):
    __tablename__ = "customer_government"

    customer_id: Mapped[str] = mapped_column(ForeignKey("customers.id", ondelete="CASCADE"), primary_key=True)
    property_id: Mapped[str] = mapped_column(String(50))
    full_department_name: Mapped[str] = mapped_column(String(200))
    contact_name: Mapped[str] = mapped_column(String(200))
    department_address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    mobile_number_1: Mapped[str | None] = mapped_column(String(32), nullable=True)
    mobile_number_2: Mapped[str | None] = mapped_column(String(32), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    file_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    size: Mapped[str | None] = mapped_column(String(100), nullable=True)


class CustomerMosqueHospital(Base):
    __tablename__ = "customer_mosque_hospital"

    customer_id: Mapped[str] = mapped_column(ForeignKey("customers.id", ondelete="CASCADE"), primary_key=True)
    property_id: Mapped[str] = mapped_column(String(50))
    full_mosque_hospital_name: Mapped[str] = mapped_column(String(200))
    mosque_registration_number: Mapped[str] = mapped_column(String(100))
    contact_name: Mapped[str] = mapped_column(String(200))
    mobile_number_1: Mapped[str] = mapped_column(String(32))
    mobile_number_2: Mapped[str | None] = mapped_column(String(32), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    size: Mapped[str | None] = mapped_column(String(100), nullable=True)
    floor: Mapped[str | None] = mapped_column(String(50), nullable=True)
    file_number: Mapped[str | None] = mapped_column(String(100), nullable=True)


class CustomerNonProfit(Base):
    __tablename__ = "customer_non_profit"

    customer_id: Mapped[str] = mapped_column(ForeignKey("customers.id", ondelete="CASCADE"), primary_key=True)
    property_id: Mapped[str] = mapped_column(String(50))
    ngo_name: Mapped[str] = mapped_column(String(200))
    ngo_registration_number: Mapped[str] = mapped_column(String(100))
    contact_name: Mapped[str] = mapped_column(String(200))
    mobile_number_1: Mapped[str] = mapped_column(String(32))
    mobile_number_2: Mapped[str | None] = mapped_column(String(32), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    size: Mapped[str | None] = mapped_column(String(100), nullable=True)
    floor: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    file_number: Mapped[str | None] = mapped_column(String(100), nullable=True)


class CustomerResidential(Base):
    __tablename__ = "customer_residential"

    customer_id: Mapped[str] = mapped_column(ForeignKey("customers.id", ondelete="CASCADE"), primary_key=True)
    property_id: Mapped[str] = mapped_column(String(50))
    size: Mapped[str | None] = mapped_column(String(100), nullable=True)
    floor: Mapped[str | None] = mapped_column(String(50), nullable=True)
    file_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)


class CustomerRental(Base):
    __tablename__ = "customer_rental"

    customer_id: Mapped[str] = mapped_column(ForeignKey("customers.id", ondelete="CASCADE"), primary_key=True)
    property_id: Mapped[str] = mapped_column(String(50))
    rental_name: Mapped[str] = mapped_column(String(200))
    rental_mothers_name: Mapped[str] = mapped_column(String(200))
    date_of_birth: Mapped[str] = mapped_column(String(10))
    place_of_birth: Mapped[str] = mapped_column(String(200))
    gender: Mapped[str] = mapped_column(String(8))
    nationality: Mapped[str] = mapped_column(String(100))
    mobile_number_1: Mapped[str] = mapped_column(String(32))
    mobile_number_2: Mapped[str] = mapped_column(String(32))
    email: Mapped[str] = mapped_column(String(255))
    id_type: Mapped[str] = mapped_column(String(100))


class Property(Base):
    __tablename__ = "properties"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    reference_id: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    parcel_number: Mapped[str] = mapped_column(String(64), unique=True)
    property_location: Mapped[str | None] = mapped_column(Text, nullable=True)
    sub_location: Mapped[str | None] = mapped_column(Text, nullable=True)
    district_id: Mapped[str] = mapped_column(String(36), index=True)
    sub_district_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    property_type_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    is_downtown: Mapped[bool] = mapped_column(Boolean, default=False)
    is_building: Mapped[bool] = mapped_column(Boolean, default=True)
    has_built_area: Mapped[bool] = mapped_column(Boolean, default=False)
    has_property_wall: Mapped[bool] = mapped_column(Boolean, default=False)
    number_of_floors: Mapped[int | None] = mapped_column(Integer, nullable=True)
    size: Mapped[float] = mapped_column(Float)
    parcel_area: Mapped[float | None] = mapped_column(Float, nullable=True)
    door_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    road_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    postal_zip_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    section: Mapped[str | None] = mapped_column(String(50), nullable=True)
    block: Mapped[str | None] = mapped_column(String(50), nullable=True)
    map_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    coordinates: Mapped[str | None] = mapped_column(String(64), nullable=True)
    status: Mapped[str] = mapped_column(String(32), default="DRAFT")
    created_by: Mapped[str] = mapped_column(String(36))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now, onupdate=utc_now)


class PropertyBoundary(Base):
    __tablename__ = "property_boundaries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    property_id: Mapped[str] = mapped_column(ForeignKey("properties.id", ondelete="CASCADE"), unique=True)
    north_length: Mapped[float] = mapped_column(Float)
    north_adjacent_type: Mapped[str | None] = mapped_column(String(16), nullable=True)
    south_length: Mapped[float] = mapped_column(Float)
    south_adjacent_type: Mapped[str | None] = mapped_column(String(16), nullable=True)
    east_length: Mapped[float] = mapped_column(Float)
    east_adjacent_type: Mapped[str | None] = mapped_column(String(16), nullable=True)
    west_length: Mapped[float] = mapped_column(Float)
    west_adjacent_type: Mapped[str | None] = mapped_column(String(16), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)


class PropertyOwnership(Base):
    __tablename__ = "property_ownership"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    property_id: Mapped[str] = mapped_column(ForeignKey("properties.id", ondelete="CASCADE"), index=True)
    customer_id: Mapped[str] = mapped_column(ForeignKey("customers.id", ondelete="CASCADE"), index=True)
    ownership_type: Mapped[str] = mapped_column(String(32))
    ownership_percentage: Mapped[float | None] = mapped_column(Float, nullable=True)
    start_date: Mapped[str] = mapped_column(String(10))
    end_date: Mapped[str | None] = mapped_column(String(10), nullable=True)
    is_current: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)


class TaxAssessment(Base):
    __tablename__ = "tax_assessments"
    __table_args__ = (UniqueConstraint("property_id", "tax_year", name="uq_property_tax_year"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    reference_id: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    property_id: Mapped[str] = mapped_column(ForeignKey("properties.id", ondelete="CASCADE"), index=True)
    tax_year: Mapped[int] = mapped_column(Integer, index=True)
    property_type: Mapped[str | None] = mapped_column(String(32), nullable=True)
    assessed_amount: Mapped[float] = mapped_column(Float)
    exemption_amount: Mapped[float] = mapped_column(Float, default=0)
    penalty_amount: Mapped[float] = mapped_column(Float, default=0)
    assessment_date: Mapped[str] = mapped_column(String(10))
    due_date: Mapped[str] = mapped_column(String(10))
    status: Mapped[str] = mapped_column(String(32), default="DRAFT")
    created_by: Mapped[str | None] = mapped_column(String(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now, onupdate=utc_now)


class TaxPayment(Base):
    __tablename__ = "tax_payments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    assessment_id: Mapped[str | None] = mapped_column(
        ForeignKey("tax_assessments.id", ondelete="CASCADE"), nullable=True, index=True
    )
    payment_date: Mapped[str] = mapped_column(String(10))
    amount_paid: Mapped[float | None] = mapped_column(Float, nullable=True)
    payment_method: Mapped[str] = mapped_column(String(32))
    receipt_number: Mapped[str] = mapped_column(String(100), unique=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    collected_by: Mapped[str | None] = mapped_column(String(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)


class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    entity_type: Mapped[str] = mapped_column(String(32), index=True)
    entity_id: Mapped[str] = mapped_column(String(36), index=True)
    action: Mapped[str] = mapped_column(String(32))
    performed_by: Mapped[str] = mapped_column(String(36))
    metadata_: Mapped[dict | None] = mapped_column("metadata", JSON, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime, default=utc_now)


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    entity_type: Mapped[str] = mapped_column(String(32), index=True)
    entity_id: Mapped[str] = mapped_column(String(36), index=True)
    action: Mapped[str] = mapped_column(String(32))
    field: Mapped[str | None] = mapped_column(String(64), nullable=True)
    old_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    new_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    changed_by: Mapped[str] = mapped_column(String(36))
    timestamp: Mapped[datetime] = mapped_column(DateTime, default=utc_now)


class Notification(Base):
    __tablename__ = "notifications"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    title: Mapped[str] = mapped_column(String(200))
    message: Mapped[str] = mapped_column(Text)
    entity_type: Mapped[str | None] = mapped_column(String(32), nullable=True)
    entity_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)
