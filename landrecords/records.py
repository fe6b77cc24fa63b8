from dataclasses import asdict, dataclass
from typing import Any, ClassVar

from landrecords.schemas import CustomerSubtype


@dataclass(frozen=True)
class CustomerRecord:
    subtype: ClassVar[CustomerSubtype]

    @property
    def detail_table(self) -> str:
        return self.subtype.detail_table

    def detail_row(self, customer_id: str) -> dict[str, Any]:
        return {"customer_id": customer_id, **asdict(self)}


@dataclass(frozen=True)
class PersonRecord(CustomerRecord):
    subtype: ClassVar[CustomerSubtype] = CustomerSubtype.PERSON

    property_id: str
    full_name: str
    mothers_name: str
    date_of_birth: str
    place_of_birth: str
    gender: str
    nationality: str
    mobile_number_1: str
    email: str
    id_type: str
    id_number: str | None = None
    place_of_issue: str | None = None
    issue_date: str | None = None
    expiry_date: str | None = None
    mobile_number_2: str | None = None
    carrier_mobile_1: str | None = None
    carrier_mobile_2: str | None = None
    emergency_contact_name: str | None = None
    emergency_contact_number: str | None = None


@dataclass(frozen=True)
class BusinessRecord(CustomerRecord):
    subtype: ClassVar[CustomerSubtype] = CustomerSubtype.BUSINESS

    property_id: str | None = None
    business_name: str | None = None
    business_license_number: str | None = None
    business_address: str | None = None
    rental_name: str | None = None
    mobile_number_1: str | None = None
    mobile_number_2: str | None = None
    email: str | None = None
    size: str | None = None
    floor: str | None = None
    file_number: str | None = None


@dataclass(frozen=True)
class GovernmentRecord(CustomerRecord):
    subtype: ClassVar[CustomerSubtype] = CustomerSubtype.GOVERNMENT

    property_id: str
    full_department_name: str
    contact_name: str
    department_address: str | None = None
    mobile_number_1: str | None = None
    mobile_number_2: str | None = None
    email: str | None = None
    file_number: str | None = None
    size: str | None = None


@dataclass(frozen=True)
class MosqueHospitalRecord(CustomerRecord):
    subtype: ClassVar[CustomerSubtype] = CustomerSubtype.MOSQUE_HOSPITAL

    property_id: str
    full_mosque_hospital_name: str
    mosque_registration_number: str
    contact_name: str
    mobile_number_1: str
    mobile_number_2: str | None = None
    email: str | None = None
    address: str | None = None
    size: str | None = None
    floor: str | None = None
    file_number: str | None = None


@dataclass(frozen=True)
class NonProfitRecord(CustomerRecord):
    subtype: ClassVar[CustomerSubtype] = CustomerSubtype.NON_PROFIT

    property_id: str
    ngo_name: str
    ngo_registration_number: str
    contact_name: str
    mobile_number_1: str
    mobile_number_2: str | None = None
    email: str | None = None
    size: str | None = None
    floor: str | None = None
    address: str | None = None
    file_number: str | None = None


@dataclass(frozen=True)
class ResidentialRecord(CustomerRecord):
    subtype: ClassVar[CustomerSubtype] = CustomerSubtype.RESIDENTIAL

    property_id: str
    size: str | None = None
    floor: str | None = None
    file_number: str | None = None
    address: str | None = None


@dataclass(frozen=True)
class RentalRecord(CustomerRecord):
    subtype: ClassVar[CustomerSubtype] = CustomerSubtype.RENTAL

    property_id: str
    rental_name: str
    rental_mothers_name: str
    date_of_birth: str
    place_of_birth: str
    gender: str
    nationality: str
    mobile_number_1: str
    mobile_number_2: str
    email: str
    id_type: str


@dataclass(frozen=True)
class BoundaryRecord:
    north_length: float
    north_adjacent_type: str | None
    south_length: float
    south_adjacent_type: str | None
    east_length: float
    east_adjacent_type: str | None
    west_length: float
    west_adjacent_type: str | None

    def to_row(self, property_id: str) -> dict[str, Any]:
        return {"property_id": property_id, **asdict(self)}


@dataclass(frozen=True)
class PropertyRecord:
    district_id: str
    size: float
    property_location: str | None = None
    sub_location: str | None = None
    sub_district_id: str | None = None
    property_type_id: str | None = None
    is_downtown: bool = False
    is_building: bool = True
    has_built_area: bool = False
    has_property_wall: bool = False
    number_of_floors: int | None = None
    parcel_area: float | None = None
    door_number: str | None = None
    road_name: str | None = None
    postal_zip_code: str | None = None
    section: str | None = None
    block: str | None = None
    map_url: str | None = None
    coordinates: str | None = None
    customer_reference_id: str | None = None
    boundary: BoundaryRecord | None = None

    def to_row(self) -> dict[str, Any]:
        row = asdict(self)
        row.pop("boundary")
        row.pop("customer_reference_id")
        return row


@dataclass(frozen=True)
class TaxAssessmentRecord:
    property_id: str
    tax_year: int
    assessed_amount: float
    due_date: str
    assessment_date: str
    status: str = "DRAFT"
    exemption_amount: float = 0.0
    penalty_amount: float = 0.0
    property_type: str = "RESIDENTIAL"

    def to_row(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TaxPaymentRecord:
    payment_date: str
    payment_method: str
    receipt_number: str
    amount_paid: float | None = None
    notes: str | None = None
    tax_assessment_id: str | None = None
    property_id: str | None = None


ImportRecord = CustomerRecord | PropertyRecord | TaxAssessmentRecord | TaxPaymentRecord
