from collections.abc import Callable, Mapping
from datetime import date
import re
import time
from typing import Any
import uuid

from landrecords.columns import field_value, text_value
from landrecords.conversions import (
    FALLBACK_DATE,
    clean_uuid,
    convert_spreadsheet_date,
    normalize_gender,
    to_bool,
    to_int,
    to_number,
)
from landrecords.records import (
    BoundaryRecord,
    BusinessRecord,
    CustomerRecord,
    GovernmentRecord,
    MosqueHospitalRecord,
    NonProfitRecord,
    PersonRecord,
    PropertyRecord,
    RentalRecord,
    ResidentialRecord,
    TaxAssessmentRecord,
    TaxPaymentRecord,
)
from landrecords.schemas import CustomerSubtype


Row = Mapping[str, Any]

UNKNOWN = "Unknown"
UNKNOWN_MOTHER = "Unknown Mother"
CONTACT_PERSON = "Contact Person"
DEFAULT_ID_TYPE = "National ID Card"
MOBILE_SENTINEL_1 = "+252612345678"
MOBILE_SENTINEL_2 = "+252612345679"

SUBTYPE_TAGS = {
    CustomerSubtype.PERSON: "PER",
    CustomerSubtype.BUSINESS: "BUS",
    CustomerSubtype.GOVERNMENT: "GOV",
    CustomerSubtype.MOSQUE_HOSPITAL: "MOS",
    CustomerSubtype.NON_PROFIT: "NGO",
    CustomerSubtype.RESIDENTIAL: "RES",
    CustomerSubtype.RENTAL: "RENT",
}


def _epoch_ms() -> int:
    return time.time_ns() // 1_000_000


def generated_property_id(tag: str) -> str:
    return f"PR-{tag}-{_epoch_ms()}-{uuid.uuid4().hex[:6].upper()}"


def generated_registration_number(tag: str) -> str:
    return f"{tag}-REG-{_epoch_ms()}"


def synthesized_email(name: str) -> str:
    parts = [re.sub(r"[^a-z0-9]", "", word) for word in name.lower().split()]
    local = ".".join(part for part in parts if part)
    return f"{local or 'unknown'}@example.com"


def _property_id(row: Row, subtype: CustomerSubtype) -> str:
    return text_value(row, "property_id") or generated_property_id(SUBTYPE_TAGS[subtype])


def _date(row: Row, field: str) -> str | None:
    return convert_spreadsheet_date(field_value(row, field))


def transform_person(row: Row) -> PersonRecord:
    full_name = text_value(row, "full_name") or UNKNOWN
    return PersonRecord(
        property_id=_property_id(row, CustomerSubtype.PERSON),
        full_name=full_name,
        mothers_name=text_value(row, "mothers_name") or UNKNOWN_MOTHER,
        date_of_birth=_date(row, "date_of_birth") or FALLBACK_DATE,
        place_of_birth=text_value(row, "place_of_birth") or UNKNOWN,
        gender=normalize_gender(field_value(row, "gender")),
        nationality=text_value(row, "nationality") or UNKNOWN,
        mobile_number_1=text_value(row, "mobile_number_1") or MOBILE_SENTINEL_1,
        email=text_value(row, "email") or synthesized_email(full_name),
        id_type=text_value(row, "id_type") or DEFAULT_ID_TYPE,
        id_number=text_value(row, "id_number"),
        place_of_issue=text_value(row, "place_of_issue"),
        issue_date=_date(row, "issue_date"),
        expiry_date=_date(row, "expiry_date"),
        mobile_number_2=text_value(row, "mobile_number_2"),
        carrier_mobile_1=text_value(row, "carrier_mobile_1"),
        carrier_mobile_2=text_value(row, "carrier_mobile_2"),
        emergency_contact_name=text_value(row, "emergency_contact_name"),
        emergency_contact_number=text_value(row, "emergency_contact_number"),
    )


def transform_business(row: Row) -> BusinessRecord:
    return BusinessRecord(
        property_id=text_value(row, "property_id"),
        business_name=text_value(row, "business_name"),
        business_license_number=text_value(row, "business_license_number"),
        business_address=text_value(row, "business_address"),
        rental_name=text_value(row, "rental_name"),
        mobile_number_1=text_value(row, "mobile_number_1"),
        mobile_number_2=text_value(row, "mobile_number_2"),
        email=text_value(row, "email"),
        size=text_value(row, "size"),
        floor=text_value(row, "floor"),
        file_number=text_value(row, "file_number"),
    )


def transform_government(row: Row) -> GovernmentRecord:
    return GovernmentRecord(
        property_id=_property_id(row, CustomerSubtype.GOVERNMENT),
        full_department_name=text_value(row, "full_department_name") or UNKNOWN,
        contact_name=text_value(row, "contact_name") or CONTACT_PERSON,
        department_address=text_value(row, "department_address"),
        mobile_number_1=text_value(row, "mobile_number_1"),
        mobile_number_2=text_value(row, "mobile_number_2"),
        email=text_value(row, "email"),
        file_number=text_value(row, "file_number"),
        size=text_value(row, "size"),
    )


def transform_mosque_hospital(row: Row) -> MosqueHospitalRecord:
    tag = SUBTYPE_TAGS[CustomerSubtype.MOSQUE_HOSPITAL]
    return MosqueHospitalRecord(
        property_id=_property_id(row, CustomerSubtype.MOSQUE_HOSPITAL),
        full_mosque_hospital_name=text_value(row, "full_mosque_hospital_name") or UNKNOWN,
        mosque_registration_number=text_value(row, "mosque_registration_number")
        or generated_registration_number(tag),
        contact_name=text_value(row, "contact_name") or CONTACT_PERSON,
        mobile_number_1=text_value(row, "mobile_number_1") or MOBILE_SENTINEL_1,
        mobile_number_2=text_value(row, "mobile_number_2"),
        email=text_value(row, "email"),
        address=text_value(row, "address"),
        size=text_value(row, "size"),
        floor=text_value(row, "floor"),
        file_number=text_value(row, "file_number"),
    )


def transform_non_profit(row: Row) -> NonProfitRecord:
    tag = SUBTYPE_TAGS[CustomerSubtype.NON_PROFIT]
    return NonProfitRecord(
        property_id=_property_id(row, CustomerSubtype.NON_PROFIT),
        ngo_name=text_value(row, "ngo_name") or UNKNOWN,
        ngo_registration_number=text_value(row, "ngo_registration_number") or generated_registration_number(tag),
        contact_name=text_value(row, "contact_name") or CONTACT_PERSON,
        mobile_number_1=text_value(row, "mobile_number_1") or MOBILE_SENTINEL_1,
        mobile_number_2=text_value(row, "mobile_number_2"),
        email=text_value(row, "email"),
        size=text_value(row, "size"),
        floor=text_value(row, "floor"),
        address=text_value(row, "address"),
        file_number=text_value(row, "file_number"),
    )


def transform_residential(row: Row) -> ResidentialRecord:
    return ResidentialRecord(
        property_id=_property_id(row, CustomerSubtype.RESIDENTIAL),
        size=text_value(row, "size"),
        floor=text_value(row, "floor"),
        file_number=text_value(row, "file_number"),
        address=text_value(row, "address"),
    )


def transform_rental(row: Row) -> RentalRecord:
    rental_name = text_value(row, "rental_name") or UNKNOWN
    return RentalRecord(
        property_id=_property_id(row, CustomerSubtype.RENTAL),
        rental_name=rental_name,
        rental_mothers_name=text_value(row, "rental_mothers_name") or UNKNOWN_MOTHER,
        date_of_birth=_date(row, "date_of_birth") or FALLBACK_DATE,
        place_of_birth=text_value(row, "place_of_birth") or UNKNOWN,
        gender=normalize_gender(field_value(row, "gender")),
        nationality=text_value(row, "nationality") or UNKNOWN,
        mobile_number_1=text_value(row, "mobile_number_1") or MOBILE_SENTINEL_1,
        mobile_number_2=text_value(row, "mobile_number_2") or MOBILE_SENTINEL_2,
        email=text_value(row, "email") or synthesized_email(rental_name),
        id_type=text_value(row, "id_type") or DEFAULT_ID_TYPE,
    )


CUSTOMER_TRANSFORMERS: dict[CustomerSubtype, Callable[[Row], CustomerRecord]] = {
    CustomerSubtype.PERSON: transform_person,
    CustomerSubtype.BUSINESS: transform_business,
    CustomerSubtype.GOVERNMENT: transform_government,
    CustomerSubtype.MOSQUE_HOSPITAL: transform_mosque_hospital,
    CustomerSubtype.NON_PROFIT: transform_non_profit,
    CustomerSubtype.RESIDENTIAL: transform_residential,
    CustomerSubtype.RENTAL: transform_rental,
}


def transform_customer(row: Row, subtype: CustomerSubtype) -> CustomerRecord:
    return CUSTOMER_TRANSFORMERS[subtype](row)


def _boundary(row: Row) -> BoundaryRecord | None:
    lengths = {side: to_number(field_value(row, f"{side}_length")) for side in ("north", "south", "east", "west")}
    if any(length is None for length in lengths.values()):
        return None

    def adjacent(side: str) -> str | None:
        value = text_value(row, f"{side}_type")
        return value.upper() if value else None

    return BoundaryRecord(
        north_length=lengths["north"],
        north_adjacent_type=adjacent("north"),
        south_length=lengths["south"],
        south_adjacent_type=adjacent("south"),
        east_length=lengths["east"],
        east_adjacent_type=adjacent("east"),
        west_length=lengths["west"],
        west_adjacent_type=adjacent("west"),
    )


def _coordinates(row: Row) -> str | None:
    latitude = to_number(field_value(row, "latitude"))
    longitude = to_number(field_value(row, "longitude"))
    if latitude is None or longitude is None:
        return None
    return f"POINT({longitude:g} {latitude:g})"


def transform_property(row: Row) -> PropertyRecord:
    district_id = clean_uuid(field_value(row, "district_id"))
    if district_id is None:
        raise ValueError("district_id is required and must be a valid UUID")
    size = to_number(field_value(row, "size"))
    if size is None:
        raise ValueError("size is required and must be a number")

    customer_reference_id = text_value(row, "customer_reference_id")
    if customer_reference_id and "optional" in customer_reference_id.lower():
        customer_reference_id = None

    return PropertyRecord(
        district_id=district_id,
        size=size,
        property_location=text_value(row, "property_location"),
        sub_location=text_value(row, "sub_location"),
        sub_district_id=clean_uuid(field_value(row, "sub_district_id")),
        property_type_id=clean_uuid(field_value(row, "property_type_id")),
        is_downtown=to_bool(field_value(row, "is_downtown"), default=False),
        is_building=to_bool(field_value(row, "is_building"), default=True),
        has_built_area=to_bool(field_value(row, "has_built_area"), default=False),
        has_property_wall=to_bool(field_value(row, "has_property_wall"), default=False),
        number_of_floors=to_int(field_value(row, "number_of_floors")),
        parcel_area=to_number(field_value(row, "parcel_area")),
        door_number=text_value(row, "door_number"),
        road_name=text_value(row, "road_name"),
        postal_zip_code=text_value(row, "postal_zip_code"),
        section=text_value(row, "section"),
        block=text_value(row, "block"),
        map_url=text_value(row, "map_url"),
        coordinates=_coordinates(row),
        customer_reference_id=customer_reference_id,
        boundary=_boundary(row),
    )


def transform_tax_assessment(row: Row, today: date | None = None) -> TaxAssessmentRecord:
    today = today or date.today()
    property_id = clean_uuid(field_value(row, "property_id"))
    if property_id is None:
        raise ValueError("property_id is required and must be a valid UUID")
    tax_year = to_int(field_value(row, "tax_year"))
    if tax_year is None:
        raise ValueError("tax_year is required and must be a whole number")

    status = text_value(row, "status")
    property_type = text_value(row, "property_type")
    return TaxAssessmentRecord(
        property_id=property_id,
        tax_year=tax_year,
        assessed_amount=to_number(field_value(row, "assessed_amount")) or 0.0,
        exemption_amount=to_number(field_value(row, "exemption_amount")) or 0.0,
        penalty_amount=to_number(field_value(row, "penalty_amount")) or 0.0,
        assessment_date=_date(row, "assessment_date") or today.isoformat(),
        due_date=_date(row, "due_date") or today.isoformat(),
        status=status.upper() if status else "DRAFT",
        property_type=property_type.upper() if property_type else "RESIDENTIAL",
    )


def _format_amount(amount: float) -> str:
    return str(int(amount)) if amount.is_integer() else str(amount)


def transform_tax_payment(row: Row, today: date | None = None) -> TaxPaymentRecord:
    today = today or date.today()
    tax_assessment_id = clean_uuid(field_value(row, "tax_assessment_id"))
    property_id = clean_uuid(field_value(row, "property_id"))
    amount = to_number(field_value(row, "payment_amount"))

    linking = []
    if tax_assessment_id:
        linking.append(f"Tax Assessment ID: {tax_assessment_id}")
    if property_id:
        linking.append(f"Property ID: {property_id}")
    if amount:
        linking.append(f"Payment Amount: {_format_amount(amount)}")

    notes = text_value(row, "notes")
    if linking:
        notes = " | ".join(([notes] if notes else []) + linking)

    method = text_value(row, "payment_method")
    return TaxPaymentRecord(
        payment_date=_date(row, "payment_date") or today.isoformat(),
        payment_method=method.upper() if method else "CASH",
        receipt_number=text_value(row, "receipt_number") or f"RCP-{_epoch_ms()}-{uuid.uuid4().hex[:4].upper()}",
        amount_paid=amount,
        notes=notes,
        tax_assessment_id=tax_assessment_id,
        property_id=property_id,
    )
