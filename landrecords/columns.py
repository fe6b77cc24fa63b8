from collections.abc import Iterable, Mapping
from typing import Any


BLANK_PLACEHOLDER = "not found"

# Aliases in priority order: an exact match on an earlier alias wins.
ALIASES: dict[str, tuple[str, ...]] = {
    "customer_type": ("customer_type", "Customer Type"),
    "property_id": (
        "property_id",
        "Property ID",
        "PROPERTY ID",
        "Property-ID",
        "property-id",
        "PROPERTY_ID",
        "pr_id",
        "PR-ID",
        "PR_ID",
    ),
    # people
    "full_name": ("full_name", "Full Name", "Name"),
    "first_name": ("first_name", "First Name"),
    "mothers_name": ("mothers_name", "Mothers Name", "Mother Name"),
    "date_of_birth": ("date_of_birth", "Date of Birth", "Date of brith", "DOB"),
    "place_of_birth": ("place_of_birth", "Place of Birth", "POB"),
    "gender": ("gender", "Gender", "Sex"),
    "nationality": ("nationality", "Nationality"),
    "mobile_number_1": ("mobile_number_1", "Mobile Number 1", "Contact Number", "Phone 1"),
    "mobile_number_2": ("mobile_number_2", "Mobile Number 2", "Contact Number 2", "Phone 2"),
    "carrier_mobile_1": ("carrier_mobile_1", "Carrier Mobile 1", "Carrier 1"),
    "carrier_mobile_2": ("carrier_mobile_2", "Carrier Mobile 2", "Carrier 2"),
    "email": ("email", "Email", "E-mail"),
    "id_type": ("id_type", "ID Type", "Type of ID"),
    "id_number": ("id_number", "ID Number", "ID No"),
    "place_of_issue": ("place_of_issue", "Place of Issue"),
    "issue_date": ("issue_date", "Issue Date"),
    "expiry_date": ("expiry_date", "Expiry Date"),
    "emergency_contact_name": ("emergency_contact_name", "Emergency Contact Name"),
    "emergency_contact_number": ("emergency_contact_number", "Emergency Contact Number"),
    # business
    "business_name": ("business_name", "Business Name", "Full Business Name", "business-name", "Business_Name"),
    "business_license_number": (
        "business_license_number",
        "Business License Number",
        "License Number",
        "Commercial License Number",
    ),
    "business_address": ("business_address", "Business Address", "Address"),
    # rental
    "rental_name": ("rental_name", "Rental Name", "Full Name", "Name"),
    "rental_mothers_name": ("rental_mothers_name", "Rental Mothers Name", "Mothers Name", "Mother Name"),
    # government
    "full_department_name": (
        "full_department_name",
        "Full Government / Department Name",
        "Full Department Name",
        "Department Name",
        "Government Department",
    ),
    "department_address": ("department_address", "Department Address", "Address", "Government Address"),
    "contact_name": ("contact_name", "Contact Name", "Contact Person"),
    # mosque / hospital
    "full_mosque_hospital_name": (
        "full_mosque_hospital_name",
        "Full Mosque or Hospital Name",
        "Full Mosque Hospital Name",
        "Mosque Hospital Name",
        "full_name",
        "Full Name",
    ),
    "mosque_registration_number": (
        "mosque_registration_number",
        "Mosque Registration Number",
        "Registration Number",
        "registration_number",
    ),
    # non-profit
    "ngo_name": ("ngo_name", "NGO Name", "full_non_profit_name", "Full Non-Profit Name", "Organization Name"),
    "ngo_registration_number": (
        "ngo_registration_number",
        "NGO Registration Number",
        "Registration Number",
        "Reg Number",
    ),
    # shared unit details
    "address": ("address", "Address"),
    "size": ("size", "Size"),
    "floor": ("floor", "Floor"),
    "file_number": ("file_number", "File Number", "File No"),
    # property
    "district_id": ("district_id", "District ID", "District"),
    "sub_district_id": ("sub_district_id", "Sub District ID"),
    "property_type_id": ("property_type_id", "Property Type ID"),
    "property_location": ("property_location", "Property Location", "Location"),
    "sub_location": ("sub_location", "Sub Location"),
    "is_downtown": ("is_downtown", "Is Downtown"),
    "is_building": ("is_building", "Is Building"),
    "has_built_area": ("has_built_area", "Has Built Area"),
    "has_property_wall": ("has_property_wall", "Has Property Wall"),
    "number_of_floors": ("number_of_floors", "Number of Floors", "Floors"),
    "parcel_area": ("parcel_area", "Parcel Area"),
    "door_number": ("door_number", "Door Number"),
    "road_name": ("road_name", "Road Name"),
    "postal_zip_code": ("postal_zip_code", "Postal Zip Code", "Zip Code"),
    "section": ("section", "Section"),
    "block": ("block", "Block"),
    "map_url": ("map_url", "Map URL"),
    "latitude": ("latitude", "Latitude"),
    "longitude": ("longitude", "Longitude"),
    "customer_reference_id": ("customer_reference_id", "Customer Reference ID", "Customer ID"),
    "north_length": ("north_length", "North Length"),
    "south_length": ("south_length", "South Length"),
    "east_length": ("east_length", "East Length"),
    "west_length": ("west_length", "West Length"),
    "north_type": ("north_type", "north_adjacent_type", "North Type"),
    "south_type": ("south_type", "south_adjacent_type", "South Type"),
    "east_type": ("east_type", "east_adjacent_type", "East Type"),
    "west_type": ("west_type", "west_adjacent_type", "West Type"),
    # tax
    "tax_type": ("tax_type", "Tax Type"),
    "tax_year": ("tax_year", "Tax Year", "Year"),
    "assessed_amount": ("assessed_amount", "Assessed Amount", "Assessment Amount", "Amount"),
    "exemption_amount": ("exemption_amount", "Exemption Amount", "Exemption"),
    "penalty_amount": ("penalty_amount", "Penalty Amount", "Penalty"),
    "due_date": ("due_date", "Due Date", "Payment Due Date"),
    "status": ("status", "Status", "Assessment Status"),
    "assessment_date": ("assessment_date", "Assessment Date"),
    "property_type": ("property_type", "Property Type", "Type"),
    "tax_assessment_id": ("tax_assessment_id", "Tax Assessment ID", "Assessment ID"),
    "payment_amount": ("payment_amount", "Payment Amount", "Amount", "Paid Amount"),
    "payment_date": ("payment_date", "Payment Date", "Date Paid"),
    "payment_method": ("payment_method", "Payment Method", "Method"),
    "receipt_number": ("receipt_number", "Receipt Number", "Receipt No", "Receipt"),
    "notes": ("notes", "Notes", "Comments"),
}


def _present(value: Any) -> bool:
    return value is not None and value != ""


def _normalize_key(key: Any) -> str:
    return str(key).strip().lower()


def resolve(row: Mapping[str, Any], aliases: Iterable[str]) -> Any | None:
    """Return the first non-empty value stored under any of ``aliases``.

    Exact keys are tried first in alias order, then every row key is compared
    trimmed and case-insensitively against the same aliases.
    """
    aliases = tuple(aliases)
    for alias in aliases:
        value = row.get(alias)
        if _present(value):
            return value

    for alias in aliases:
        wanted = _normalize_key(alias)
        for key, value in row.items():
            if _normalize_key(key) == wanted and _present(value):
                return value
    return None


def field_value(row: Mapping[str, Any], field: str) -> Any | None:
    return resolve(row, ALIASES.get(field, (field,)))


def has_column(row: Mapping[str, Any], headers: Iterable[str]) -> bool:
    """True when any of ``headers`` is a key of ``row`` holding a non-null value.

    Empty strings count: a blank cell under a header still says which template
    the spreadsheet was built from.
    """
    wanted = {_normalize_key(header) for header in headers}
    return any(value is not None and _normalize_key(key) in wanted for key, value in row.items())


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        stripped = value.strip()
        return not stripped or stripped.lower() == BLANK_PLACEHOLDER
    return False


def text_value(row: Mapping[str, Any], field: str) -> str | None:
    """Resolved value as stripped text, or None when blank."""
    value = field_value(row, field)
    if is_blank(value):
        return None
    return str(value).strip()
