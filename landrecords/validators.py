from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from landrecords.columns import field_value, is_blank
from landrecords.conversions import is_iso_date, is_valid_email, is_valid_mobile, is_valid_uuid, to_int, to_number
from landrecords.schemas import CustomerSubtype, EntityType, TaxKind


Row = Mapping[str, Any]
Validator = Callable[[Row, list[str]], None]

ID_MAX = 50
NAME_MAX = 200
ADDRESS_MAX = 500
NUMBER_MAX = 100
SIZE_MAX = 100
FLOOR_MAX = 50
EMAIL_MAX = 255

GENDERS = ("MALE", "M", "MAN", "FEMALE", "FEMAL", "F", "WOMAN")
ADJACENT_TYPES = ("BUILDING", "EMPTY_LAND", "ROAD")
ASSESSMENT_STATUSES = ("DRAFT", "PENDING", "APPROVED", "REJECTED", "PAID", "OVERDUE")
ASSESSMENT_PROPERTY_TYPES = ("RESIDENTIAL", "COMMERCIAL", "INDUSTRIAL", "AGRICULTURAL", "GOVERNMENT", "RELIGIOUS")
PAYMENT_METHODS = ("CASH", "BANK_TRANSFER", "CHECK", "CREDIT_CARD", "MOBILE_MONEY", "ONLINE")
BOUNDARY_SIDES = ("north", "south", "east", "west")


@dataclass(frozen=True)
class Format:
    accepts: Callable[[Any], bool]
    message: str


UUID = Format(is_valid_uuid, "must be a valid UUID")
EMAIL = Format(is_valid_email, "must be a valid email address")
MOBILE = Format(is_valid_mobile, "must be in format +XXX-XXX-XXX-XXX (e.g., +252-612-345-678)")
ISO_DATE = Format(is_iso_date, "must be in YYYY-MM-DD format")


def one_of(choices: tuple[str, ...]) -> Format:
    return Format(lambda value: str(value).strip().upper() in choices, f"must be one of: {', '.join(choices)}")


def number_at_least(minimum: float, *, exclusive: bool = False) -> Format:
    def accepts(value: Any) -> bool:
        number = to_number(value)
        if number is None:
            return False
        return number > minimum if exclusive else number >= minimum

    if exclusive:
        return Format(accepts, f"must be a number greater than {minimum:g}")
    return Format(accepts, f"must be a number of at least {minimum:g}")


def integer_between(low: int, high: int) -> Format:
    def accepts(value: Any) -> bool:
        number = to_int(value)
        return number is not None and low <= number <= high

    return Format(accepts, f"must be a whole number between {low} and {high}")


POSITIVE = number_at_least(0, exclusive=True)
NON_NEGATIVE = number_at_least(0)


@dataclass(frozen=True)
class FieldRule:
    field: str
    required: bool = False
    max_length: int | None = None
    min_length: int | None = None
    format: Format | None = None

    def check(self, row: Row, errors: list[str]) -> None:
        value = field_value(row, self.field)
        if is_blank(value):
            if self.required:
                errors.append(f"{self.field} is required")
            return

        text = str(value).strip()
        if self.min_length is not None and len(text) < self.min_length:
            errors.append(f"{self.field} must be at least {self.min_length} characters")
        if self.max_length is not None and len(text) > self.max_length:
            errors.append(f"{self.field} must be {self.max_length} characters or less")
        if self.format is not None and not self.format.accepts(value):
            errors.append(f"{self.field} {self.format.message}")


def required(field: str, **kwargs: Any) -> FieldRule:
    return FieldRule(field, required=True, **kwargs)


def optional(field: str, **kwargs: Any) -> FieldRule:
    return FieldRule(field, required=False, **kwargs)


class RuleSet:
    """Field rules followed by cross-field checks, used as ``(row, errors) -> None``."""

    def __init__(self, rules: tuple[FieldRule, ...], cross_checks: tuple[Validator, ...] = ()) -> None:
        self.rules = rules
        self.cross_checks = cross_checks

    @property
    def required_fields(self) -> tuple[str, ...]:
        return tuple(rule.field for rule in self.rules if rule.required)

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(rule.field for rule in self.rules)

    def __call__(self, row: Row, errors: list[str]) -> None:
        for rule in self.rules:
            rule.check(row, errors)
        for cross_check in self.cross_checks:
            cross_check(row, errors)


def check_boundaries(row: Row, errors: list[str]) -> None:
    provided = [side for side in BOUNDARY_SIDES if not is_blank(field_value(row, f"{side}_length"))]
    if 0 < len(provided) < len(BOUNDARY_SIDES):
        errors.append("If boundary data is provided, all four sides (north, south, east, west) must be specified")

    for side in provided:
        length = to_number(field_value(row, f"{side}_length"))
        if length is None or length <= 0:
            errors.append(f"{side}_length must be a positive number")

    for side in BOUNDARY_SIDES:
        adjacent = field_value(row, f"{side}_type")
        if not is_blank(adjacent) and str(adjacent).strip().upper() not in ADJACENT_TYPES:
            errors.append(f"{side}_type must be one of: {', '.join(ADJACENT_TYPES)}")


def check_coordinates(row: Row, errors: list[str]) -> None:
    latitude = field_value(row, "latitude")
    longitude = field_value(row, "longitude")
    if not is_blank(latitude) and is_blank(longitude):
        errors.append("If latitude is provided, longitude must also be provided")
    if not is_blank(longitude) and is_blank(latitude):
        errors.append("If longitude is provided, latitude must also be provided")

    for name, value, limit in (("latitude", latitude, 90), ("longitude", longitude, 180)):
        if is_blank(value):
            continue
        number = to_number(value)
        if number is None or not -limit <= number <= limit:
            errors.append(f"{name} must be a number between -{limit} and {limit}")


def check_payment_reference(row: Row, errors: list[str]) -> None:
    if is_blank(field_value(row, "tax_assessment_id")) and is_blank(field_value(row, "property_id")):
        errors.append("Either tax_assessment_id or property_id is required")


PERSON_RULES = RuleSet(
    (
        required("property_id", max_length=ID_MAX),
        required("full_name", max_length=NAME_MAX),
        required("mothers_name", max_length=NAME_MAX),
        required("date_of_birth"),
        required("place_of_birth", max_length=NAME_MAX),
        required("gender", format=one_of(GENDERS)),
        required("nationality", max_length=NUMBER_MAX),
        required("mobile_number_1", format=MOBILE),
        required("email", max_length=EMAIL_MAX, format=EMAIL),
        required("id_type", max_length=NUMBER_MAX),
        optional("id_number", max_length=NUMBER_MAX),
        optional("place_of_issue", max_length=NAME_MAX),
        optional("issue_date"),
        optional("expiry_date"),
        optional("mobile_number_2", format=MOBILE),
        optional("carrier_mobile_1", max_length=NUMBER_MAX),
        optional("carrier_mobile_2", max_length=NUMBER_MAX),
        optional("emergency_contact_name", max_length=NAME_MAX),
        optional("emergency_contact_number", format=MOBILE),
    )
)

RENTAL_RULES = RuleSet(
    (
        required("property_id", max_length=ID_MAX),
        required("rental_name", max_length=NAME_MAX),
        required("rental_mothers_name", max_length=NAME_MAX),
        required("date_of_birth"),
        required("place_of_birth", max_length=NAME_MAX),
        required("gender", format=one_of(GENDERS)),
        required("nationality", max_length=NUMBER_MAX),
        required("mobile_number_1", format=MOBILE),
        required("mobile_number_2", format=MOBILE),
        required("email", max_length=EMAIL_MAX, format=EMAIL),
        required("id_type", max_length=NUMBER_MAX),
    )
)

# Business rows arrive half filled from older spreadsheets: nothing is mandatory.
BUSINESS_RULES = RuleSet(
    (
        optional("property_id", max_length=ID_MAX),
        optional("business_name", max_length=NAME_MAX),
        optional("business_license_number", max_length=NUMBER_MAX),
        optional("business_address", max_length=ADDRESS_MAX),
        optional("rental_name", max_length=NAME_MAX),
        optional("mobile_number_1", format=MOBILE),
        optional("mobile_number_2", format=MOBILE),
        optional("email", max_length=EMAIL_MAX, format=EMAIL),
        optional("size", max_length=SIZE_MAX),
        optional("floor", max_length=FLOOR_MAX),
        optional("file_number", max_length=NUMBER_MAX),
    )
)

GOVERNMENT_RULES = RuleSet(
    (
        required("property_id", max_length=ID_MAX),
        required("full_department_name", min_length=3, max_length=NAME_MAX),
        required("contact_name", max_length=NAME_MAX),
        optional("department_address", max_length=ADDRESS_MAX),
        optional("mobile_number_1", format=MOBILE),
        optional("mobile_number_2", format=MOBILE),
        optional("email", max_length=EMAIL_MAX, format=EMAIL),
        optional("file_number", max_length=NUMBER_MAX),
        optional("size", max_length=SIZE_MAX),
    )
)

MOSQUE_HOSPITAL_RULES = RuleSet(
    (
        required("property_id", max_length=ID_MAX),
        required("full_mosque_hospital_name", max_length=NAME_MAX),
        required("mosque_registration_number", max_length=NUMBER_MAX),
        required("contact_name", max_length=NAME_MAX),
        required("mobile_number_1", format=MOBILE),
        optional("mobile_number_2", format=MOBILE),
        optional("email", max_length=EMAIL_MAX, format=EMAIL),
        optional("address", max_length=ADDRESS_MAX),
        optional("size", max_length=SIZE_MAX),
        optional("floor", max_length=FLOOR_MAX),
        optional("file_number", max_length=NUMBER_MAX),
    )
)

NON_PROFIT_RULES = RuleSet(
    (
        required("property_id", max_length=ID_MAX),
        required("ngo_name", min_length=2, max_length=NAME_MAX),
        required("ngo_registration_number", max_length=NUMBER_MAX),
        required("contact_name", max_length=NAME_MAX),
        required("mobile_number_1", format=MOBILE),
        optional("mobile_number_2", format=MOBILE),
        optional("email", max_length=EMAIL_MAX, format=EMAIL),
        optional("size", max_length=SIZE_MAX),
        optional("floor", max_length=FLOOR_MAX),
        optional("address", max_length=ADDRESS_MAX),
        optional("file_number", max_length=NUMBER_MAX),
    )
)

RESIDENTIAL_RULES = RuleSet(
    (
        required("property_id", max_length=ID_MAX),
        optional("size", max_length=SIZE_MAX),
        optional("floor", max_length=FLOOR_MAX),
        optional("file_number", max_length=NUMBER_MAX),
        optional("address", max_length=ADDRESS_MAX),
    )
)

PROPERTY_RULES = RuleSet(
    (
        required("district_id", format=UUID),
        required("size", format=POSITIVE),
        optional("property_type_id", format=UUID),
        optional("sub_district_id", format=UUID),
        optional("number_of_floors", format=integer_between(1, 14)),
        optional("parcel_area", format=POSITIVE),
        optional("property_location", max_length=ADDRESS_MAX),
        optional("sub_location", max_length=ADDRESS_MAX),
        optional("door_number", max_length=FLOOR_MAX),
        optional("road_name", max_length=NAME_MAX),
        optional("customer_reference_id", max_length=64),
    ),
    cross_checks=(check_boundaries, check_coordinates),
)

TAX_ASSESSMENT_RULES = RuleSet(
    (
        required("property_id", format=UUID),
        required("tax_year", format=integer_between(2020, 2030)),
        required("assessed_amount", format=NON_NEGATIVE),
        required("due_date", format=ISO_DATE),
        required("status", format=one_of(ASSESSMENT_STATUSES)),
        optional("exemption_amount", format=NON_NEGATIVE),
        optional("penalty_amount", format=NON_NEGATIVE),
        optional("assessment_date", format=ISO_DATE),
        optional("property_type", format=one_of(ASSESSMENT_PROPERTY_TYPES)),
    )
)

TAX_PAYMENT_RULES = RuleSet(
    (
        required("payment_date", format=ISO_DATE),
        required("payment_method", format=one_of(PAYMENT_METHODS)),
        optional("receipt_number", max_length=100),
        optional("notes", max_length=1000),
        optional("payment_amount", format=POSITIVE),
        optional("tax_assessment_id", format=UUID),
        optional("property_id", format=UUID),
    ),
    cross_checks=(check_payment_reference,),
)

VALIDATORS: dict[Enum, RuleSet] = {
    CustomerSubtype.PERSON: PERSON_RULES,
    CustomerSubtype.BUSINESS: BUSINESS_RULES,
    CustomerSubtype.GOVERNMENT: GOVERNMENT_RULES,
    CustomerSubtype.MOSQUE_HOSPITAL: MOSQUE_HOSPITAL_RULES,
    CustomerSubtype.NON_PROFIT: NON_PROFIT_RULES,
    CustomerSubtype.RESIDENTIAL: RESIDENTIAL_RULES,
    CustomerSubtype.RENTAL: RENTAL_RULES,
    EntityType.PROPERTY: PROPERTY_RULES,
    TaxKind.TAX_ASSESSMENT: TAX_ASSESSMENT_RULES,
    TaxKind.TAX_PAYMENT: TAX_PAYMENT_RULES,
}
