from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from landrecords.columns import ALIASES, field_value, has_column, is_blank, resolve
from landrecords.schemas import CustomerSubtype, TaxKind


class UnknownRecordTypeError(ValueError):
    pass


class UnknownCustomerTypeError(UnknownRecordTypeError):
    def __init__(self, value: str) -> None:
        super().__init__(f"Unknown customer type: {value}")
        self.value = value


class UnknownTaxTypeError(UnknownRecordTypeError):
    def __init__(self, value: str) -> None:
        super().__init__(f"Unknown tax type: {value}")
        self.value = value


BUSINESS_MARKERS = ALIASES["business_name"]
GOVERNMENT_MARKERS = ALIASES["full_department_name"]
MOSQUE_HOSPITAL_MARKERS = (
    "full_mosque_hospital_name",
    "Full Mosque or Hospital Name",
    "Full Mosque Hospital Name",
    "Mosque Hospital Name",
    "mosque_registration_number",
    "Mosque Registration Number",
)
FIRST_NAME_MARKERS = ALIASES["first_name"]
NON_PROFIT_MARKERS = ALIASES["ngo_name"]
RENTAL_MARKERS = ("rental_name", "Rental Name", "rental_mothers_name", "Rental Mothers Name")
PROPERTY_ID_MARKERS = ALIASES["property_id"]
UNIT_DETAIL_MARKERS = ALIASES["size"] + ALIASES["floor"] + ALIASES["file_number"] + ALIASES["address"]

# Any of these means the row names somebody, which rules out RESIDENTIAL.
NAME_MARKERS = (
    ALIASES["full_name"]
    + FIRST_NAME_MARKERS
    + ALIASES["mothers_name"]
    + BUSINESS_MARKERS
    + GOVERNMENT_MARKERS
    + MOSQUE_HOSPITAL_MARKERS
    + NON_PROFIT_MARKERS
    + RENTAL_MARKERS
)

PAYMENT_MARKERS = (
    "payment_amount",
    "Payment Amount",
    "Paid Amount",
    "payment_date",
    "Payment Date",
    "Date Paid",
    "payment_method",
    "Payment Method",
    "Method",
)


@dataclass(frozen=True)
class DetectionRule:
    subtype: CustomerSubtype
    matches: Callable[[Mapping[str, Any]], bool]
    description: str


def _is_residential(row: Mapping[str, Any]) -> bool:
    return (
        has_column(row, PROPERTY_ID_MARKERS)
        and has_column(row, UNIT_DETAIL_MARKERS)
        and not has_column(row, NAME_MARKERS)
    )


# Checked top to bottom, first match wins. Specific organisation names come
# before RESIDENTIAL because a residential row carries no name at all.
CUSTOMER_RULES: tuple[DetectionRule, ...] = (
    DetectionRule(
        CustomerSubtype.BUSINESS,
        lambda row: has_column(row, BUSINESS_MARKERS),
        "business name column",
    ),
    DetectionRule(
        CustomerSubtype.GOVERNMENT,
        lambda row: has_column(row, GOVERNMENT_MARKERS),
        "department name column",
    ),
    DetectionRule(
        CustomerSubtype.MOSQUE_HOSPITAL,
        lambda row: has_column(row, MOSQUE_HOSPITAL_MARKERS) and not has_column(row, FIRST_NAME_MARKERS),
        "mosque or hospital name column without a first name",
    ),
    DetectionRule(
        CustomerSubtype.NON_PROFIT,
        lambda row: has_column(row, NON_PROFIT_MARKERS),
        "NGO name column",
    ),
    DetectionRule(
        CustomerSubtype.RESIDENTIAL,
        _is_residential,
        "property id with unit details and no name column",
    ),
    DetectionRule(
        CustomerSubtype.RENTAL,
        lambda row: has_column(row, RENTAL_MARKERS),
        "rental name column",
    ),
)

DEFAULT_SUBTYPE = CustomerSubtype.PERSON


def detect_customer_subtype(row: Mapping[str, Any]) -> CustomerSubtype:
    explicit = field_value(row, "customer_type")
    if not is_blank(explicit):
        value = str(explicit).strip().upper()
        try:
            return CustomerSubtype(value)
        except ValueError:
            raise UnknownCustomerTypeError(value) from None

    for rule in CUSTOMER_RULES:
        if rule.matches(row):
            return rule.subtype
    return DEFAULT_SUBTYPE


def detect_tax_kind(row: Mapping[str, Any]) -> TaxKind:
    explicit = field_value(row, "tax_type")
    if not is_blank(explicit):
        value = str(explicit).strip().upper()
        try:
            return TaxKind(value)
        except ValueError:
            raise UnknownTaxTypeError(value) from None

    if any(not is_blank(resolve(row, (marker,))) for marker in PAYMENT_MARKERS):
        return TaxKind.TAX_PAYMENT
    return TaxKind.TAX_ASSESSMENT
