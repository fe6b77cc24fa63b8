from typing import Any

from landrecords.errors import BadRequestError
from landrecords.schemas import CustomerSubtype, EntityType, TaxKind, TemplateData
from landrecords.validators import BOUNDARY_SIDES, VALIDATORS


EXAMPLE_DISTRICT_ID = "3f1c2a9e-6b4d-4e8a-9c71-2d5e8f0a1b34"
EXAMPLE_PROPERTY_ID = "8a7b6c5d-4e3f-4a1b-8c2d-9e0f1a2b3c4d"

CUSTOMER_EXAMPLES: dict[CustomerSubtype, dict[str, Any]] = {
    CustomerSubtype.PERSON: {
        "property_id": "PR-2025-001",
        "full_name": "John Doe Smith",
        "mothers_name": "Jane Smith",
        "date_of_birth": "1990-01-01",
        "place_of_birth": "Mogadishu",
        "gender": "MALE",
        "nationality": "Somalia",
        "mobile_number_1": "+252-612-345-678",
        "email": "john@example.com",
        "id_type": "National ID Card",
        "id_number": "ID123456",
        "place_of_issue": "Mogadishu",
        "issue_date": "2020-01-01",
        "expiry_date": "2030-01-01",
    },
    CustomerSubtype.BUSINESS: {
        "property_id": "PR-2025-002",
        "business_name": "Hodan Trading Co.",
        "business_license_number": "BL-2025-0042",
        "business_address": "Maka Al Mukarama Road, Mogadishu",
        "mobile_number_1": "+252-612-345-678",
        "email": "info@hodantrading.example.com",
        "size": "250 sqm",
        "floor": "Ground",
        "file_number": "F-0042",
    },
    CustomerSubtype.GOVERNMENT: {
        "property_id": "PR-2025-003",
        "full_department_name": "Ministry of Public Works",
        "contact_name": "Ahmed Ali",
        "department_address": "Government Complex, Mogadishu",
        "mobile_number_1": "+252-612-345-678",
        "email": "works@gov.example.com",
        "file_number": "GOV-17",
    },
    CustomerSubtype.MOSQUE_HOSPITAL: {
        "property_id": "PR-2025-004",
        "full_mosque_hospital_name": "Central Community Hospital",
        "mosque_registration_number": "MH-REG-0091",
        "contact_name": "Fadumo Hassan",
        "mobile_number_1": "+252-612-345-678",
        "address": "Hodan District, Mogadishu",
    },
    CustomerSubtype.NON_PROFIT: {
        "property_id": "PR-2025-005",
        "ngo_name": "Clean Water Initiative",
        "ngo_registration_number": "NGO-REG-0310",
        "contact_name": "Abdi Warsame",
        "mobile_number_1": "+252-612-345-678",
        "email": "contact@cleanwater.example.org",
    },
    CustomerSubtype.RESIDENTIAL: {
        "property_id": "PR-2025-006",
        "size": "120",
        "floor": "2",
        "file_number": "RES-0006",
        "address": "Wadajir District, Mogadishu",
    },
    CustomerSubtype.RENTAL: {
        "property_id": "PR-2025-007",
        "rental_name": "Maryan Yusuf",
        "rental_mothers_name": "Halima Omar",
        "date_of_birth": "1988-06-15",
        "place_of_birth": "Kismayo",
        "gender": "FEMALE",
        "nationality": "Somalia",
        "mobile_number_1": "+252-612-345-678",
        "mobile_number_2": "+252-612-345-679",
        "email": "maryan@example.com",
        "id_type": "Passport",
    },
}

PROPERTY_EXAMPLE: dict[str, Any] = {
    "district_id": EXAMPLE_DISTRICT_ID,
    "size": 250,
    "property_location": "123 Main Street",
    "is_building": True,
    "number_of_floors": 2,
    "door_number": "123",
    "road_name": "Main Street",
    "latitude": 2.0469,
    "longitude": 45.3182,
    "north_length": 20,
    "north_type": "ROAD",
    "south_length": 20,
    "south_type": "BUILDING",
    "east_length": 12.5,
    "east_type": "EMPTY_LAND",
    "west_length": 12.5,
    "west_type": "BUILDING",
}

TAX_EXAMPLES: dict[TaxKind, dict[str, Any]] = {
    TaxKind.TAX_ASSESSMENT: {
        "tax_type": "TAX_ASSESSMENT",
        "property_id": EXAMPLE_PROPERTY_ID,
        "tax_year": 2025,
        "assessed_amount": 10000,
        "exemption_amount": 0,
        "due_date": "2025-12-31",
        "status": "DRAFT",
        "property_type": "RESIDENTIAL",
    },
    TaxKind.TAX_PAYMENT: {
        "tax_type": "TAX_PAYMENT",
        "property_id": EXAMPLE_PROPERTY_ID,
        "payment_date": "2025-03-01",
        "payment_method": "BANK_TRANSFER",
        "payment_amount": 2500,
        "receipt_number": "RCP-2025-0001",
        "notes": "First instalment",
    },
}


def _headers(leading: tuple[str, ...], fields: tuple[str, ...]) -> list[str]:
    headers = list(leading)
    headers.extend(field for field in fields if field not in headers)
    return headers


def customer_template(customer_type: str | None = None) -> TemplateData:
    try:
        subtype = CustomerSubtype((customer_type or CustomerSubtype.PERSON.value).strip().upper())
    except ValueError:
        raise BadRequestError(f"Invalid customer type: {customer_type}") from None

    return TemplateData(
        headers=_headers(("customer_type",), VALIDATORS[subtype].fields),
        example={"customer_type": subtype.value, **CUSTOMER_EXAMPLES[subtype]},
    )


def property_template() -> TemplateData:
    extra = ("is_building", "latitude", "longitude")
    boundaries = tuple(f"{side}_{part}" for side in BOUNDARY_SIDES for part in ("length", "type"))
    return TemplateData(
        headers=_headers((), VALIDATORS[EntityType.PROPERTY].fields + extra + boundaries),
        example=dict(PROPERTY_EXAMPLE),
    )


def tax_template(kind: TaxKind) -> TemplateData:
    return TemplateData(
        headers=_headers(("tax_type",), VALIDATORS[kind].fields),
        example=dict(TAX_EXAMPLES[kind]),
    )


def generate_template(entity_type: EntityType, customer_type: str | None = None) -> TemplateData:
    if entity_type is EntityType.CUSTOMER:
        return customer_template(customer_type)
    if entity_type is EntityType.PROPERTY:
        return property_template()
    if entity_type is EntityType.TAX_PAYMENT:
        return tax_template(TaxKind.TAX_PAYMENT)
    return tax_template(TaxKind.TAX_ASSESSMENT)
