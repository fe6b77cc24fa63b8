import pytest

from landrecords.detection import (
    CUSTOMER_RULES,
    UnknownCustomerTypeError,
    UnknownTaxTypeError,
    detect_customer_subtype,
    detect_tax_kind,
)
from landrecords.schemas import CustomerSubtype, TaxKind


def test_explicit_customer_type_wins_and_is_upper_cased() -> None:
    row = {"customer_type": " rental ", "business_name": "Hodan Trading"}

    assert detect_customer_subtype(row) is CustomerSubtype.RENTAL


def test_unknown_explicit_customer_type_is_rejected() -> None:
    with pytest.raises(UnknownCustomerTypeError, match="Unknown customer type: ALIEN"):
        detect_customer_subtype({"Customer Type": "alien"})


@pytest.mark.parametrize(
    ("row", "expected"),
    [
        ({"business_name": "Hodan Trading"}, CustomerSubtype.BUSINESS),
        ({"Full Government / Department Name": "Ministry of Works"}, CustomerSubtype.GOVERNMENT),
        ({"full_mosque_hospital_name": "Central Hospital"}, CustomerSubtype.MOSQUE_HOSPITAL),
        ({"NGO Name": "Clean Water"}, CustomerSubtype.NON_PROFIT),
        ({"property_id": "PR-1", "size": "120"}, CustomerSubtype.RESIDENTIAL),
        ({"rental_name": "Maryan Yusuf"}, CustomerSubtype.RENTAL),
        ({"full_name": "Ada Lovelace"}, CustomerSubtype.PERSON),
        ({}, CustomerSubtype.PERSON),
    ],
)
def test_cascade_examples(row: dict, expected: CustomerSubtype) -> None:
    assert detect_customer_subtype(row) is expected


def test_business_name_beats_later_rules() -> None:
    row = {"business_name": "Hodan Trading", "Department Name": "Works", "ngo_name": "Clean Water"}

    assert detect_customer_subtype(row) is CustomerSubtype.BUSINESS


def test_first_name_blocks_mosque_hospital() -> None:
    row = {"full_mosque_hospital_name": "Central Hospital", "first_name": "Ada"}

    assert detect_customer_subtype(row) is CustomerSubtype.PERSON


def test_any_name_column_blocks_residential() -> None:
    row = {"property_id": "PR-1", "size": "120", "full_name": "Ada Lovelace"}

    assert detect_customer_subtype(row) is CustomerSubtype.PERSON


def test_blank_business_name_still_marks_business() -> None:
    assert detect_customer_subtype({"business_name": ""}) is CustomerSubtype.BUSINESS


def test_residential_detection_is_deterministic() -> None:
    row = {"PROPERTY ID": "PR-77", "Size": "300", "Floor": "1"}

    assert {detect_customer_subtype(row) for _ in range(10)} == {CustomerSubtype.RESIDENTIAL}


def test_rule_order_is_fixed() -> None:
    assert [rule.subtype for rule in CUSTOMER_RULES] == [
        CustomerSubtype.BUSINESS,
        CustomerSubtype.GOVERNMENT,
        CustomerSubtype.MOSQUE_HOSPITAL,
        CustomerSubtype.NON_PROFIT,
        CustomerSubtype.RESIDENTIAL,
        CustomerSubtype.RENTAL,
    ]


@pytest.mark.parametrize(
    ("row", "expected"),
    [
        ({"tax_type": "tax_payment", "tax_year": 2025}, TaxKind.TAX_PAYMENT),
        ({"Tax Type": "TAX_ASSESSMENT", "payment_date": "2025-01-01"}, TaxKind.TAX_ASSESSMENT),
        ({"payment_method": "CASH"}, TaxKind.TAX_PAYMENT),
        ({"Date Paid": "2025-01-01"}, TaxKind.TAX_PAYMENT),
        ({"Method": "MOBILE_MONEY", "Receipt": "R-9"}, TaxKind.TAX_PAYMENT),
        ({"tax_year": 2025, "Amount": 100}, TaxKind.TAX_ASSESSMENT),
        ({"payment_method": "", "tax_year": 2025}, TaxKind.TAX_ASSESSMENT),
    ],
)
def test_tax_kind_detection(row: dict, expected: TaxKind) -> None:
    assert detect_tax_kind(row) is expected


def test_unknown_tax_type_is_rejected() -> None:
    with pytest.raises(UnknownTaxTypeError, match="Unknown tax type: REFUND"):
        detect_tax_kind({"tax_type": "refund"})
