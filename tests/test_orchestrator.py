import pytest

from landrecords.errors import BadRequestError
from landrecords.orchestrator import UploadOrchestrator
from landrecords.schemas import CustomerSubtype
from landrecords.templates import CUSTOMER_EXAMPLES


DISTRICT_ID = "3f1c2a9e-6b4d-4e8a-9c71-2d5e8f0a1b34"
USER_ID = "user-1"


def _residential(n: int) -> dict:
    return {"property_id": f"PR-{n}", "size": str(100 + n)}


def test_validate_partitions_every_row(orchestrator: UploadOrchestrator) -> None:
    rows = [
        CUSTOMER_EXAMPLES[CustomerSubtype.PERSON],
        {"full_name": "Missing Everything"},
        _residential(1),
        {"customer_type": "alien"},
        "not a row",
        {"business_name": ""},
    ]

    result = orchestrator.validate("customer", rows)

    assert result.total_records == 6
    assert result.valid_records + result.invalid_records == result.total_records
    assert result.valid_data == [rows[0], rows[2], rows[5]]
    assert [error.row for error in result.errors] == [2, 4, 5]
    assert result.errors[1].errors == ["Unknown customer type: ALIEN"]
    assert result.errors[2].errors == ["Row must be an object of column names to values"]
    assert result.can_commit is True


def test_validate_never_writes(orchestrator: UploadOrchestrator, store) -> None:
    orchestrator.validate("customer", [_residential(1), _residential(2)])

    assert store.count("customers") == 0


def test_validate_without_valid_rows_cannot_commit(orchestrator: UploadOrchestrator) -> None:
    result = orchestrator.validate("property", [{"size": 10}])

    assert result.valid_records == 0
    assert result.can_commit is False
    assert result.to_dict()["errors"] == [{"row": 1, "errors": ["district_id is required"], "data": {"size": 10}}]


def test_invalid_entity_type_is_a_bad_request(orchestrator: UploadOrchestrator) -> None:
    with pytest.raises(BadRequestError, match="Invalid entity type: parcel"):
        orchestrator.validate("parcel", [])


def test_residential_row_end_to_end(orchestrator: UploadOrchestrator, store) -> None:
    rows = [{"property_id": "PR-1", "size": "120"}]

    validation = orchestrator.validate("customer", rows)
    result = orchestrator.commit("customer", validation.valid_data, USER_ID)

    assert (result.successful, result.failed) == (1, 0)
    customer = store.select_one("customers", reference_id=result.created[0])
    assert customer["customer_type"] == "RESIDENTIAL"
    assert customer["status"] == "DRAFT"
    detail = store.select_one("customer_residential", customer_id=customer["id"])
    assert detail["size"] == "120"


def test_commit_continues_after_a_failing_row(failing_store, make_creator, store) -> None:
    broken = failing_store(
        fail_insert_into=("customer_residential",),
        fail_when=lambda values: values.get("property_id") == "PR-3",
    )
    orchestrator = UploadOrchestrator(make_creator(broken))

    result = orchestrator.commit("customer", [_residential(n) for n in range(1, 6)], USER_ID)

    assert (result.successful, result.failed) == (4, 1)
    assert result.errors[0].row == 3
    assert "customer_residential" in result.errors[0].error
    assert result.errors[0].data == _residential(3)
    assert store.count("customers") == 4
    assert store.count("customer_residential") == 4


def test_commit_rechecks_rows(orchestrator: UploadOrchestrator, store) -> None:
    result = orchestrator.commit("customer", [_residential(1), {"full_name": "Ada"}], USER_ID)

    assert (result.successful, result.failed) == (1, 1)
    assert result.errors[0].row == 2
    assert result.errors[0].error.startswith("property_id is required; mothers_name is required")
    assert store.count("customers") == 1


def test_commit_without_rows_is_rejected(orchestrator: UploadOrchestrator) -> None:
    with pytest.raises(BadRequestError, match="No valid records to commit"):
        orchestrator.commit("customer", [], USER_ID)


def test_tax_batch_routes_rows_by_kind(orchestrator: UploadOrchestrator, store) -> None:
    prop = orchestrator.commit("property", [{"district_id": DISTRICT_ID, "size": 80}], USER_ID)
    property_id = store.select_one("properties", reference_id=prop.created[0])["id"]
    rows = [
        {"property_id": property_id, "tax_year": 2025, "assessed_amount": 900, "due_date": "2025-12-31", "status": "DRAFT"},
        {"property_id": property_id, "payment_date": "2025-06-01", "payment_method": "cash", "payment_amount": 300},
    ]

    validation = orchestrator.validate("tax", rows)
    result = orchestrator.commit("tax", validation.valid_data, USER_ID)

    assert validation.valid_records == 2
    assert (result.successful, result.failed) == (2, 0)
    assert result.created[0].startswith("TAX-2025-")
    assert result.created[1].startswith("RCP-")
    assert store.count("tax_assessments") == 1
    assert store.count("tax_payments") == 1


def test_duplicate_assessment_fails_only_that_row(orchestrator: UploadOrchestrator, store) -> None:
    prop = orchestrator.commit("property", [{"district_id": DISTRICT_ID, "size": 80}], USER_ID)
    property_id = store.select_one("properties", reference_id=prop.created[0])["id"]
    row = {"property_id": property_id, "tax_year": 2026, "assessed_amount": 1, "due_date": "2026-12-31", "status": "DRAFT"}

    result = orchestrator.commit("tax_assessment", [row, row], USER_ID)

    assert (result.successful, result.failed) == (1, 1)
    assert result.errors[0].error == f"Tax assessment already exists for property {property_id} in year 2026"


@pytest.mark.parametrize("entity_type", ["customer", "property", "tax", "tax_assessment", "tax_payment"])
def test_template_examples_pass_validation(orchestrator: UploadOrchestrator, entity_type: str) -> None:
    template = orchestrator.template(entity_type)

    assert orchestrator.validate(entity_type, [template.example]).invalid_records == 0
    assert set(template.example) <= set(template.headers)


@pytest.mark.parametrize("subtype", [subtype.value for subtype in CustomerSubtype])
def test_customer_templates_detect_as_their_own_type(orchestrator: UploadOrchestrator, subtype: str) -> None:
    template = orchestrator.template("customer", subtype.lower())

    assert template.headers[0] == "customer_type"
    assert template.example["customer_type"] == subtype
    assert orchestrator.validate("customer", [template.example]).valid_records == 1


def test_unknown_customer_template_is_a_bad_request(orchestrator: UploadOrchestrator) -> None:
    with pytest.raises(BadRequestError, match="Invalid customer type: ALIEN"):
        orchestrator.template("customer", "ALIEN")


def test_customer_types_lists_every_subtype(orchestrator: UploadOrchestrator) -> None:
    assert orchestrator.customer_types() == [
        "PERSON",
        "BUSINESS",
        "GOVERNMENT",
        "MOSQUE_HOSPITAL",
        "NON_PROFIT",
        "RESIDENTIAL",
        "RENTAL",
    ]
