from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
import logging
from typing import Any
import uuid

from landrecords.records import (
    CustomerRecord,
    ImportRecord,
    PropertyRecord,
    TaxAssessmentRecord,
    TaxPaymentRecord,
)
from landrecords.saga import Saga
from landrecords.side_effects import SideEffects
from landrecords.store import RecordStore


logger = logging.getLogger(__name__)


class RecordCreationError(RuntimeError):
    pass


class DuplicateAssessmentError(RecordCreationError):
    def __init__(self, property_id: str, tax_year: int) -> None:
        super().__init__(f"Tax assessment already exists for property {property_id} in year {tax_year}")
        self.property_id = property_id
        self.tax_year = tax_year


@dataclass(frozen=True)
class CreationOutcome:
    entity_type: str
    record: dict[str, Any]
    reference_id: str
    side_effects: dict[str, bool] = field(default_factory=dict)
    supplementary_failures: dict[str, str] = field(default_factory=dict)


def reference_suffix() -> str:
    return uuid.uuid4().hex[:8].upper()


class RecordCreator:
    def __init__(
        self,
        store: RecordStore,
        side_effects: SideEffects,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.store = store
        self.side_effects = side_effects
        self.today = today

    def create(self, record: ImportRecord, user_id: str) -> CreationOutcome:
        if isinstance(record, CustomerRecord):
            return self.create_customer(record, user_id)
        if isinstance(record, PropertyRecord):
            return self.create_property(record, user_id)
        if isinstance(record, TaxAssessmentRecord):
            return self.create_tax_assessment(record, user_id)
        if isinstance(record, TaxPaymentRecord):
            return self.create_tax_payment(record, user_id)
        raise TypeError(f"unsupported record type: {type(record).__name__}")

    def _delete_by_id(self, table_name: str) -> Callable[[dict[str, Any], dict[str, Any]], None]:
        def compensate(_context: dict[str, Any], row: dict[str, Any]) -> None:
            self.store.delete(table_name, id=row["id"])

        return compensate

    def create_customer(self, record: CustomerRecord, user_id: str) -> CreationOutcome:
        reference_id = f"CUS-{self.today().year}-{reference_suffix()}"
        saga = Saga(f"customer {reference_id}")
        saga.add(
            "customer",
            lambda _ctx: self.store.insert(
                "customers",
                {
                    "reference_id": reference_id,
                    "customer_type": record.subtype.value,
                    "status": "DRAFT",
                    "created_by": user_id,
                },
            ),
            self._delete_by_id("customers"),
        )
        saga.add(
            "detail",
            lambda ctx: self.store.insert(record.detail_table, record.detail_row(ctx["customer"]["id"])),
        )
        result = saga.run()

        customer = result["customer"]
        return CreationOutcome(
            entity_type="customer",
            record=customer,
            reference_id=reference_id,
            side_effects=self.side_effects.record_created(
                entity_type="customer",
                entity_label="Customer",
                entity_id=customer["id"],
                reference_id=reference_id,
                user_id=user_id,
            ),
        )

    def _link_owner(self, property_id: str, customer_reference_id: str) -> dict[str, Any] | None:
        customer = self.store.select_one("customers", reference_id=customer_reference_id)
        if customer is None:
            logger.warning(
                "customer not found, creating property without owner",
                extra={"customer_reference_id": customer_reference_id},
            )
            return None
        return self.store.insert(
            "property_ownership",
            {
                "property_id": property_id,
                "customer_id": customer["id"],
                "ownership_type": "OWNER",
                "ownership_percentage": 100,
                "start_date": self.today().isoformat(),
                "is_current": True,
            },
        )

    def create_property(self, record: PropertyRecord, user_id: str) -> CreationOutcome:
        year = self.today().year
        suffix = reference_suffix()
        reference_id = f"PROP-{year}-{suffix}"

        saga = Saga(f"property {reference_id}")
        saga.add(
            "property",
            lambda _ctx: self.store.insert(
                "properties",
                {
                    **record.to_row(),
                    "reference_id": reference_id,
                    "parcel_number": f"PARCEL-{year}-{suffix}",
                    "status": "DRAFT",
                    "created_by": user_id,
                },
            ),
            self._delete_by_id("properties"),
        )
        if record.customer_reference_id:
            saga.add(
                "ownership",
                lambda ctx: self._link_owner(ctx["property"]["id"], record.customer_reference_id),
                essential=False,
            )
        if record.boundary is not None:
            boundary = record.boundary
            saga.add(
                "boundary",
                lambda ctx: self.store.insert("property_boundaries", boundary.to_row(ctx["property"]["id"])),
                essential=False,
            )
        result = saga.run()

        created = result["property"]
        return CreationOutcome(
            entity_type="property",
            record=created,
            reference_id=reference_id,
            side_effects=self.side_effects.record_created(
                entity_type="property",
                entity_label="Property",
                entity_id=created["id"],
                reference_id=reference_id,
                user_id=user_id,
            ),
            supplementary_failures=dict(result.failed_steps),
        )

    def create_tax_assessment(self, record: TaxAssessmentRecord, user_id: str) -> CreationOutcome:
        if self.store.select_one("properties", id=record.property_id) is None:
            raise RecordCreationError(f"Property with ID {record.property_id} not found")
        if self.store.count("tax_assessments", property_id=record.property_id, tax_year=record.tax_year):
            raise DuplicateAssessmentError(record.property_id, record.tax_year)

        reference_id = f"TAX-{record.tax_year}-{reference_suffix()}"
        saga = Saga(f"tax assessment {reference_id}")
        saga.add(
            "assessment",
            lambda _ctx: self.store.insert(
                "tax_assessments",
                {**record.to_row(), "reference_id": reference_id, "created_by": user_id},
            ),
            self._delete_by_id("tax_assessments"),
        )
        assessment = saga.run()["assessment"]

        return CreationOutcome(
            entity_type="tax_assessment",
            record=assessment,
            reference_id=reference_id,
            side_effects=self.side_effects.record_created(
                entity_type="tax_assessment",
                entity_label="Tax Assessment",
                entity_id=assessment["id"],
                reference_id=reference_id,
                user_id=user_id,
            ),
        )

    def create_tax_payment(self, record: TaxPaymentRecord, user_id: str) -> CreationOutcome:
        assessment_id = None
        if record.tax_assessment_id:
            assessment = self.store.select_one("tax_assessments", id=record.tax_assessment_id)
            if assessment is None:
                logger.warning("tax assessment not found", extra={"tax_assessment_id": record.tax_assessment_id})
            else:
                assessment_id = assessment["id"]
        if record.property_id and self.store.select_one("properties", id=record.property_id) is None:
            logger.warning("property not found", extra={"property_id": record.property_id})

        saga = Saga(f"tax payment {record.receipt_number}")
        saga.add(
            "payment",
            lambda _ctx: self.store.insert(
                "tax_payments",
                {
                    "assessment_id": assessment_id,
                    "payment_date": record.payment_date,
                    "amount_paid": record.amount_paid,
                    "payment_method": record.payment_method,
                    "receipt_number": record.receipt_number,
                    "notes": record.notes,
                    "collected_by": user_id,
                },
            ),
            self._delete_by_id("tax_payments"),
        )
        payment = saga.run()["payment"]

        return CreationOutcome(
            entity_type="tax_payment",
            record=payment,
            reference_id=record.receipt_number,
            side_effects=self.side_effects.record_created(
                entity_type="tax_payment",
                entity_label="Tax Payment",
                entity_id=payment["id"],
                reference_id=record.receipt_number,
                user_id=user_id,
            ),
        )
