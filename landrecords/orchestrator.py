from collections.abc import Mapping
from enum import Enum
import logging
from typing import Any

from sqlalchemy.orm import Session, sessionmaker

from landrecords.config import Settings
from landrecords.creator import RecordCreator
from landrecords.detection import UnknownRecordTypeError, detect_customer_subtype, detect_tax_kind
from landrecords.errors import BadRequestError
from landrecords.records import ImportRecord
from landrecords.schemas import (
    CommitResult,
    CustomerSubtype,
    EntityType,
    FailedRow,
    InvalidRow,
    TaxKind,
    TemplateData,
    ValidationResult,
)
from landrecords.side_effects import SideEffects
from landrecords.store import RecordStore
from landrecords.templates import generate_template
from landrecords.transformers import (
    transform_customer,
    transform_property,
    transform_tax_assessment,
    transform_tax_payment,
)
from landrecords.validators import VALIDATORS


logger = logging.getLogger(__name__)


def parse_entity_type(value: str | EntityType) -> EntityType:
    try:
        return EntityType(str(value).strip().lower())
    except ValueError:
        raise BadRequestError(f"Invalid entity type: {value}") from None


class UploadOrchestrator:
    """Two-phase bulk upload: ``validate`` never writes, ``commit`` writes row by row."""

    def __init__(self, creator: RecordCreator) -> None:
        self.creator = creator

    @classmethod
    def from_settings(cls, settings: Settings, session_factory: sessionmaker[Session]) -> "UploadOrchestrator":
        store = RecordStore(session_factory)
        side_effects = SideEffects.from_store(store, settings.notify_roles)
        return cls(RecordCreator(store, side_effects))

    def classify(self, entity_type: EntityType, row: Mapping[str, Any]) -> Enum:
        if entity_type is EntityType.CUSTOMER:
            return detect_customer_subtype(row)
        if entity_type is EntityType.PROPERTY:
            return EntityType.PROPERTY
        if entity_type is EntityType.TAX:
            return detect_tax_kind(row)
        if entity_type is EntityType.TAX_ASSESSMENT:
            return TaxKind.TAX_ASSESSMENT
        return TaxKind.TAX_PAYMENT

    def row_errors(self, entity_type: EntityType, row: Any) -> list[str]:
        if not isinstance(row, Mapping):
            return ["Row must be an object of column names to values"]
        try:
            kind = self.classify(entity_type, row)
        except UnknownRecordTypeError as exc:
            return [str(exc)]
        errors: list[str] = []
        VALIDATORS[kind](row, errors)
        return errors

    def validate(self, entity_type: str | EntityType, rows: list[Any]) -> ValidationResult:
        entity = parse_entity_type(entity_type)
        invalid: list[InvalidRow] = []
        valid_data: list[dict[str, Any]] = []

        for index, row in enumerate(rows, start=1):
            errors = self.row_errors(entity, row)
            if errors:
                invalid.append(InvalidRow(index, errors, row))
            else:
                valid_data.append(row)

        result = ValidationResult(
            total_records=len(rows),
            valid_records=len(valid_data),
            invalid_records=len(invalid),
            errors=invalid,
            valid_data=valid_data,
        )
        logger.info(
            "validated upload batch",
            extra={
                "entity_type": entity.value,
                "total_records": result.total_records,
                "valid_records": result.valid_records,
                "invalid_records": result.invalid_records,
            },
        )
        return result

    def transform(self, kind: Enum, row: Mapping[str, Any]) -> ImportRecord:
        if isinstance(kind, CustomerSubtype):
            return transform_customer(row, kind)
        if kind is EntityType.PROPERTY:
            return transform_property(row)
        if kind is TaxKind.TAX_ASSESSMENT:
            return transform_tax_assessment(row, today=self.creator.today())
        return transform_tax_payment(row, today=self.creator.today())

    def commit(self, entity_type: str | EntityType, valid_rows: list[Any], user_id: str) -> CommitResult:
        entity = parse_entity_type(entity_type)
        if not valid_rows:
            raise BadRequestError("No valid records to commit")

        failed: list[FailedRow] = []
        created: list[str] = []
        for index, row in enumerate(valid_rows, start=1):
            # Rows come back from the caller, so they are checked again before any write.
            errors = self.row_errors(entity, row)
            if errors:
                failed.append(FailedRow(index, "; ".join(errors), row))
                logger.warning("row rejected at commit", extra={"row": index, "entity_type": entity.value})
                continue
            try:
                record = self.transform(self.classify(entity, row), row)
                outcome = self.creator.create(record, user_id)
            except Exception as exc:
                failed.append(FailedRow(index, str(exc), row))
                logger.warning(
                    "row commit failed",
                    extra={"row": index, "entity_type": entity.value, "error": str(exc)},
                )
                continue
            created.append(outcome.reference_id)
            logger.info(
                "row committed",
                extra={"row": index, "entity_type": outcome.entity_type, "reference_id": outcome.reference_id},
            )

        return CommitResult(successful=len(created), failed=len(failed), errors=failed, created=created)

    def template(self, entity_type: str | EntityType, customer_type: str | None = None) -> TemplateData:
        return generate_template(parse_entity_type(entity_type), customer_type)

    def customer_types(self) -> list[str]:
        return [subtype.value for subtype in CustomerSubtype]
