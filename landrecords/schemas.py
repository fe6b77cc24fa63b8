from dataclasses import dataclass, field
from enum import Enum
from typing import Any


Row = dict[str, Any]


class EntityType(str, Enum):
    CUSTOMER = "customer"
    PROPERTY = "property"
    TAX = "tax"
    TAX_ASSESSMENT = "tax_assessment"
    TAX_PAYMENT = "tax_payment"


class CustomerSubtype(str, Enum):
    PERSON = "PERSON"
    BUSINESS = "BUSINESS"
    GOVERNMENT = "GOVERNMENT"
    MOSQUE_HOSPITAL = "MOSQUE_HOSPITAL"
    NON_PROFIT = "NON_PROFIT"
    RESIDENTIAL = "RESIDENTIAL"
    RENTAL = "RENTAL"

    @property
    def detail_table(self) -> str:
        return f"customer_{self.value.lower()}"


class TaxKind(str, Enum):
    TAX_ASSESSMENT = "TAX_ASSESSMENT"
    TAX_PAYMENT = "TAX_PAYMENT"


@dataclass(frozen=True)
class InvalidRow:
    row: int
    errors: list[str]
    data: Row

    def to_dict(self) -> dict[str, Any]:
        return {"row": self.row, "errors": list(self.errors), "data": self.data}


@dataclass(frozen=True)
class ValidationResult:
    total_records: int
    valid_records: int
    invalid_records: int
    errors: list[InvalidRow]
    valid_data: list[Row]

    @property
    def can_commit(self) -> bool:
        return self.valid_records > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalRecords": self.total_records,
            "validRecords": self.valid_records,
            "invalidRecords": self.invalid_records,
            "errors": [error.to_dict() for error in self.errors],
            "canCommit": self.can_commit,
            "validData": self.valid_data,
        }


@dataclass(frozen=True)
class FailedRow:
    row: int
    error: str
    data: Row

    def to_dict(self) -> dict[str, Any]:
        return {"row": self.row, "error": self.error, "data": self.data}


@dataclass(frozen=True)
class CommitResult:
    successful: int
    failed: int
    errors: list[FailedRow] = field(default_factory=list)
    created: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "successful": self.successful,
            "failed": self.failed,
            "errors": [error.to_dict() for error in self.errors],
            "created": list(self.created),
        }


@dataclass(frozen=True)
class TemplateData:
    headers: list[str]
    example: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"headers": list(self.headers), "example": dict(self.example)}
