from collections.abc import Mapping
import logging
from typing import Any

from sqlalchemy import Table, delete, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from landrecords.db_models import Base


logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    def __init__(self, message: str, *, table: str, operation: str) -> None:
        super().__init__(message)
        self.table = table
        self.operation = operation


def _db_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    if orig is not None:
        return str(orig)
    return str(exc).split("\n", 1)[0]


# Every call commits on its own session; multi-table writes are compensated by the caller.
class RecordStore:
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory

    def _table(self, name: str, operation: str) -> Table:
        table = Base.metadata.tables.get(name)
        if table is None:
            raise StoreError(f"unknown table: {name}", table=name, operation=operation)
        return table

    def _where(self, table: Table, filters: Mapping[str, Any]):
        clauses = []
        for column_name, value in filters.items():
            if column_name not in table.c:
                raise StoreError(f"unknown column: {column_name}", table=table.name, operation="filter")
            column = table.c[column_name]
            if isinstance(value, (list, tuple, set, frozenset)):
                clauses.append(column.in_(list(value)))
            else:
                clauses.append(column == value)
        return clauses

    def insert(self, table_name: str, values: Mapping[str, Any]) -> dict[str, Any]:
        table = self._table(table_name, "insert")
        with self.session_factory() as db:
            try:
                row = db.execute(insert(table).values(**values).returning(*table.c)).mappings().one()
                created = dict(row)
                db.commit()
            except SQLAlchemyError as exc:
                db.rollback()
                raise StoreError(_db_message(exc), table=table_name, operation="insert") from exc
            return created

    def insert_many(self, table_name: str, rows: list[Mapping[str, Any]]) -> int:
        if not rows:
            return 0
        table = self._table(table_name, "insert")
        with self.session_factory() as db:
            try:
                db.execute(insert(table), [dict(row) for row in rows])
                db.commit()
            except SQLAlchemyError as exc:
                db.rollback()
                raise StoreError(_db_message(exc), table=table_name, operation="insert") from exc
        return len(rows)

    def update(self, table_name: str, values: Mapping[str, Any], **filters: Any) -> int:
        if not filters:
            raise StoreError("refusing to update without a filter", table=table_name, operation="update")
        table = self._table(table_name, "update")
        with self.session_factory() as db:
            try:
                result = db.execute(update(table).where(*self._where(table, filters)).values(**values))
                db.commit()
            except SQLAlchemyError as exc:
                db.rollback()
                raise StoreError(_db_message(exc), table=table_name, operation="update") from exc
            return result.rowcount

    def delete(self, table_name: str, **filters: Any) -> int:
        if not filters:
            raise StoreError("refusing to delete without a filter", table=table_name, operation="delete")
        table = self._table(table_name, "delete")
        with self.session_factory() as db:
            try:
                result = db.execute(delete(table).where(*self._where(table, filters)))
                db.commit()
            except SQLAlchemyError as exc:
                db.rollback()
                raise StoreError(_db_message(exc), table=table_name, operation="delete") from exc
            return result.rowcount

    def select(self, table_name: str, **filters: Any) -> list[dict[str, Any]]:
        table = self._table(table_name, "select")
        with self.session_factory() as db:
            try:
                rows = db.execute(select(table).where(*self._where(table, filters))).mappings().all()
            except SQLAlchemyError as exc:
                raise StoreError(_db_message(exc), table=table_name, operation="select") from exc
            return [dict(row) for row in rows]

    def select_one(self, table_name: str, **filters: Any) -> dict[str, Any] | None:
        rows = self.select(table_name, **filters)
        if not rows:
            return None
        if len(rows) > 1:
            logger.warning("select_one matched several rows", extra={"table": table_name, "matches": len(rows)})
        return rows[0]

    def count(self, table_name: str, **filters: Any) -> int:
        table = self._table(table_name, "count")
        stmt = select(func.count()).select_from(table).where(*self._where(table, filters))
        with self.session_factory() as db:
            try:
                return int(db.execute(stmt).scalar_one())
            except SQLAlchemyError as exc:
                raise StoreError(_db_message(exc), table=table_name, operation="count") from exc
