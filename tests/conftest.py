from collections.abc import Callable, Mapping
from datetime import date
from pathlib import Path
from typing import Any

import pytest
from sqlalchemy.orm import Session, sessionmaker

from landrecords.config import Settings
from landrecords.creator import RecordCreator
from landrecords.database import build_session_factory
from landrecords.orchestrator import UploadOrchestrator
from landrecords.side_effects import SideEffects
from landrecords.store import RecordStore, StoreError


TODAY = date(2025, 5, 20)


class FailingStore(RecordStore):
    """Store that raises ``StoreError`` for chosen tables, optionally only for matching rows."""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        fail_insert_into: tuple[str, ...] = (),
        fail_delete_from: tuple[str, ...] = (),
        fail_select_from: tuple[str, ...] = (),
        fail_when: Callable[[Mapping[str, Any]], bool] | None = None,
    ) -> None:
        super().__init__(session_factory)
        self.fail_insert_into = fail_insert_into
        self.fail_delete_from = fail_delete_from
        self.fail_select_from = fail_select_from
        self.fail_when = fail_when

    def _should_fail(self, values: Mapping[str, Any]) -> bool:
        return self.fail_when is None or self.fail_when(values)

    def insert(self, table_name: str, values: Mapping[str, Any]) -> dict[str, Any]:
        if table_name in self.fail_insert_into and self._should_fail(values):
            raise StoreError(f"simulated failure inserting into {table_name}", table=table_name, operation="insert")
        return super().insert(table_name, values)

    def insert_many(self, table_name: str, rows: list[Mapping[str, Any]]) -> int:
        if table_name in self.fail_insert_into:
            raise StoreError(f"simulated failure inserting into {table_name}", table=table_name, operation="insert")
        return super().insert_many(table_name, rows)

    def delete(self, table_name: str, **filters: Any) -> int:
        if table_name in self.fail_delete_from:
            raise StoreError(f"simulated failure deleting from {table_name}", table=table_name, operation="delete")
        return super().delete(table_name, **filters)

    def select(self, table_name: str, **filters: Any) -> list[dict[str, Any]]:
        if table_name in self.fail_select_from:
            raise StoreError(f"simulated failure reading {table_name}", table=table_name, operation="select")
        return super().select(table_name, **filters)


@pytest.fixture()
def temp_workspace(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture()
def test_settings(temp_workspace: Path) -> Settings:
    return Settings(
        app_name="landrecords",
        database_url=f"sqlite:///{temp_workspace / 'test.db'}",
        log_level="INFO",
        api_prefix="/api/v1",
        cors_origins=("http://localhost:5173",),
        upload_roles=("ADMINISTRATOR",),
        notify_roles=("ADMINISTRATOR", "APPROVER"),
        host="127.0.0.1",
        port=8000,
    )


@pytest.fixture()
def session_factory(test_settings: Settings) -> sessionmaker[Session]:
    return build_session_factory(test_settings.database_url)


@pytest.fixture()
def store(session_factory: sessionmaker[Session]) -> RecordStore:
    return RecordStore(session_factory)


@pytest.fixture()
def seeded_users(store: RecordStore) -> dict[str, dict[str, Any]]:
    users = {
        "admin": {"full_name": "Amina Admin", "email": "admin@example.com", "role": "ADMINISTRATOR"},
        "approver": {"full_name": "Omar Approver", "email": "approver@example.com", "role": "APPROVER"},
        "clerk": {"full_name": "Layla Clerk", "email": "clerk@example.com", "role": "DATA_ENTRY"},
    }
    return {key: store.insert("users", values) for key, values in users.items()}


@pytest.fixture()
def make_creator(test_settings: Settings) -> Callable[[RecordStore], RecordCreator]:
    def build(store: RecordStore) -> RecordCreator:
        return RecordCreator(store, SideEffects.from_store(store, test_settings.notify_roles), today=lambda: TODAY)

    return build


@pytest.fixture()
def creator(store: RecordStore, make_creator) -> RecordCreator:
    return make_creator(store)


@pytest.fixture()
def orchestrator(creator: RecordCreator) -> UploadOrchestrator:
    return UploadOrchestrator(creator)


@pytest.fixture()
def failing_store(session_factory: sessionmaker[Session]) -> Callable[..., FailingStore]:
    def build(**kwargs: Any) -> FailingStore:
        return FailingStore(session_factory, **kwargs)

    return build
