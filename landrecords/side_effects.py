from collections.abc import Callable
import logging
from typing import Any

from landrecords.store import RecordStore


logger = logging.getLogger(__name__)

BULK_UPLOAD_SOURCE = "bulk_upload"


class ActivityLog:
    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def record(
        self,
        *,
        entity_type: str,
        entity_id: str,
        action: str,
        performed_by: str,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        self.store.insert(
            "activity_logs",
            {
                "entity_type": entity_type,
                "entity_id": entity_id,
                "action": action,
                "performed_by": performed_by,
                "metadata": metadata,
            },
        )


class AuditLog:
    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def record(
        self,
        *,
        entity_type: str,
        entity_id: str,
        action: str,
        changed_by: str,
        field: str | None = None,
        old_value: str | None = None,
        new_value: str | None = None,
    ) -> None:
        self.store.insert(
            "audit_logs",
            {
                "entity_type": entity_type,
                "entity_id": entity_id,
                "action": action,
                "field": field,
                "old_value": old_value,
                "new_value": new_value,
                "changed_by": changed_by,
            },
        )


class RoleNotifier:
    """Writes one notification row per active user holding a notified role."""

    def __init__(self, store: RecordStore, roles: tuple[str, ...]) -> None:
        self.store = store
        self.roles = roles

    def notify(self, *, title: str, message: str, entity_type: str, entity_id: str) -> int:
        if not self.roles:
            return 0
        users = self.store.select("users", role=list(self.roles), is_active=True)
        return self.store.insert_many(
            "notifications",
            [
                {
                    "user_id": user["id"],
                    "title": title,
                    "message": message,
                    "entity_type": entity_type,
                    "entity_id": entity_id,
                }
                for user in users
            ],
        )


class SideEffects:
    def __init__(self, activity: ActivityLog, audit: AuditLog, notifier: RoleNotifier) -> None:
        self.activity = activity
        self.audit = audit
        self.notifier = notifier

    @classmethod
    def from_store(cls, store: RecordStore, notify_roles: tuple[str, ...]) -> "SideEffects":
        return cls(ActivityLog(store), AuditLog(store), RoleNotifier(store, notify_roles))

    def record_created(
        self,
        *,
        entity_type: str,
        entity_label: str,
        entity_id: str,
        reference_id: str,
        user_id: str,
    ) -> dict[str, bool]:
        effects: dict[str, Callable[[], Any]] = {
            "activity": lambda: self.activity.record(
                entity_type=entity_type,
                entity_id=entity_id,
                action="CREATED",
                performed_by=user_id,
                metadata={"reference_id": reference_id, "source": BULK_UPLOAD_SOURCE},
            ),
            "audit": lambda: self.audit.record(
                entity_type=entity_type,
                entity_id=entity_id,
                action="create",
                changed_by=user_id,
                field="status",
                new_value="DRAFT",
            ),
            "notification": lambda: self.notifier.notify(
                title=f"New {entity_label} Created (Bulk Upload)",
                message=f"{entity_label} {reference_id} was created by bulk upload and is waiting for review.",
                entity_type=entity_type,
                entity_id=entity_id,
            ),
        }

        outcomes: dict[str, bool] = {}
        for name, effect in effects.items():
            try:
                effect()
                outcomes[name] = True
            except Exception:
                logger.exception(
                    "side effect failed",
                    extra={"effect": name, "entity_type": entity_type, "entity_id": entity_id},
                )
                outcomes[name] = False
        return outcomes
