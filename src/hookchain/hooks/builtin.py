"""Framework-provided addons."""

import dataclasses
from datetime import datetime, timezone

from hookchain.core.types import Entity, ProcessRequest
from hookchain.hooks.hook_class import HookClass
from hookchain.hooks.registry import AddonRegistry


class AuditFieldsAddon(HookClass):
    """Stamps who created/updated a record and when.

    createdBy and createdAt are only set when absent, so re-saving an
    existing record keeps its creation stamp. updatedBy and updatedAt are
    refreshed on every save. The actor stamps are skipped for anonymous
    requests.
    """

    async def process_before_save(self, req: ProcessRequest) -> Entity:
        entity = dict(req.entity)
        now = datetime.now(timezone.utc).isoformat()

        if entity.get("createdAt") is None:
            entity["createdAt"] = now
        entity["updatedAt"] = now

        user_id = req.user.user_id if req.user else None
        if user_id:
            if entity.get("createdBy") is None:
                entity["createdBy"] = user_id
            entity["updatedBy"] = user_id

        return await super().process_before_save(dataclasses.replace(req, entity=entity))


def register_builtin_addons() -> None:
    """Register framework-provided addons.

    Called at application startup, before metadata is loaded.
    """
    AddonRegistry.register("auditFields", AuditFieldsAddon)
