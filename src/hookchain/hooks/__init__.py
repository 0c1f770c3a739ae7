"""hookchain entity lifecycle hooks.

Provides per-entity-type hooks for the points of the save/delete lifecycle:
- beforeFind: Rewrite or restrict a query before it runs
- beforeSave: Apply defaults/minimums, check required keys, run addons (can reject)
- afterSave: Propagate the committed entity through addons
- beforeDelete: Run addons before delete (can reject)
- afterDelete: Propagate the deleted entity through addons

Usage:
    from hookchain.hooks import HookClass, DispatchTable, configure_class

    tasks = HookClass(required_keys=["owner"], default_values={"status": "pending"})
    tasks.use_addon(AuditFieldsAddon())
    configure_class(engine, "Task", tasks)
"""

from hookchain.core.types import HOOK_POINTS
from hookchain.hooks.builtin import AuditFieldsAddon, register_builtin_addons
from hookchain.hooks.dispatch import (
    DispatchOutcome,
    DispatchTable,
    HookEngine,
    RecordingResponse,
    configure_class,
)
from hookchain.hooks.hook_class import HookClass
from hookchain.hooks.registry import AddonRegistry, addon

__all__ = [
    "AddonRegistry",
    "AuditFieldsAddon",
    "DispatchOutcome",
    "DispatchTable",
    "HOOK_POINTS",
    "HookClass",
    "HookEngine",
    "RecordingResponse",
    "addon",
    "configure_class",
    "register_builtin_addons",
]
