"""hookchain: composable entity lifecycle hooks with addon chains."""

from hookchain.core.errors import (
    AddonFailure,
    HookError,
    InvalidFieldType,
    MissingRequiredField,
    ResponseAlreadySent,
    error_message,
)
from hookchain.core.types import (
    HOOK_POINTS,
    Entity,
    FindRequest,
    ProcessRequest,
    ProcessResponse,
    UserContext,
)
from hookchain.hooks import (
    AddonRegistry,
    AuditFieldsAddon,
    DispatchOutcome,
    DispatchTable,
    HookClass,
    HookEngine,
    RecordingResponse,
    addon,
    configure_class,
    register_builtin_addons,
)

__version__ = "0.1.0"

__all__ = [
    # Types
    "Entity",
    "FindRequest",
    "HOOK_POINTS",
    "ProcessRequest",
    "ProcessResponse",
    "UserContext",
    # Errors
    "AddonFailure",
    "HookError",
    "InvalidFieldType",
    "MissingRequiredField",
    "ResponseAlreadySent",
    "error_message",
    # Hooks
    "AddonRegistry",
    "AuditFieldsAddon",
    "DispatchOutcome",
    "DispatchTable",
    "HookClass",
    "HookEngine",
    "RecordingResponse",
    "addon",
    "configure_class",
    "register_builtin_addons",
]
