"""Request, response and identity types shared by the hook pipeline.

The persistence engine talks to a HookClass only through these shapes:
- ProcessRequest: the entity being saved or deleted, plus actor context
- FindRequest: the query about to be executed
- ProcessResponse: the success/error callback pair for save and delete
"""

from dataclasses import dataclass, field
from typing import Any, Protocol

# An entity is an opaque key-value record. The core only inspects presence,
# numeric comparison and sequence emptiness of its attributes.
Entity = dict[str, Any]

HOOK_POINTS = ("beforeFind", "beforeSave", "afterSave", "beforeDelete", "afterDelete")


@dataclass
class UserContext:
    """Identity of the actor behind a request.

    Attributes:
        user_id: The authenticated user's ID
        tenant_id: The tenant/client ID the user belongs to
        roles: List of role names the user has
    """

    user_id: str | None = None
    tenant_id: str | None = None
    roles: list[str] = field(default_factory=list)


@dataclass
class ProcessRequest:
    """A save or delete request as seen by a HookClass.

    Attributes:
        entity: The record being saved or deleted
        user: Actor identity (None for anonymous or system calls)
        master: True when the caller holds the engine's master privilege
    """

    entity: Entity
    user: UserContext | None = None
    master: bool = False


@dataclass
class FindRequest:
    """A find request as seen by a HookClass.

    Attributes:
        query: Engine-specific query specification
        user: Actor identity
        master: True when the caller holds the engine's master privilege
    """

    query: Any
    user: UserContext | None = None
    master: bool = False


class ProcessResponse(Protocol):
    """Callback pair through which save/delete decisions are reported.

    Exactly one of the two callbacks is invoked per before_save or
    before_delete call.
    """

    def success(self, entity: Entity) -> None:
        ...

    def error(self, reason: Any) -> None:
        ...
