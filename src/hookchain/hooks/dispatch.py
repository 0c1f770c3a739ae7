"""Binding HookClass instances to a persistence engine.

The engine side of the contract is the HookEngine protocol: one
registration method per lifecycle event, each taking an entity type name
and a handler. configure_class wires the five bound methods of one
instance in a single call.

DispatchTable is an in-process engine that follows the same calling
sequence a database engine would (beforeSave, then afterSave only when the
save was accepted). It backs the CLI and is useful in application tests.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from hookchain.core.errors import ResponseAlreadySent
from hookchain.core.types import (
    HOOK_POINTS,
    Entity,
    FindRequest,
    ProcessRequest,
)
from hookchain.hooks.hook_class import HookClass

logger = logging.getLogger(__name__)

HookHandler = Callable[..., Any]


class HookEngine(Protocol):
    """Registration surface a persistence engine exposes to hookchain."""

    def before_find(self, class_name: str, handler: HookHandler) -> None:
        ...

    def before_save(self, class_name: str, handler: HookHandler) -> None:
        ...

    def after_save(self, class_name: str, handler: HookHandler) -> None:
        ...

    def before_delete(self, class_name: str, handler: HookHandler) -> None:
        ...

    def after_delete(self, class_name: str, handler: HookHandler) -> None:
        ...


def configure_class(engine: HookEngine, class_name: str, instance: HookClass) -> None:
    """Register all lifecycle hooks of instance for class_name on engine.

    Args:
        engine: The persistence engine's registration surface
        class_name: Entity type name the hooks apply to
        instance: The configured HookClass
    """
    engine.before_find(class_name, instance.before_find)
    engine.before_save(class_name, instance.before_save)
    engine.after_save(class_name, instance.after_save)
    engine.before_delete(class_name, instance.before_delete)
    engine.after_delete(class_name, instance.after_delete)
    logger.debug("Configured hooks for %s (%s)", class_name, instance.name)


class RecordingResponse:
    """Response sink that records the single outcome it receives.

    Attributes:
        entity: Entity passed to success(), if it was called
        reason: Reason passed to error(), if it was called
    """

    def __init__(self) -> None:
        self.called = False
        self.accepted: bool | None = None
        self.entity: Entity | None = None
        self.reason: Any = None

    def success(self, entity: Entity) -> None:
        self._mark()
        self.accepted = True
        self.entity = entity

    def error(self, reason: Any) -> None:
        self._mark()
        self.accepted = False
        self.reason = reason

    def _mark(self) -> None:
        if self.called:
            raise ResponseAlreadySent("Response was already sent for this request")
        self.called = True


@dataclass
class DispatchOutcome:
    """Result of running a save or delete through a DispatchTable.

    Attributes:
        accepted: True if the before hook accepted the operation
        entity: The final entity (after hooks ran when accepted)
        error: Rejection reason when not accepted
    """

    accepted: bool
    entity: Entity
    error: Any = None


class DispatchTable:
    """In-process engine holding one handler per (entity type, hook point).

    Entity types without registered hooks pass through unchanged.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, dict[str, HookHandler]] = {}

    def _register(self, point: str, class_name: str, handler: HookHandler) -> None:
        points = self._handlers.setdefault(class_name, {})
        if point in points:
            raise ValueError(f"{point} hook for '{class_name}' is already registered")
        points[point] = handler

    def before_find(self, class_name: str, handler: HookHandler) -> None:
        self._register("beforeFind", class_name, handler)

    def before_save(self, class_name: str, handler: HookHandler) -> None:
        self._register("beforeSave", class_name, handler)

    def after_save(self, class_name: str, handler: HookHandler) -> None:
        self._register("afterSave", class_name, handler)

    def before_delete(self, class_name: str, handler: HookHandler) -> None:
        self._register("beforeDelete", class_name, handler)

    def after_delete(self, class_name: str, handler: HookHandler) -> None:
        self._register("afterDelete", class_name, handler)

    def handler(self, class_name: str, point: str) -> HookHandler | None:
        """Get the handler registered for class_name at point, if any."""
        if point not in HOOK_POINTS:
            raise ValueError(
                f"Unknown hook point '{point}'. Valid points: {', '.join(HOOK_POINTS)}"
            )
        return self._handlers.get(class_name, {}).get(point)

    def list_classes(self) -> list[str]:
        """List entity type names with at least one registered hook."""
        return sorted(self._handlers.keys())

    def find(self, class_name: str, req: FindRequest) -> Any:
        """Return the query to run for a find on class_name."""
        handler = self.handler(class_name, "beforeFind")
        if handler is None:
            return req.query
        return handler(req)

    async def save(self, class_name: str, req: ProcessRequest) -> DispatchOutcome:
        """Run beforeSave and, when accepted, afterSave for class_name."""
        return await self._run(class_name, req, "beforeSave", "afterSave")

    async def delete(self, class_name: str, req: ProcessRequest) -> DispatchOutcome:
        """Run beforeDelete and, when accepted, afterDelete for class_name."""
        return await self._run(class_name, req, "beforeDelete", "afterDelete")

    async def _run(
        self,
        class_name: str,
        req: ProcessRequest,
        before_point: str,
        after_point: str,
    ) -> DispatchOutcome:
        before = self.handler(class_name, before_point)
        if before is not None:
            res = RecordingResponse()
            ok = await before(req, res)
            if not ok:
                logger.info("%s %s denied: %s", class_name, before_point, res.reason)
                return DispatchOutcome(accepted=False, entity=req.entity, error=res.reason)

        entity = req.entity
        after = self.handler(class_name, after_point)
        if after is not None:
            entity = await after(req)

        return DispatchOutcome(accepted=True, entity=entity)
