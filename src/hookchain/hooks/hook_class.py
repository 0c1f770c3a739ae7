"""Per-entity-type lifecycle hooks with composable addons.

A HookClass is configured once per entity type and bound to the persistence
engine's dispatch table. Each lifecycle step runs the instance's own rules
and then hands the entity to every addon, in registration order, taking
each addon's output as the next addon's input.

Addons must all be registered before the first request is dispatched; the
addon list is read-only while requests are in flight.
"""

import dataclasses
import logging
from collections.abc import Iterable, Mapping
from contextvars import ContextVar
from types import MappingProxyType
from typing import Any

from hookchain.core.errors import error_message
from hookchain.core.types import Entity, FindRequest, ProcessRequest, ProcessResponse
from hookchain.validation.rules import (
    check_and_correct_minimum_values,
    check_required_keys,
    is_number,
    set_default_values,
)

logger = logging.getLogger(__name__)

# Nesting depth of after_save/after_delete chains in the current task
_after_depth: ContextVar[int] = ContextVar("hookchain_after_depth", default=0)


class HookClass:
    """Handles find, save and delete hooks for one entity type.

    Subclasses override the process_* / after_* coroutines to add behaviour
    and call super() to keep the rules and addon chain running.

    Example:
        tasks = HookClass(
            required_keys=["owner"],
            default_values={"status": "pending"},
            minimum_values={"retries": 0},
        )
        tasks.use_addon(AuditFieldsAddon())
        configure_class(engine, "Task", tasks)
    """

    def __init__(
        self,
        required_keys: Iterable[str] | None = None,
        default_values: Mapping[str, Any] | None = None,
        minimum_values: Mapping[str, Any] | None = None,
        name: str | None = None,
    ):
        self.name = name or type(self).__name__
        self._required_keys = tuple(required_keys or ())
        self._default_values = MappingProxyType(dict(default_values or {}))
        self._minimum_values = MappingProxyType(dict(minimum_values or {}))
        for key, minimum in self._minimum_values.items():
            if not is_number(minimum):
                raise ValueError(
                    f"{self.name}: minimum for '{key}' must be a number, got {minimum!r}"
                )
        self._addons: list[HookClass] = []

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r} addons={len(self._addons)}>"

    @property
    def required_keys(self) -> tuple[str, ...]:
        return self._required_keys

    @property
    def default_values(self) -> Mapping[str, Any]:
        return self._default_values

    @property
    def minimum_values(self) -> Mapping[str, Any]:
        return self._minimum_values

    @property
    def addons(self) -> tuple["HookClass", ...]:
        """Registered addons, in registration order."""
        return tuple(self._addons)

    def use_addon(self, addon: "HookClass") -> "HookClass":
        """Append an addon to the chain.

        Args:
            addon: Another HookClass whose steps run after this one's

        Returns:
            This instance, so registrations can be chained
        """
        if addon is self:
            raise ValueError(f"{self.name} cannot be used as its own addon")
        self._addons.append(addon)
        return self

    # ------------------------------------------------------------------
    # Find
    # ------------------------------------------------------------------

    def before_find(self, req: FindRequest) -> Any:
        """Return the query to execute. The base implementation is identity."""
        return req.query

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    async def process_before_save(self, req: ProcessRequest) -> Entity:
        """Apply defaults and minimums, check required keys, then run addons.

        Args:
            req: The save request; its entity is never modified

        Returns:
            The entity produced by the last addon, or this instance's
            processed entity when there are no addons

        Raises:
            MissingRequiredField: If a required key is not present
            InvalidFieldType: If a floored key holds a non-number
            Exception: Any failure raised by an addon, unchanged
        """
        logger.debug("%s: processing beforeSave", self.name)
        entity = set_default_values(req.entity, self._default_values)
        entity = check_and_correct_minimum_values(entity, self._minimum_values)
        check_required_keys(entity, self._required_keys)

        return await self._run_addons("process_before_save", req, entity)

    async def before_save(self, req: ProcessRequest, res: ProcessResponse) -> bool:
        """Run process_before_save and report the outcome through res.

        Returns:
            True if the save was accepted, False if it was rejected
        """
        ok = False

        try:
            entity = await self.process_before_save(req)
        except Exception as e:
            message = error_message(e)
            logger.warning("%s: beforeSave rejected: %s", self.name, message)
            res.error(message)
        else:
            req.entity = entity
            ok = True
            res.success(entity)

        return ok

    async def after_save(self, req: ProcessRequest) -> Entity:
        """Run every addon's after_save on the committed entity.

        Failures propagate to the dispatcher; there is no sink to report to.
        """
        logger.debug("%s: processing afterSave", self.name)
        return await self._run_after("after_save", req)

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    async def process_before_delete(self, req: ProcessRequest) -> Entity:
        """Run every addon's process_before_delete and return the result."""
        logger.debug("%s: processing beforeDelete", self.name)
        return await self._run_addons("process_before_delete", req, req.entity)

    async def before_delete(self, req: ProcessRequest, res: ProcessResponse) -> bool:
        """Run process_before_delete and report the outcome through res.

        Unlike before_save the status starts out accepted and only flips
        when processing fails.
        """
        ok = True

        try:
            entity = await self.process_before_delete(req)
        except Exception as e:
            message = error_message(e)
            ok = False
            logger.warning("%s: beforeDelete rejected: %s", self.name, message)
            res.error(message)
        else:
            req.entity = entity
            res.success(entity)

        return ok

    async def after_delete(self, req: ProcessRequest) -> Entity:
        """Run every addon's after_delete on the deleted entity."""
        logger.debug("%s: processing afterDelete", self.name)
        return await self._run_after("after_delete", req)

    # ------------------------------------------------------------------
    # Addon chain
    # ------------------------------------------------------------------

    async def _run_addons(self, step: str, req: ProcessRequest, entity: Entity) -> Entity:
        """Thread entity through each addon's step, in registration order."""
        for addon in self.addons:
            step_req = dataclasses.replace(req, entity=entity)
            entity = await getattr(addon, step)(step_req)
        return entity

    async def _run_after(self, step: str, req: ProcessRequest) -> Entity:
        """Thread the after step through the addons.

        A failure is logged once, by the outermost chain, and re-raised.
        """
        depth = _after_depth.get()
        token = _after_depth.set(depth + 1)
        try:
            return await self._run_addons(step, req, req.entity)
        except Exception:
            if depth == 0:
                logger.error(
                    "%s: %s addon failed after commit", self.name, step, exc_info=True
                )
            raise
        finally:
            _after_depth.reset(token)
