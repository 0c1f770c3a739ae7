"""Tests for engine registration and the in-process DispatchTable."""

from unittest.mock import Mock

import pytest

from hookchain.core.errors import AddonFailure, ResponseAlreadySent
from hookchain.core.types import HOOK_POINTS, FindRequest, ProcessRequest
from hookchain.hooks.dispatch import (
    DispatchTable,
    RecordingResponse,
    configure_class,
)
from hookchain.hooks.hook_class import HookClass


class RejectDelete(HookClass):
    async def process_before_delete(self, req):
        raise AddonFailure("Tasks cannot be deleted")


class CountAfter(HookClass):
    def __init__(self):
        super().__init__()
        self.after_saves = 0
        self.after_deletes = 0

    async def after_save(self, req):
        self.after_saves += 1
        return {**req.entity, "indexed": True}

    async def after_delete(self, req):
        self.after_deletes += 1
        return req.entity


@pytest.fixture
def table():
    return DispatchTable()


# =============================================================================
# configure_class
# =============================================================================


class TestConfigureClass:
    def test_registers_all_five_hooks(self):
        engine = Mock()
        hooks = HookClass()

        configure_class(engine, "Task", hooks)

        engine.before_find.assert_called_once_with("Task", hooks.before_find)
        engine.before_save.assert_called_once_with("Task", hooks.before_save)
        engine.after_save.assert_called_once_with("Task", hooks.after_save)
        engine.before_delete.assert_called_once_with("Task", hooks.before_delete)
        engine.after_delete.assert_called_once_with("Task", hooks.after_delete)

    def test_handlers_bound_to_instance(self, table):
        hooks = HookClass()
        configure_class(table, "Task", hooks)

        for point in HOOK_POINTS:
            handler = table.handler("Task", point)
            assert handler.__self__ is hooks

    def test_duplicate_registration_rejected(self, table):
        configure_class(table, "Task", HookClass())
        with pytest.raises(ValueError, match="already registered"):
            configure_class(table, "Task", HookClass())

    def test_multiple_classes(self, table):
        configure_class(table, "Task", HookClass())
        configure_class(table, "Contact", HookClass())
        assert table.list_classes() == ["Contact", "Task"]


# =============================================================================
# RecordingResponse
# =============================================================================


class TestRecordingResponse:
    def test_success(self):
        res = RecordingResponse()
        res.success({"a": 1})
        assert res.called and res.accepted is True
        assert res.entity == {"a": 1}

    def test_error(self):
        res = RecordingResponse()
        res.error("denied")
        assert res.accepted is False
        assert res.reason == "denied"

    def test_second_call_raises(self):
        res = RecordingResponse()
        res.success({})
        with pytest.raises(ResponseAlreadySent):
            res.error("late")

    @pytest.mark.asyncio
    async def test_before_save_calls_sink_exactly_once(self):
        res = RecordingResponse()
        hooks = HookClass(required_keys=["owner"])
        await hooks.before_save(ProcessRequest(entity={}), res)
        assert res.called and res.accepted is False


# =============================================================================
# DispatchTable
# =============================================================================


class TestDispatchTable:
    def test_unknown_hook_point(self, table):
        with pytest.raises(ValueError, match="Unknown hook point"):
            table.handler("Task", "afterCommit")

    def test_find_passes_through_without_hooks(self, table):
        assert table.find("Task", FindRequest(query="q")) == "q"

    def test_find_uses_before_find(self, table):
        class Scoped(HookClass):
            def before_find(self, req):
                return {**req.query, "archived": False}

        configure_class(table, "Task", Scoped())
        assert table.find("Task", FindRequest(query={"a": 1})) == {"a": 1, "archived": False}

    @pytest.mark.asyncio
    async def test_save_without_hooks_accepts(self, table):
        outcome = await table.save("Task", ProcessRequest(entity={"a": 1}))
        assert outcome.accepted is True
        assert outcome.entity == {"a": 1}

    @pytest.mark.asyncio
    async def test_save_runs_before_and_after(self, table):
        hooks = HookClass(
            default_values={"status": "pending"},
            minimum_values={"retries": 0},
            required_keys=["owner"],
        )
        counter = CountAfter()
        hooks.use_addon(counter)
        configure_class(table, "Task", hooks)

        outcome = await table.save(
            "Task", ProcessRequest(entity={"owner": "alice", "retries": -3})
        )

        assert outcome.accepted is True
        assert outcome.entity == {
            "owner": "alice",
            "retries": 0,
            "status": "pending",
            "indexed": True,
        }
        assert counter.after_saves == 1

    @pytest.mark.asyncio
    async def test_rejected_save_skips_after_save(self, table):
        hooks = HookClass(required_keys=["owner"])
        counter = CountAfter()
        hooks.use_addon(counter)
        configure_class(table, "Task", hooks)

        outcome = await table.save("Task", ProcessRequest(entity={"title": "x"}))

        assert outcome.accepted is False
        assert outcome.error == "Params owner are needed"
        assert outcome.entity == {"title": "x"}
        assert counter.after_saves == 0

    @pytest.mark.asyncio
    async def test_delete_runs_before_and_after(self, table):
        hooks = HookClass()
        counter = CountAfter()
        hooks.use_addon(counter)
        configure_class(table, "Task", hooks)

        outcome = await table.delete("Task", ProcessRequest(entity={"id": "T1"}))

        assert outcome.accepted is True
        assert counter.after_deletes == 1

    @pytest.mark.asyncio
    async def test_rejected_delete(self, table):
        hooks = HookClass()
        counter = CountAfter()
        hooks.use_addon(RejectDelete())
        hooks.use_addon(counter)
        configure_class(table, "Task", hooks)

        outcome = await table.delete("Task", ProcessRequest(entity={"id": "T1"}))

        assert outcome.accepted is False
        assert outcome.error == "Tasks cannot be deleted"
        assert counter.after_deletes == 0

    @pytest.mark.asyncio
    async def test_after_save_failure_reaches_dispatcher(self, table):
        class Broken(HookClass):
            async def after_save(self, req):
                raise RuntimeError("search index unavailable")

        hooks = HookClass()
        hooks.use_addon(Broken())
        configure_class(table, "Task", hooks)

        with pytest.raises(RuntimeError, match="search index unavailable"):
            await table.save("Task", ProcessRequest(entity={}))
