"""Tests for the EEE mixin and package-level objects."""

import pytest
from loguru import logger

import eee
from eee import EEE, Emitter, Priority


class Document(EEE):
    def __init__(self, title: str) -> None:
        super().__init__()
        self.title = title

    async def save(self):
        return await self.emit("save", self)


class TestEEE:
    @pytest.mark.asyncio
    async def test_forwards_on_and_emit(self):
        doc = Document("draft")
        seen = []

        def handler(event, payload):
            seen.append(payload.title)
            return "saved"

        assert doc.on("save", handler, Priority.HIGH) is handler
        result = await doc.save()
        assert seen == ["draft"]
        assert result.values == ["saved"]

    @pytest.mark.asyncio
    async def test_forwards_off(self):
        doc = Document("draft")
        handler = doc.on("save", lambda e, p: "saved")
        doc.off("save", handler)
        result = await doc.save()
        assert len(result) == 0

    def test_forwards_once(self):
        with pytest.raises(NotImplementedError):
            Document("draft").once("save", lambda e, p: None)

    @pytest.mark.asyncio
    async def test_instances_do_not_share_listeners(self):
        a, b = Document("a"), Document("b")
        a.on("save", lambda e, p: 1)
        assert len(await b.save()) == 0

    @pytest.mark.asyncio
    async def test_decorator_through_facade(self):
        doc = Document("draft")

        @doc.on("save")
        async def handler(event, payload):
            event.stop()

        result = await doc.save()
        assert result.stopped


class TestPackage:
    def test_default_emitter(self):
        assert isinstance(eee.default_emitter, Emitter)

    @pytest.mark.asyncio
    async def test_logging_opt_in(self):
        """Debug records are emitted once the eee logger is enabled."""
        records = []
        handler_id = logger.add(records.append, level="DEBUG", format="{message}")
        logger.enable("eee")
        try:
            emitter = Emitter()
            emitter.on("save", lambda e, p: None)
            await emitter.emit("save")
        finally:
            logger.disable("eee")
            logger.remove(handler_id)
        messages = [str(r) for r in records]
        assert any("Registered" in m for m in messages)
        assert any("Emit ['save']" in m for m in messages)
