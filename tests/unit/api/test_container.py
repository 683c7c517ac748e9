"""Tests for ServiceContainer construction."""

from unittest.mock import AsyncMock

import pytest

from trustlink.api import container as container_module
from trustlink.api.container import ServiceContainer
from trustlink.config.settings import Settings


class TestBuild:
    async def test_documents_closed_when_publisher_fails(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        documents = AsyncMock()
        monkeypatch.setattr(container_module, "create_document_store", lambda config: documents)
        monkeypatch.setattr(
            container_module,
            "create_event_publisher",
            AsyncMock(side_effect=ConnectionError("broker unreachable")),
        )

        with pytest.raises(ConnectionError):
            await ServiceContainer.build(Settings(auth={"provider": "static"}))

        documents.close.assert_awaited_once()

    async def test_builds_in_memory_backends(self) -> None:
        built = await ServiceContainer.build(Settings(auth={"provider": "static"}))

        assert await built.documents.ping() is True
        await built.close()
