from __future__ import annotations

import asyncio
import os
from typing import Callable, Iterable, Iterator

import httpx
import pytest

from detector_api.client import DetectorClient
from detector_api.config import settings as settings_module
from detector_api.config.settings import ClientConfig

BASE_URL = "https://api.example.test"
TOKEN = "secret-token"


class TrackingStream(httpx.AsyncByteStream):
    """Response body that records how far it was read and how often it was closed."""

    def __init__(
        self,
        chunks: Iterable[bytes] = (),
        *,
        error: Exception | None = None,
        stall: float | None = None,
    ) -> None:
        self._chunks = list(chunks)
        self._error = error
        self._stall = stall
        self.chunks_read = 0
        self.eof = False
        self.close_calls = 0

    async def __aiter__(self):
        for chunk in self._chunks:
            self.chunks_read += 1
            yield chunk
        if self._stall is not None:
            await asyncio.sleep(self._stall)
        if self._error is not None:
            raise self._error
        self.eof = True

    async def aclose(self) -> None:
        self.close_calls += 1


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for key in list(os.environ):
        if key.startswith("DETECTOR_API_"):
            monkeypatch.delenv(key, raising=False)
    settings_module.get_settings.cache_clear()
    yield
    settings_module.get_settings.cache_clear()


@pytest.fixture
def make_client() -> Callable[..., DetectorClient]:
    def factory(handler: Callable, **overrides) -> DetectorClient:
        config = ClientConfig(
            base_url=overrides.pop("base_url", BASE_URL),
            auth_token=overrides.pop("auth_token", TOKEN),
            transport=httpx.MockTransport(handler),
            **overrides,
        )
        return DetectorClient(config)

    return factory


@pytest.fixture
def tracking_stream() -> type[TrackingStream]:
    return TrackingStream
