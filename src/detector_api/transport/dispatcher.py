from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Literal

import httpx

from detector_api.config.settings import ClientConfig
from detector_api.transport.errors import RequestTimeout, TransportError

LOGGER = logging.getLogger(__name__)

Verb = Literal["GET", "POST", "PUT", "DELETE"]
VERBS: frozenset[str] = frozenset({"GET", "POST", "PUT", "DELETE"})


class Dispatcher:
    """Issue one authenticated HTTP exchange per call.

    Responses are returned in streaming mode; whoever receives one owns it and
    must read and close it (see ``detector_api.transport.response``).
    """

    def __init__(self, config: ClientConfig) -> None:
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout,
            transport=config.transport,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def dispatch(
        self,
        verb: str,
        path: str,
        params: Mapping[str, str | None] | None = None,
        body: bytes | None = None,
        *,
        content_type: str | None = None,
    ) -> httpx.Response:
        method = verb.upper()
        if method not in VERBS:
            raise ValueError(f"unsupported HTTP verb: {verb}")

        request = self._client.build_request(
            method,
            self._url(path),
            params=_clean_params(params),
            content=body,
            headers=self._headers(content_type),
        )
        LOGGER.debug("%s %s", method, request.url)
        try:
            response = await self._client.send(request, stream=True)
        except httpx.TimeoutException as exc:
            raise RequestTimeout(f"{method} {request.url} timed out", method=method, url=str(request.url)) from exc
        except httpx.RequestError as exc:
            raise TransportError(f"{method} {request.url} failed: {exc}", method=method, url=str(request.url)) from exc
        LOGGER.debug("%s %s -> %s", method, request.url, response.status_code)
        return response

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> Dispatcher:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _headers(self, content_type: str | None) -> dict[str, str]:
        headers = {"User-Agent": self._config.user_agent}
        if self._config.auth_token:
            headers[self._config.auth_header] = self._config.auth_token
        if content_type:
            headers["Content-Type"] = content_type
        return headers

    def _url(self, path: str) -> str:
        if not path.startswith('/'):
            path = '/' + path
        return path


def _clean_params(params: Mapping[str, str | None] | None) -> dict[str, str] | None:
    if not params:
        return None
    return {key: value for key, value in params.items() if value is not None}


__all__ = ["Dispatcher", "VERBS", "Verb"]
