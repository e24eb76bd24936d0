from __future__ import annotations

import asyncio
import json
from collections.abc import Mapping, Sequence
from typing import Any

import httpx
from pydantic import BaseModel

from detector_api import operations as ops
from detector_api.config.settings import ClientConfig
from detector_api.models import (
    CreateUpdateDetectorRequest,
    Detector,
    Event,
    Incident,
    SearchResults,
    ValidateDetectorRequest,
)
from detector_api.operations import Operation
from detector_api.transport.dispatcher import Dispatcher
from detector_api.transport.errors import RequestTimeout
from detector_api.transport.response import read_response

JSON_CONTENT_TYPE = "application/json"


class DetectorClient:
    """Async client for the detector and incident endpoints.

    Every named method is a thin adapter over :meth:`invoke`, which runs one
    entry of the operation table through the dispatcher and the response
    classifier.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        api_url: str | None = None,
        auth_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if config is None:
            config = ClientConfig.from_settings(transport=transport, base_url=api_url, auth_token=auth_token)
        self._config = config
        self._dispatcher = Dispatcher(config)

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def invoke(
        self,
        operation: Operation | str,
        path_args: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
        body: bytes | None = None,
        *,
        content_type: str | None = JSON_CONTENT_TYPE,
        timeout: float | None = None,
    ) -> Any:
        """Run ``operation`` and return its decoded response (``None`` for no-content).

        ``timeout`` bounds the whole exchange including the body read.
        """

        if isinstance(operation, str):
            operation = ops.OPERATIONS[operation]
        path = operation.render_path(path_args)
        params = operation.encode_query(query)
        call = self._run(operation, path, params, body, content_type if body is not None else None)
        if timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout)
        except asyncio.TimeoutError as exc:
            raise RequestTimeout(
                f"{operation.name} exceeded {timeout}s deadline",
                method=operation.verb,
                url=path,
            ) from exc

    async def _run(
        self,
        operation: Operation,
        path: str,
        params: dict[str, str],
        body: bytes | None,
        content_type: str | None,
    ) -> Any:
        response = await self._dispatcher.dispatch(operation.verb, path, params, body, content_type=content_type)
        return await read_response(response, operation.expected_status, operation.response_shape)

    async def aclose(self) -> None:
        await self._dispatcher.aclose()

    async def __aenter__(self) -> DetectorClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # Detectors

    async def create_detector(self, request: CreateUpdateDetectorRequest, *, timeout: float | None = None) -> Detector:
        return await self.invoke(ops.CREATE_DETECTOR, body=_encode(request), timeout=timeout)

    async def get_detector(self, detector_id: str, *, timeout: float | None = None) -> Detector:
        return await self.invoke(ops.GET_DETECTOR, {"id": detector_id}, timeout=timeout)

    async def update_detector(self, detector_id: str, request: CreateUpdateDetectorRequest, *, timeout: float | None = None) -> Detector:
        return await self.invoke(ops.UPDATE_DETECTOR, {"id": detector_id}, body=_encode(request), timeout=timeout)

    async def delete_detector(self, detector_id: str, *, timeout: float | None = None) -> None:
        await self.invoke(ops.DELETE_DETECTOR, {"id": detector_id}, timeout=timeout)

    async def enable_detector(self, detector_id: str, labels: Sequence[str], *, timeout: float | None = None) -> None:
        await self.invoke(ops.ENABLE_DETECTOR, {"id": detector_id}, body=_encode(list(labels)), timeout=timeout)

    async def disable_detector(self, detector_id: str, labels: Sequence[str], *, timeout: float | None = None) -> None:
        await self.invoke(ops.DISABLE_DETECTOR, {"id": detector_id}, body=_encode(list(labels)), timeout=timeout)

    async def validate_detector(self, request: ValidateDetectorRequest, *, timeout: float | None = None) -> None:
        await self.invoke(ops.VALIDATE_DETECTOR, body=_encode(request), timeout=timeout)

    async def get_detectors(
        self,
        *,
        limit: int | None = None,
        name: str | None = None,
        offset: int | None = None,
        timeout: float | None = None,
    ) -> SearchResults[Detector]:
        query = {"limit": limit, "name": name, "offset": offset}
        return await self.invoke(ops.GET_DETECTORS, query=query, timeout=timeout)

    async def search_detectors(
        self,
        *,
        limit: int | None = None,
        name: str | None = None,
        offset: int | None = None,
        tags: str | None = None,
        timeout: float | None = None,
    ) -> SearchResults[Detector]:
        query = {"limit": limit, "name": name, "offset": offset, "tags": tags}
        return await self.invoke(ops.SEARCH_DETECTORS, query=query, timeout=timeout)

    async def get_detector_events(
        self,
        detector_id: str,
        *,
        start: int | None = None,
        end: int | None = None,
        offset: int | None = None,
        limit: int | None = None,
        timeout: float | None = None,
    ) -> list[Event]:
        query = {"start": start, "end": end, "offset": offset, "limit": limit}
        return await self.invoke(ops.GET_DETECTOR_EVENTS, {"id": detector_id}, query, timeout=timeout)

    async def get_detector_incidents(
        self,
        detector_id: str,
        *,
        offset: int | None = None,
        limit: int | None = None,
        timeout: float | None = None,
    ) -> list[Incident]:
        query = {"offset": offset, "limit": limit}
        return await self.invoke(ops.GET_DETECTOR_INCIDENTS, {"id": detector_id}, query, timeout=timeout)

    # Incidents

    async def get_incident(self, incident_id: str, *, timeout: float | None = None) -> Incident:
        return await self.invoke(ops.GET_INCIDENT, {"id": incident_id}, timeout=timeout)

    async def get_incidents(
        self,
        *,
        include_resolved: bool | None = None,
        limit: int | None = None,
        query: str | None = None,
        offset: int | None = None,
        timeout: float | None = None,
    ) -> list[Incident]:
        params = {"include_resolved": include_resolved, "limit": limit, "query": query, "offset": offset}
        return await self.invoke(ops.GET_INCIDENTS, query=params, timeout=timeout)


def _encode(payload: BaseModel | list[str]) -> bytes:
    if isinstance(payload, BaseModel):
        return payload.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")
    return json.dumps(payload).encode("utf-8")


__all__ = ["DetectorClient", "JSON_CONTENT_TYPE"]
