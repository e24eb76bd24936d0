"""Endpoint table for the detector and incident APIs.

Each entry fixes the verb, path template, accepted query parameters, expected
success status and response shape of one operation. ``DetectorClient.invoke``
is the only consumer.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from detector_api.models import Detector, Event, Incident, SearchResults
from detector_api.transport.dispatcher import Verb

DETECTOR_API_URL = "/v2/detector"
INCIDENT_API_URL = "/v2/incident"

HTTP_OK = 200
HTTP_NO_CONTENT = 204


@dataclass(frozen=True)
class QueryParam:
    name: str
    arg: str | None = None
    omit_empty: bool = False

    @property
    def key(self) -> str:
        return self.arg or self.name

    def encode(self, value: Any) -> str | None:
        if value is None:
            return None
        if isinstance(value, bool):
            return "true" if value else "false"
        text = str(value)
        if self.omit_empty and not text:
            return None
        return text


@dataclass(frozen=True)
class Operation:
    name: str
    verb: Verb
    path: str
    expected_status: int
    response_shape: Any = None
    query: tuple[QueryParam, ...] = ()

    def render_path(self, path_args: Mapping[str, Any] | None = None) -> str:
        encoded = {key: quote(str(value), safe='') for key, value in (path_args or {}).items()}
        try:
            return self.path.format(**encoded)
        except KeyError as exc:
            raise TypeError(f"{self.name} requires path argument {exc.args[0]!r}") from None

    def encode_query(self, values: Mapping[str, Any] | None = None) -> dict[str, str]:
        values = dict(values or {})
        params: dict[str, str] = {}
        for param in self.query:
            encoded = param.encode(values.pop(param.key, None))
            if encoded is not None:
                params[param.name] = encoded
        if values:
            unknown = ", ".join(sorted(values))
            raise TypeError(f"{self.name} got unexpected query arguments: {unknown}")
        return params


_LIMIT = QueryParam("limit")
_OFFSET = QueryParam("offset")
_NAME = QueryParam("name", omit_empty=True)

CREATE_DETECTOR = Operation("create_detector", "POST", DETECTOR_API_URL, HTTP_OK, Detector)
GET_DETECTOR = Operation("get_detector", "GET", DETECTOR_API_URL + "/{id}", HTTP_OK, Detector)
UPDATE_DETECTOR = Operation("update_detector", "PUT", DETECTOR_API_URL + "/{id}", HTTP_OK, Detector)
DELETE_DETECTOR = Operation("delete_detector", "DELETE", DETECTOR_API_URL + "/{id}", HTTP_NO_CONTENT)
ENABLE_DETECTOR = Operation("enable_detector", "PUT", DETECTOR_API_URL + "/{id}/enable", HTTP_NO_CONTENT)
DISABLE_DETECTOR = Operation("disable_detector", "PUT", DETECTOR_API_URL + "/{id}/disable", HTTP_NO_CONTENT)
VALIDATE_DETECTOR = Operation("validate_detector", "POST", DETECTOR_API_URL + "/validate", HTTP_NO_CONTENT)
GET_DETECTORS = Operation(
    "get_detectors",
    "GET",
    DETECTOR_API_URL,
    HTTP_OK,
    SearchResults[Detector],
    (_LIMIT, _NAME, _OFFSET),
)
SEARCH_DETECTORS = Operation(
    "search_detectors",
    "GET",
    DETECTOR_API_URL,
    HTTP_OK,
    SearchResults[Detector],
    (_LIMIT, _NAME, _OFFSET, QueryParam("tags", omit_empty=True)),
)
GET_DETECTOR_EVENTS = Operation(
    "get_detector_events",
    "GET",
    DETECTOR_API_URL + "/{id}/events",
    HTTP_OK,
    list[Event],
    (QueryParam("from", arg="start"), QueryParam("to", arg="end"), _OFFSET, _LIMIT),
)
GET_DETECTOR_INCIDENTS = Operation(
    "get_detector_incidents",
    "GET",
    DETECTOR_API_URL + "/{id}/incidents",
    HTTP_OK,
    list[Incident],
    (_OFFSET, _LIMIT),
)
GET_INCIDENT = Operation("get_incident", "GET", INCIDENT_API_URL + "/{id}", HTTP_OK, Incident)
GET_INCIDENTS = Operation(
    "get_incidents",
    "GET",
    INCIDENT_API_URL,
    HTTP_OK,
    list[Incident],
    (
        QueryParam("includeResolved", arg="include_resolved"),
        _LIMIT,
        QueryParam("query", omit_empty=True),
        _OFFSET,
    ),
)

OPERATIONS: dict[str, Operation] = {
    op.name: op
    for op in (
        CREATE_DETECTOR,
        GET_DETECTOR,
        UPDATE_DETECTOR,
        DELETE_DETECTOR,
        ENABLE_DETECTOR,
        DISABLE_DETECTOR,
        VALIDATE_DETECTOR,
        GET_DETECTORS,
        SEARCH_DETECTORS,
        GET_DETECTOR_EVENTS,
        GET_DETECTOR_INCIDENTS,
        GET_INCIDENT,
        GET_INCIDENTS,
    )
}


__all__ = [
    "CREATE_DETECTOR",
    "DELETE_DETECTOR",
    "DISABLE_DETECTOR",
    "ENABLE_DETECTOR",
    "GET_DETECTOR",
    "GET_DETECTORS",
    "GET_DETECTOR_EVENTS",
    "GET_DETECTOR_INCIDENTS",
    "GET_INCIDENT",
    "GET_INCIDENTS",
    "OPERATIONS",
    "Operation",
    "QueryParam",
    "SEARCH_DETECTORS",
    "UPDATE_DETECTOR",
    "VALIDATE_DETECTOR",
]
