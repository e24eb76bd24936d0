from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class WireModel(BaseModel):
    """Common config: camelCase aliases on the wire, unknown fields kept."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Rule(WireModel):
    detect_label: str | None = Field(default=None, alias="detectLabel")
    severity: str | None = None
    description: str | None = None
    disabled: bool | None = None
    notifications: list[dict[str, Any]] | None = None
    parameterized_body: str | None = Field(default=None, alias="parameterizedBody")
    parameterized_subject: str | None = Field(default=None, alias="parameterizedSubject")
    runbook_url: str | None = Field(default=None, alias="runbookUrl")
    tip: str | None = None


class Detector(WireModel):
    id: str | None = None
    name: str | None = None
    description: str | None = None
    program_text: str | None = Field(default=None, alias="programText")
    rules: list[Rule] | None = None
    tags: list[str] | None = None
    teams: list[str] | None = None
    custom_properties: dict[str, Any] | None = Field(default=None, alias="customProperties")
    locked: bool | None = None
    max_delay: int | None = Field(default=None, alias="maxDelay")
    min_delay: int | None = Field(default=None, alias="minDelay")
    timezone: str | None = None
    created: int | None = None
    creator: str | None = None
    last_updated: int | None = Field(default=None, alias="lastUpdated")
    last_updated_by: str | None = Field(default=None, alias="lastUpdatedBy")
    over_mts_limit: int | None = Field(default=None, alias="overMTSLimit")


class CreateUpdateDetectorRequest(WireModel):
    name: str
    program_text: str = Field(alias="programText")
    rules: list[Rule]
    description: str | None = None
    tags: list[str] | None = None
    teams: list[str] | None = None
    custom_properties: dict[str, Any] | None = Field(default=None, alias="customProperties")
    max_delay: int | None = Field(default=None, alias="maxDelay")
    min_delay: int | None = Field(default=None, alias="minDelay")
    timezone: str | None = None
    visualization_options: dict[str, Any] | None = Field(default=None, alias="visualizationOptions")


class ValidateDetectorRequest(WireModel):
    name: str
    program_text: str = Field(alias="programText")
    rules: list[Rule]
    tags: list[str] | None = None
    max_delay: int | None = Field(default=None, alias="maxDelay")
    min_delay: int | None = Field(default=None, alias="minDelay")


class SearchResults(WireModel, Generic[T]):
    """Paginated listing; ``count`` is the server total, not ``len(results)``."""

    count: int
    results: list[T]


__all__ = [
    "CreateUpdateDetectorRequest",
    "Detector",
    "Rule",
    "SearchResults",
    "ValidateDetectorRequest",
    "WireModel",
]
