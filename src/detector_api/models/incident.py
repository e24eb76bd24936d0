from __future__ import annotations

from typing import Any

from pydantic import Field

from detector_api.models.detector import WireModel


class Event(WireModel):
    id: str | None = None
    anomaly_state: str | None = Field(default=None, alias="anomalyState")
    detect_label: str | None = Field(default=None, alias="detectLabel")
    detector_id: str | None = Field(default=None, alias="detectorId")
    detector_name: str | None = Field(default=None, alias="detectorName")
    event_annotations: dict[str, Any] | None = Field(default=None, alias="eventAnnotations")
    incident_id: str | None = Field(default=None, alias="incidentId")
    inputs: dict[str, Any] | None = None
    severity: str | None = None
    timestamp: int | None = None


class Incident(WireModel):
    id: str | None = None
    incident_id: str | None = Field(default=None, alias="incidentId")
    active: bool | None = None
    anomaly_state: str | None = Field(default=None, alias="anomalyState")
    detect_label: str | None = Field(default=None, alias="detectLabel")
    detector_id: str | None = Field(default=None, alias="detectorId")
    detector_name: str | None = Field(default=None, alias="detectorName")
    events: list[Event] | None = None
    is_muted: bool | None = Field(default=None, alias="isMuted")
    severity: str | None = None
    triggered_notification_sent: bool | None = Field(default=None, alias="triggeredNotificationSent")
    triggered_while_muted: bool | None = Field(default=None, alias="triggeredWhileMuted")


__all__ = ["Event", "Incident"]
