from detector_api.models.detector import (
    CreateUpdateDetectorRequest,
    Detector,
    Rule,
    SearchResults,
    ValidateDetectorRequest,
)
from detector_api.models.incident import Event, Incident

__all__ = [
    "CreateUpdateDetectorRequest",
    "Detector",
    "Event",
    "Incident",
    "Rule",
    "SearchResults",
    "ValidateDetectorRequest",
]
