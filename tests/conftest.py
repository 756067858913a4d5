import copy
from typing import Any, Dict

import pytest

from portcall_event_validator.models.registry import get_registry

_VALID_EVENT: Dict[str, Any] = {
    "uuid": "3f29b1aa-0a1e-4c3d-9abc-1234567890ab",
    "version": "3.2.1",
    "source": "SEGOT-port-authority",
    "eventType": "berth.ata.vessel",
    "recordTime": "2026-05-04T10:15:00Z",
    "eventTime": "2026-05-04T10:12:30+02:00",
    "ship": {"imo": "9321483", "mmsi": "265547250", "name": "Stena Danica"},
    "port": "SEGOT",
    "portcallId": "SEGOT2026-0142",
    "location": {
        "type": "berth",
        "gln": "7350000000012",
        "name": "Skandia 712",
        "geo": {"type": "Point", "coordinates": [11.8, 57.69]},
    },
    "context": {
        "mooring": {"bollardFore": 12, "bollardAft": 18, "orientation": "port"},
        "berthVisitId": "BID-segot-0142",
        "draught": 820,
        "terminalReference": {"booking": "A-17"},
    },
}

_CLOSED_SQUARE = [[[11.0, 57.0], [12.0, 57.0], [12.0, 58.0], [11.0, 58.0], [11.0, 57.0]]]


@pytest.fixture
def valid_event() -> Dict[str, Any]:
    """A fully valid 3.2.1 event; each test gets its own copy."""
    return copy.deepcopy(_VALID_EVENT)


@pytest.fixture(scope="session")
def registry():
    return get_registry("3.2.1")


@pytest.fixture
def closed_square():
    """Polygon coordinates with one closed five-position ring."""
    return copy.deepcopy(_CLOSED_SQUARE)
