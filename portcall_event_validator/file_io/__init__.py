"""File I/O related utilities.

This package groups small modules that read event files and format
file-backed diagnostics.
"""

from .event_loader import (
    EVENT_FILE_EXTENSIONS,
    EventDocument,
    build_source_map,
    load_events,
    load_events_from_string,
)
from .source_location import SourceLocation, lookup_source

__all__ = [
    "EVENT_FILE_EXTENSIONS",
    "EventDocument",
    "build_source_map",
    "load_events",
    "load_events_from_string",
    "SourceLocation",
    "lookup_source",
]
