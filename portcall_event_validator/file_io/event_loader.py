# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Event file loader with source locations.

JSON and YAML event files hold either a single event or a list of events.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml

from ..exceptions import EventFileError
from ..utils.json_path import ROOT, JsonPath
from .source_location import SourceLocation, SourceMap, lookup_source

logger = logging.getLogger(__name__)

JSON_EXTENSIONS = (".json",)
YAML_EXTENSIONS = (".yaml", ".yml")
EVENT_FILE_EXTENSIONS = JSON_EXTENSIONS + YAML_EXTENSIONS


class EventYamlLoader(yaml.SafeLoader):
    """Safe loader that keeps date-times as strings.

    Event timestamps are validated lexically, so they must reach the
    validator exactly as written instead of as ``datetime`` objects.
    """


EventYamlLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:timestamp"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


@dataclass
class EventDocument:
    """Events parsed from one file."""

    file_path: Optional[Path]
    events: List[Any]
    # True when the file holds a list; paths then start with the list index
    is_list: bool = False
    source_map: SourceMap = field(default_factory=dict)

    def event_path(self, index: int) -> JsonPath:
        return ROOT.child(index) if self.is_list else ROOT

    def locate(self, json_path: str) -> SourceLocation:
        return lookup_source(self.source_map, json_path, self.file_path)


def build_source_map(content: str) -> SourceMap:
    """Map rendered paths (``[0].ship.imo``) to 1-based line/column.

    Uses PyYAML's node tree (yaml.compose), which also covers JSON documents.
    """
    source_map: SourceMap = {}

    try:
        root = yaml.compose(content, Loader=EventYamlLoader)
    except yaml.YAMLError:
        # parse errors are reported by the data load
        return source_map

    if root is None:
        return source_map

    def _walk(node: yaml.Node, path: JsonPath) -> None:
        mark = node.start_mark
        # PyYAML uses 0-based line/column
        source_map[str(path)] = {"line": mark.line + 1, "column": mark.column + 1}

        if isinstance(node, yaml.MappingNode):
            for key_node, value_node in node.value:
                if isinstance(key_node, yaml.ScalarNode):
                    _walk(value_node, path.child(str(key_node.value)))
        elif isinstance(node, yaml.SequenceNode):
            for idx, item_node in enumerate(node.value):
                _walk(item_node, path.child(idx))

    _walk(root, ROOT)
    return source_map


def _parse(content: str, suffix: str) -> Any:
    if suffix in JSON_EXTENSIONS:
        return json.loads(content)
    return yaml.load(content, Loader=EventYamlLoader)


def load_events_from_string(content: str, suffix: str = ".json", file_path: Optional[Path] = None) -> EventDocument:
    """Parse event file content.

    Raises:
        EventFileError: If the content is not valid JSON/YAML or is empty.
    """
    where = file_path or "<string>"
    try:
        data = _parse(content, suffix)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise EventFileError(f"Failed to parse event file {where}: {exc}") from exc

    if data is None:
        raise EventFileError(f"Event file {where} is empty")

    is_list = isinstance(data, list)
    events = data if is_list else [data]
    return EventDocument(
        file_path=file_path,
        events=events,
        is_list=is_list,
        source_map=build_source_map(content),
    )


def load_events(file_path: Union[str, Path]) -> EventDocument:
    """Load a ``.json``, ``.yaml`` or ``.yml`` event file.

    Raises:
        EventFileError: If the file is missing, has an unsupported extension,
            or cannot be parsed.
    """
    path = Path(file_path)

    if not path.exists():
        raise EventFileError(f"Event file not found: {path}")

    if not path.is_file():
        raise EventFileError(f"Path is not a file: {path}")

    suffix = path.suffix.lower()
    if suffix not in EVENT_FILE_EXTENSIONS:
        raise EventFileError(
            f"Unsupported event file extension '{path.suffix}': {path} "
            f"(expected one of {', '.join(EVENT_FILE_EXTENSIONS)})"
        )

    logger.debug(f"Loading event file: {path}")
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise EventFileError(f"Failed to read event file {path}: {exc}") from exc

    return load_events_from_string(content, suffix, file_path=path)
