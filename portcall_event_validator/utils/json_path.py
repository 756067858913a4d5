from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Tuple, Union

PathToken = Union[str, int]

_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def _render_token(token: PathToken, first: bool) -> str:
    if isinstance(token, int):
        return f"[{token}]"
    if _IDENTIFIER_RE.fullmatch(token):
        return token if first else f".{token}"
    # keys such as "odd.key" or "" in the extensible context
    return f"[{json.dumps(token)}]"


@dataclass(frozen=True)
class JsonPath:
    """Location inside a candidate, rendered as ``location.geo.coordinates[1]``.

    The root renders as the empty string. Object keys that are not plain
    identifiers render in bracket form (``context["odd.key"]``) so a path
    always maps back to exactly one node.
    """

    tokens: Tuple[PathToken, ...] = ()

    def child(self, token: PathToken) -> "JsonPath":
        return JsonPath(self.tokens + (token,))

    @property
    def depth(self) -> int:
        return len(self.tokens)

    def __str__(self) -> str:
        return "".join(_render_token(tok, idx == 0) for idx, tok in enumerate(self.tokens))


ROOT = JsonPath()


def path_of(*tokens: PathToken) -> JsonPath:
    return JsonPath(tuple(tokens))


_TOKEN_RE = re.compile(r'\.?([A-Za-z_][A-Za-z0-9_]*)|\[([0-9]+)\]|\[("(?:[^"\\]|\\.)*")\]')


def parse_path(text: str) -> JsonPath:
    """Inverse of ``str(JsonPath)``.

    Raises:
        ValueError: If *text* is not a rendered path.
    """
    tokens = []
    pos = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None or (m.group(1) is not None and pos > 0 and not text.startswith(".", pos)):
            raise ValueError(f"Invalid path {text!r} at offset {pos}")
        name, index, quoted = m.groups()
        if name is not None:
            tokens.append(name)
        elif index is not None:
            tokens.append(int(index))
        else:
            tokens.append(json.loads(quoted))
        pos = m.end()
    return JsonPath(tuple(tokens))
