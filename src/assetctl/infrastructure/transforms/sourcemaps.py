"""Source Map v3 documents and ``sourceMappingURL`` comments.

Minifiers used here do not emit mappings, so minified outputs get a map
that carries the original sources (and their contents) with an empty
``mappings`` string. Browsers then list the original files in devtools
without claiming positions the pipeline cannot vouch for.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Literal


def source_only_map(file: str, sources: Mapping[str, str]) -> str:
    """A v3 map for *file* embedding *sources* (name -> content)."""
    document: dict[str, Any] = {
        "version": 3,
        "file": file,
        "sources": list(sources),
        "sourcesContent": list(sources.values()),
        "names": [],
        "mappings": "",
    }
    return json.dumps(document, indent=2)


def retarget_map(raw_map: str, file: str, *, keep_mappings: bool) -> str:
    """Copy a compiler-produced map for a different output *file*.

    With ``keep_mappings=False`` the positional mappings are dropped,
    leaving sources and their contents.
    """
    document = json.loads(raw_map)
    document["file"] = file
    if not keep_mappings:
        document["mappings"] = ""
        document["names"] = []
    return json.dumps(document, indent=2)


def map_comment(map_name: str, kind: Literal["css", "js"]) -> str:
    """The trailing comment that points a browser at *map_name*."""
    if kind == "css":
        return f"/*# sourceMappingURL={map_name} */"
    return f"//# sourceMappingURL={map_name}"


def with_map_comment(content: str, map_name: str, kind: Literal["css", "js"]) -> str:
    """Append the ``sourceMappingURL`` comment on its own final line."""
    return f"{content.rstrip()}\n{map_comment(map_name, kind)}\n"
