# application/services/field_name_parser.py
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Tuple


def parse_field_name(name: str) -> List[str]:
    """
    Split a bracket-notation field name into path segments.

    例: "author[image][]" => ["author", "image", ""]
    An unterminated bracket keeps the whole name as a single segment.
    """
    start = name.find("[")
    if start <= 0:
        return [name]

    segments = [name[:start]]
    rest = name[start:]
    while rest:
        if not rest.startswith("["):
            return [name]
        end = rest.find("]")
        if end < 0:
            return [name]
        segments.append(rest[1:end])
        rest = rest[end + 1:]
    return segments


def assign(tree: Dict[str, Any], segments: List[str], value: Any) -> None:
    """Assign `value` at `segments`; an empty segment appends to a list."""
    node: Any = tree
    for index, segment in enumerate(segments):
        last = index == len(segments) - 1
        if isinstance(node, list):
            if last:
                node.append(value)
                return
            child: Any = {}
            node.append(child)
            node = child
            continue

        if last:
            node[segment] = value
            return

        # a container of the other kind is replaced: "a[]" after "a[b]" drops {b: ...} and vice versa
        next_is_list = segments[index + 1] == ""
        existing = node.get(segment)
        if next_is_list:
            if not isinstance(existing, list):
                existing = []
                node[segment] = existing
        elif not isinstance(existing, dict):
            existing = {}
            node[segment] = existing
        node = existing


def build_tree(pairs: Iterable[Tuple[str, Any]]) -> Dict[str, Any]:
    tree: Dict[str, Any] = {}
    for name, value in pairs:
        assign(tree, parse_field_name(name), value)
    return tree
