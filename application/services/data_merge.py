# application/services/data_merge.py
from __future__ import annotations

from typing import Any, Dict, Mapping


def replace_recursive(base: Mapping[str, Any], replacement: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Merge `replacement` into a copy of `base`.

    Keys present on both sides recurse when both values are mappings;
    otherwise the replacement value wins. Inputs are left untouched.
    """
    merged: Dict[str, Any] = dict(base)
    for key, value in replacement.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = replace_recursive(current, value)
        else:
            merged[key] = value
    return merged
