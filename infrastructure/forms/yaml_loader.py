# infrastructure/forms/yaml_loader.py
"""
YAMLファイルからFormDefinitionドメインオブジェクトを生成
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import yaml

from domain.form_definition import FormDefinition


class FormDefinitionLoadError(Exception):
    pass


class YamlFormDefinitionLoader:
    """YAMLファイルからFormDefinitionをロード"""

    def load_from_file(self, path: Path) -> FormDefinition:
        p = Path(path)
        if not p.exists():
            raise FormDefinitionLoadError(f"Form definition not found: {path}")

        with p.open("r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise FormDefinitionLoadError(f"Form definition is not valid YAML: {path}: {exc}") from exc

        if data is None:
            raise FormDefinitionLoadError(f"Form definition is empty: {path}")

        if not isinstance(data, dict):
            raise FormDefinitionLoadError(f"Form definition is invalid: {path}")

        data.setdefault("name", p.stem)
        return self.load_from_dict(data)

    def load_from_dict(self, data: Dict[str, Any]) -> FormDefinition:
        name = data.get("name")
        if name is None:
            name = ""
        if not isinstance(name, str):
            raise FormDefinitionLoadError(f"Form name must be a string, got: {type(name).__name__}")

        return FormDefinition(
            name=name,
            compound=bool(data.get("compound", False)),
            children=self._load_children(data.get("children", [])),
            description=data.get("description") or "",
        )

    def _load_children(self, raw: Any) -> List[FormDefinition]:
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise FormDefinitionLoadError("children must be a list")

        children: List[FormDefinition] = []
        for item in raw:
            if isinstance(item, str):
                children.append(FormDefinition(name=item))
                continue
            if not isinstance(item, dict) or "name" not in item:
                raise FormDefinitionLoadError(f"Invalid child definition: {item!r}")
            children.append(self.load_from_dict(item))
        return children
