# domain/form_definition.py
"""
Declarative description of a form tree
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class FormDefinition:
    name: str
    compound: bool = False
    children: List["FormDefinition"] = field(default_factory=list)
    description: str = ""
