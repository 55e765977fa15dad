"""
Primitive types known to agent-primer.

The registry is a fixed, ordered list: pickers and prompt sections follow
this order (skills first, then domains).
"""

from __future__ import annotations

from agent_primer.config import PrimerConfig
from agent_primer.primitives.base import Primitive
from agent_primer.primitives.domain import DomainPrimitive
from agent_primer.primitives.skill import SkillPrimitive

PRIMITIVE_TYPES = (SkillPrimitive, DomainPrimitive)


def build_registry(config: PrimerConfig) -> list[Primitive]:
    return [cls.from_config(config) for cls in PRIMITIVE_TYPES]


def find_primitive(registry: list[Primitive], type_: str) -> Primitive | None:
    for primitive in registry:
        if primitive.type == type_:
            return primitive
    return None


__all__ = [
    "Primitive",
    "SkillPrimitive",
    "DomainPrimitive",
    "PRIMITIVE_TYPES",
    "build_registry",
    "find_primitive",
]
