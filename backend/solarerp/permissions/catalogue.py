# Overview: Capability catalogue keyed by code, for listings and lookups.

from __future__ import annotations

from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Mapping

from .definitions import CAPABILITY_DEFINITIONS
from .roles import PermissionSet


@dataclass(frozen=True)
class Capability:
    code: str
    name: str
    description: str
    category: str

    def to_dict(self) -> dict:
        return asdict(self)


# Declaration order of CAPABILITY_DEFINITIONS (grouped by category)
CAPABILITIES: Mapping[str, Capability] = MappingProxyType({
    code: Capability(code, name, description, category)
    for code, name, description, category in CAPABILITY_DEFINITIONS
})


def get_all_capability_codes() -> list[str]:
    return list(CAPABILITIES)


def get_capabilities_by_category(category: str) -> list[Capability]:
    return [cap for cap in CAPABILITIES.values() if cap.category == category]


def get_capability_definition(code: str) -> dict | None:
    """Catalogue entry as a fresh dict, or None for an unknown code."""
    capability = CAPABILITIES.get(code)
    return capability.to_dict() if capability else None


def validate_capability_code(code: str) -> bool:
    return code in PermissionSet.field_names()
