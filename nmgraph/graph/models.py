"""Data models for manifests and module records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Set

from pydantic import BaseModel, Field


class Manifest(BaseModel):
    """Parsed package descriptor.

    Only names matter for resolution; version strings are carried as-is
    and never interpreted.
    """

    name: str
    version: str
    dependencies: Dict[str, str] = Field(default_factory=dict)
    dev_dependencies: Dict[str, str] = Field(
        default_factory=dict, alias="devDependencies"
    )
    optional_dependencies: Dict[str, str] = Field(
        default_factory=dict, alias="optionalDependencies"
    )

    model_config = {"extra": "ignore", "populate_by_name": True}


class ModuleIdentity(NamedTuple):
    """Logical identity of an installed package, independent of location."""

    name: str
    version: str

    @property
    def key(self) -> str:
        return f"{self.name}@{self.version}"


@dataclass
class ModuleRecord:
    """Snapshot of one installed module.

    Attributes:
        path: Canonical directory of the module, its unique key.
        name: Package name from the manifest.
        version: Package version from the manifest.
        dev: True when every known edge reaching the module is dev-only.
        required_by: Paths of modules that directly require this one.
        dependencies: Paths this module requires, in manifest order.
    """

    path: str
    name: str = ""
    version: str = ""
    dev: bool = False
    required_by: Set[str] = field(default_factory=set)
    dependencies: List[str] = field(default_factory=list)

    @property
    def identity(self) -> ModuleIdentity:
        return ModuleIdentity(self.name, self.version)


__all__ = ["Manifest", "ModuleIdentity", "ModuleRecord"]
