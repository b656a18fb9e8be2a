"""
Doctrine Type Definitions
Barton numbers, registered components and compliance report shapes
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..core.validate import (
    BLUEPRINT_ID,
    format_barton_number,
    in_segment_range,
    parse_barton_number,
)


def utc_now() -> datetime:
    """Current time, timezone-aware."""
    return datetime.now(timezone.utc)


class HealthStatus(str, Enum):
    """Traffic-light health of a component"""
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


class ComponentType(str, Enum):
    """Kinds of components tracked by the doctrine"""
    MODULE = "module"
    SUBMODULE = "submodule"
    PAGE = "page"
    FILE = "file"
    UI_VISUAL = "ui_visual"
    TROUBLESHOOTING = "troubleshooting"
    ERROR_SIGNATURE = "error_signature"


HEALTH_COLORS = {
    HealthStatus.GREEN: "text-green-600 bg-green-100 dark:text-green-400 dark:bg-green-900",
    HealthStatus.YELLOW: "text-yellow-600 bg-yellow-100 dark:text-yellow-400 dark:bg-yellow-900",
    HealthStatus.RED: "text-red-600 bg-red-100 dark:text-red-400 dark:bg-red-900",
}

HEALTH_ICONS = {
    HealthStatus.GREEN: "🟢",
    HealthStatus.YELLOW: "🟡",
    HealthStatus.RED: "🔴",
}


def health_color(status: HealthStatus | str) -> str:
    """CSS classes for a health status"""
    return HEALTH_COLORS[HealthStatus(status)]


def health_icon(status: HealthStatus | str) -> str:
    """Glyph for a health status"""
    return HEALTH_ICONS[HealthStatus(status)]


@dataclass(frozen=True)
class BartonNumber:
    """
    Hierarchical component identifier: blueprint.module.submodule.file.

    Construction never fails; out-of-range parts are kept as given and
    reported by ``validate()``.
    """

    blueprint_id: int
    module: int
    submodule: int
    file: int
    expected_blueprint_id: int = field(default=BLUEPRINT_ID, compare=False, repr=False)

    def __str__(self) -> str:
        return format_barton_number(self.blueprint_id, self.module, self.submodule, self.file)

    @property
    def canonical(self) -> str:
        """Dotted form, e.g. ``39.01.01.01``"""
        return str(self)

    def validate(self) -> bool:
        """True when the blueprint matches and every part is within [1, 99]."""
        return (
            self.blueprint_id == self.expected_blueprint_id
            and in_segment_range(self.module)
            and in_segment_range(self.submodule)
            and in_segment_range(self.file)
        )

    @property
    def health_status(self) -> HealthStatus:
        return HealthStatus.GREEN if self.validate() else HealthStatus.RED

    @property
    def description(self) -> str:
        return (
            f"Blueprint {self.blueprint_id}, Module {self.module}, "
            f"Submodule {self.submodule}, File {self.file}"
        )

    @classmethod
    def parse(cls, text: str, expected_blueprint_id: int = BLUEPRINT_ID) -> Optional["BartonNumber"]:
        """Build from the dotted form; None if the text is malformed."""
        parts = parse_barton_number(text)
        if parts is None:
            return None
        return cls(*parts, expected_blueprint_id=expected_blueprint_id)


class Component(BaseModel):
    """Registry entry for a numbered component"""
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(..., description="Unique component identifier")
    name: str
    type: ComponentType
    barton_number: BartonNumber
    parent_id: Optional[str] = None
    children: List[str] = Field(default_factory=list)
    health_status: HealthStatus
    last_updated: datetime = Field(default_factory=utc_now)
    description: str = ""


class ComponentSpec(BaseModel):
    """Declarative registration input"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: ComponentType
    module: int
    submodule: int
    file: int
    description: str = ""
    parent_id: Optional[str] = None


class HierarchyNode(BaseModel):
    """Component with its descendants nested underneath"""
    id: str
    name: str
    type: ComponentType
    barton_number: str
    health_status: HealthStatus
    description: str = ""
    children: List["HierarchyNode"] = Field(default_factory=list)

    def walk(self):
        """Yield this node and every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


class ReportModel(BaseModel):
    """Report shapes serialize with camelCase keys"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ValidationSummary(ReportModel):
    valid: int = 0
    invalid: int = 0
    errors: List[str] = Field(default_factory=list)


class HealthSummary(ReportModel):
    green: int = 0
    yellow: int = 0
    red: int = 0

    @property
    def total(self) -> int:
        return self.green + self.yellow + self.red


class ComponentRecord(ReportModel):
    """Flattened component for report consumers"""
    id: str
    name: str
    type: ComponentType
    canonical_string: str
    health_status: HealthStatus
    last_updated: datetime
    description: str = ""


class ComplianceReport(ReportModel):
    """Doctrine compliance snapshot of a registry"""
    doctrine_version: str
    blueprint_id: int
    fingerprint: str
    total_components: int
    validation: ValidationSummary
    health_summary: HealthSummary
    components: List[ComponentRecord] = Field(default_factory=list)
