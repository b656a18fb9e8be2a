"""
Doctrine System
Barton numbering registry and compliance reporting
"""

from .types import (
    BartonNumber,
    Component,
    ComponentSpec,
    ComponentType,
    ComplianceReport,
    ComponentRecord,
    HealthStatus,
    HealthSummary,
    HierarchyNode,
    ValidationSummary,
    health_color,
    health_icon,
)
from .registry import (
    DoctrineError,
    DoctrineRegistry,
    HierarchyCycleError,
    RegistrationIssue,
)
from .bootstrap import KNOWN_COMPONENTS, auto_register_known_components

__all__ = [
    "BartonNumber",
    "Component",
    "ComponentSpec",
    "ComponentType",
    "ComplianceReport",
    "ComponentRecord",
    "HealthStatus",
    "HealthSummary",
    "HierarchyNode",
    "ValidationSummary",
    "health_color",
    "health_icon",
    "DoctrineError",
    "DoctrineRegistry",
    "HierarchyCycleError",
    "RegistrationIssue",
    "KNOWN_COMPONENTS",
    "auto_register_known_components",
]
