"""
Repo Lens
Barton numbering registry and doctrine compliance reports
"""

from .core import Settings, get_settings, create_container
from .doctrine import (
    BartonNumber,
    Component,
    ComponentType,
    ComplianceReport,
    DoctrineRegistry,
    HealthStatus,
)

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "create_container",
    "BartonNumber",
    "Component",
    "ComponentType",
    "ComplianceReport",
    "DoctrineRegistry",
    "HealthStatus",
]
