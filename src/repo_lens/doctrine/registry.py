"""
Doctrine Registry
Central registry of Barton-numbered components
"""

import re
import threading
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from returns.result import Failure, Result, Success

from ..core.config import Settings
from ..core.hash import bucket, hash_fields
from ..core.logging_config import get_logger
from ..core.validate import BLUEPRINT_ID
from .types import (
    BartonNumber,
    ComplianceReport,
    Component,
    ComponentRecord,
    ComponentSpec,
    ComponentType,
    HealthStatus,
    HealthSummary,
    HierarchyNode,
    ValidationSummary,
    health_color,
    health_icon,
    utc_now,
)

logger = get_logger(__name__)

DEFAULT_DOCTRINE_VERSION = "2.0.0"
DEFAULT_SUBMODULE_MARKER = "modules"

_NUMBER_PREFIX = re.compile(r"^([0-9]+)-")


class DoctrineError(Exception):
    """Base error for registry operations."""


class HierarchyCycleError(DoctrineError):
    """Registration would make a component its own ancestor."""

    def __init__(self, component_id: str, parent_id: str) -> None:
        super().__init__(f"Parent {parent_id} of {component_id} is {component_id} or one of its descendants")
        self.component_id = component_id
        self.parent_id = parent_id


@dataclass(frozen=True)
class RegistrationIssue:
    """Why a checked registration was refused."""

    message: str
    component_id: str
    parent_id: str | None = None


def leading_number(segment: str) -> Optional[int]:
    """Number in a ``NN-name`` style segment, if any."""
    match = _NUMBER_PREFIX.match(segment)
    return int(match.group(1)) if match else None


class DoctrineRegistry:
    """
    Registry of components keyed by caller-supplied id.

    Maintains the parent/child graph (always acyclic), validates Barton
    numbers and exports compliance reports. One instance is shared per
    process or scope; every public method holds the registry lock.
    """

    def __init__(
        self,
        blueprint_id: int = BLUEPRINT_ID,
        doctrine_version: str = DEFAULT_DOCTRINE_VERSION,
        submodule_marker: str = DEFAULT_SUBMODULE_MARKER,
    ):
        self.blueprint_id = blueprint_id
        self.doctrine_version = doctrine_version
        self.submodule_marker = submodule_marker
        self.components: Dict[str, Component] = {}
        self._lock = threading.RLock()
        logger.debug("doctrine_registry_initialized", blueprint_id=blueprint_id)

    @classmethod
    def from_settings(cls, settings: Settings) -> "DoctrineRegistry":
        return cls(
            blueprint_id=settings.blueprint_id,
            doctrine_version=settings.doctrine_version,
            submodule_marker=settings.submodule_marker,
        )

    def __len__(self) -> int:
        return len(self.components)

    def __contains__(self, component_id: object) -> bool:
        return component_id in self.components

    # ------------------------------------------------------------------
    # Numbering
    # ------------------------------------------------------------------

    def generate_id(self, module: int, submodule: int, file: int) -> BartonNumber:
        """Barton number for this blueprint; range is checked by validate()."""
        return BartonNumber(
            self.blueprint_id,
            module,
            submodule,
            file,
            expected_blueprint_id=self.blueprint_id,
        )

    def generate_id_from_path(self, file_path: str) -> BartonNumber:
        """
        Derive a reproducible Barton number from a slash-delimited path.

        - module: ``NN-`` prefix of the first segment (default 1)
        - submodule: ``NN-`` prefix of the segment after the marker
          segment (default 1)
        - file: path hash bucketed into [1, 99]

        The same path always yields the same number; different paths may
        collide.
        """
        segments = [s for s in file_path.split("/") if s and s != "."]

        # An explicit 00- prefix is kept (and fails validation); only a
        # missing prefix falls back to 1
        module = 1
        if segments:
            prefix = leading_number(segments[0])
            module = 1 if prefix is None else prefix

        submodule = 1
        if self.submodule_marker in segments:
            index = segments.index(self.submodule_marker)
            if index + 1 < len(segments):
                prefix = leading_number(segments[index + 1])
                submodule = 1 if prefix is None else prefix

        return self.generate_id(module, submodule, bucket(file_path))

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_component(
        self,
        id: str,
        name: str,
        type: ComponentType | str,
        module: int,
        submodule: int,
        file: int,
        description: str = "",
        parent_id: Optional[str] = None,
    ) -> Component:
        """
        Register (or overwrite) a component.

        Re-registering an id replaces its fields but keeps its children and
        its place in iteration order. An unknown parent is logged and the
        component is registered as a root.

        Raises:
            HierarchyCycleError: If the parent is the component itself or
                one of its descendants
        """
        with self._lock:
            component_type = ComponentType(type)
            number = self.generate_id(module, submodule, file)

            parent = self.components.get(parent_id) if parent_id else None
            if parent_id and parent is None:
                logger.warning("dangling_parent", id=id, parent_id=parent_id)
                parent_id = None

            if parent_id and self._is_ancestor_or_self(id, parent_id):
                raise HierarchyCycleError(id, parent_id)

            previous = self.components.get(id)
            component = Component(
                id=id,
                name=name,
                type=component_type,
                barton_number=number,
                parent_id=parent_id,
                children=list(previous.children) if previous else [],
                health_status=number.health_status,
                last_updated=utc_now(),
                description=description,
            )

            if previous and previous.parent_id and previous.parent_id != parent_id:
                self._detach(id, previous.parent_id)

            if parent is not None and id not in parent.children:
                parent.children.append(id)

            self.components[id] = component

            logger.info(
                "component_registered",
                id=id,
                barton_number=str(number),
                health=component.health_status.value,
                overwritten=previous is not None,
            )
            return component

    def try_register(
        self,
        id: str,
        name: str,
        type: ComponentType | str,
        module: int,
        submodule: int,
        file: int,
        description: str = "",
        parent_id: Optional[str] = None,
    ) -> Result[Component, RegistrationIssue]:
        """
        Strict registration (Result pattern version).

        Refuses unknown parents and cycles instead of logging or raising.
        """
        with self._lock:
            if parent_id and parent_id not in self.components:
                return Failure(RegistrationIssue(f"Unknown parent: {parent_id}", id, parent_id))
            try:
                return Success(
                    self.register_component(
                        id, name, type, module, submodule, file, description, parent_id
                    )
                )
            except HierarchyCycleError as e:
                return Failure(RegistrationIssue(str(e), id, parent_id))

    def register_spec(self, spec: ComponentSpec) -> Component:
        """Register from a declarative spec"""
        return self.register_component(
            spec.id,
            spec.name,
            spec.type,
            spec.module,
            spec.submodule,
            spec.file,
            spec.description,
            spec.parent_id,
        )

    def register_many(self, specs: Iterable[ComponentSpec]) -> List[Component]:
        """Register specs in order (parents must come before children)"""
        with self._lock:
            return [self.register_spec(spec) for spec in specs]

    def unregister_component(self, component_id: str) -> Optional[Component]:
        """
        Remove a component. Its children become roots.

        Returns:
            The removed component, or None if unknown
        """
        with self._lock:
            component = self.components.pop(component_id, None)
            if component is None:
                return None

            if component.parent_id:
                self._detach(component_id, component.parent_id)
            for child_id in component.children:
                child = self.components.get(child_id)
                if child is not None:
                    child.parent_id = None

            logger.info("component_unregistered", id=component_id, orphans=len(component.children))
            return component

    def bootstrap(self) -> int:
        """Register the dashboard's known components; returns the registry size"""
        from .bootstrap import auto_register_known_components

        auto_register_known_components(self)
        return len(self)

    def _detach(self, component_id: str, parent_id: str) -> None:
        parent = self.components.get(parent_id)
        if parent is not None and component_id in parent.children:
            parent.children.remove(component_id)

    def _is_ancestor_or_self(self, component_id: str, start_id: str) -> bool:
        """Walk parent links upward from start_id looking for component_id."""
        current: Optional[str] = start_id
        for _ in range(len(self.components) + 1):
            if current is None:
                return False
            if current == component_id:
                return True
            node = self.components.get(current)
            current = node.parent_id if node else None
        return False

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_component(self, component_id: str) -> Optional[Component]:
        """Get component by ID"""
        return self.components.get(component_id)

    def get_component_by_barton_number(self, barton_number: str) -> Optional[Component]:
        """First component whose canonical number equals the given string"""
        with self._lock:
            for component in self.components.values():
                if str(component.barton_number) == barton_number:
                    return component
        return None

    def get_all_components(self) -> List[Component]:
        with self._lock:
            return list(self.components.values())

    def get_components_by_type(self, type: ComponentType | str) -> List[Component]:
        component_type = ComponentType(type)
        with self._lock:
            return [c for c in self.components.values() if c.type == component_type]

    def get_hierarchy(self) -> Dict[str, HierarchyNode]:
        """
        Nested view of the parent/child graph.

        Returns:
            Root id -> node, where roots are components without a parent
        """
        with self._lock:
            return {
                component.id: self._build_node(component)
                for component in self.components.values()
                if not component.parent_id
            }

    def _build_node(self, component: Component) -> HierarchyNode:
        return HierarchyNode(
            id=component.id,
            name=component.name,
            type=component.type,
            barton_number=str(component.barton_number),
            health_status=component.health_status,
            description=component.description,
            children=[
                self._build_node(self.components[child_id])
                for child_id in component.children
                if child_id in self.components
            ],
        )

    # ------------------------------------------------------------------
    # Health and validation
    # ------------------------------------------------------------------

    def update_component_health(self, component_id: str, status: HealthStatus | str) -> bool:
        """
        Set a component's health.

        Returns:
            False if the id is unknown (nothing changes)
        """
        health = HealthStatus(status)
        with self._lock:
            component = self.components.get(component_id)
            if component is None:
                return False
            component.health_status = health
            component.last_updated = utc_now()

        logger.info("health_updated", id=component_id, health=health.value)
        return True

    def validate_all_components(self) -> ValidationSummary:
        """Count valid and invalid Barton numbers across the registry"""
        summary = ValidationSummary()
        with self._lock:
            for component in self.components.values():
                if component.barton_number.validate():
                    summary.valid += 1
                else:
                    summary.invalid += 1
                    summary.errors.append(
                        f"Invalid Barton number for {component.name}: {component.barton_number}"
                    )

        logger.info("validation_complete", valid=summary.valid, invalid=summary.invalid)
        return summary

    def get_health_color(self, status: HealthStatus | str) -> str:
        return health_color(status)

    def get_health_icon(self, status: HealthStatus | str) -> str:
        return health_icon(status)

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def export_compliance_report(self) -> ComplianceReport:
        """Snapshot of validation, health counts and every component"""
        with self._lock:
            components = self.get_all_components()
            validation = self.validate_all_components()
            counts = Counter(c.health_status for c in components)
            records = [
                ComponentRecord(
                    id=c.id,
                    name=c.name,
                    type=c.type,
                    canonical_string=str(c.barton_number),
                    health_status=c.health_status,
                    last_updated=c.last_updated,
                    description=c.description,
                )
                for c in components
            ]
            fingerprint = hash_fields(
                *sorted(f"{r.id}|{r.canonical_string}|{r.health_status.value}" for r in records)
            )

        return ComplianceReport(
            doctrine_version=self.doctrine_version,
            blueprint_id=self.blueprint_id,
            fingerprint=fingerprint,
            total_components=len(components),
            validation=validation,
            health_summary=HealthSummary(
                green=counts[HealthStatus.GREEN],
                yellow=counts[HealthStatus.YELLOW],
                red=counts[HealthStatus.RED],
            ),
            components=records,
        )

    def get_stats(self) -> Dict[str, Any]:
        """Get registry statistics"""
        with self._lock:
            components = list(self.components.values())

        return {
            "total_components": len(components),
            "roots": sum(1 for c in components if not c.parent_id),
            "types": dict(Counter(c.type.value for c in components)),
            "health": dict(Counter(c.health_status.value for c in components)),
        }
