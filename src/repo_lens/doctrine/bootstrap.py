"""Known dashboard components and their Barton numbers."""

from typing import TYPE_CHECKING, List

from ..core.logging_config import get_logger
from .types import ComponentSpec, ComponentType

if TYPE_CHECKING:
    from .registry import DoctrineRegistry

logger = get_logger(__name__)


def _spec(id, name, type, module, submodule, file, description, parent_id=None) -> ComponentSpec:
    return ComponentSpec(
        id=id,
        name=name,
        type=type,
        module=module,
        submodule=submodule,
        file=file,
        description=description,
        parent_id=parent_id,
    )


# Parents are listed before their children.
# orpt-system and enhanced-barton carry submodule 0 and report as invalid.
KNOWN_COMPONENTS: List[ComponentSpec] = [
    # Modules
    _spec("github-index", "GitHub Repository Index", ComponentType.MODULE, 1, 1, 1,
          "Main GitHub repository listing and search functionality"),
    _spec("repo-overview", "Repository Overview", ComponentType.MODULE, 2, 1, 1,
          "30,000-foot repository overview with metadata"),
    _spec("visual-architecture", "Visual Architecture Map", ComponentType.MODULE, 3, 1, 1,
          "Clickable, color-coded visual diagrams"),
    _spec("module-detail", "Module Detail View", ComponentType.MODULE, 4, 1, 1,
          "Detailed module metadata and file explorer"),
    _spec("file-detail", "File Detail View", ComponentType.MODULE, 5, 1, 1,
          "File content with syntax highlighting and ORPT compliance"),
    _spec("error-log", "Error Log & Diagnostic View", ComponentType.MODULE, 6, 1, 1,
          "Centralized error monitoring and diagnostic tracking"),
    _spec("orpt-cleanups", "ORPT + Barton Doctrine Cleanups", ComponentType.MODULE, 7, 1, 1,
          "Universal color-coding, automated page generation, schema validation"),
    # Pages and files
    _spec("github-index-page", "GitHub Index Page", ComponentType.PAGE, 1, 1, 1,
          "Main page component for GitHub repository index", "github-index"),
    _spec("github-api-route", "GitHub API Route", ComponentType.FILE, 1, 1, 2,
          "GitHub API integration service", "github-index"),
    _spec("orpt-system", "ORPT System", ComponentType.FILE, 1, 0, 1,
          "ORPT system utilities and types", "github-index"),
    _spec("enhanced-barton", "Enhanced Barton System", ComponentType.FILE, 1, 0, 2,
          "Enhanced Barton doctrine system", "github-index"),
    # UI visuals
    _spec("repo-card", "Repository Card", ComponentType.UI_VISUAL, 1, 1, 3,
          "Individual repository display component", "github-index-page"),
    _spec("search-bar", "Search Bar", ComponentType.UI_VISUAL, 1, 1, 4,
          "Search and filter interface component", "github-index-page"),
    # Troubleshooting logs
    _spec("github-auth-error", "GitHub Auth Error", ComponentType.TROUBLESHOOTING, 1, 1, 5,
          "GitHub API authentication error troubleshooting", "github-index"),
    _spec("rate-limit-error", "Rate Limit Error", ComponentType.TROUBLESHOOTING, 1, 1, 6,
          "API rate limiting error troubleshooting", "github-index"),
    # Error signatures
    _spec("GITHUB_AUTH_FAILED", "GitHub Auth Failed", ComponentType.ERROR_SIGNATURE, 1, 1, 7,
          "GitHub API authentication failure signature", "github-index"),
    _spec("RATE_LIMIT_TIMEOUT", "Rate Limit Timeout", ComponentType.ERROR_SIGNATURE, 1, 1, 8,
          "API rate limiting timeout signature", "github-index"),
]


def auto_register_known_components(registry: "DoctrineRegistry") -> None:
    """Register every known component. Safe to call repeatedly."""
    registry.register_many(KNOWN_COMPONENTS)
    logger.info("bootstrap_complete", components=len(KNOWN_COMPONENTS), total=len(registry))
