"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from .config import Settings, get_settings
from ..doctrine.registry import DoctrineRegistry


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        """Provide explicit settings, else the cached environment settings."""
        return self.settings or get_settings()

    @singleton
    @provider
    def provide_registry(self, settings: Settings) -> DoctrineRegistry:
        """Provide the registry shared by everything resolved from this container."""
        return DoctrineRegistry.from_settings(settings)


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings)])
