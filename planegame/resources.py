"""A keyed store of loaded resources."""

from __future__ import annotations

from typing import Any, Callable, Dict, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
R = TypeVar("R")


class ResourceLoadError(RuntimeError):
    """Raised when a resource file cannot be loaded."""


class ResourceHolder(Generic[K, R]):
    """Loads resources through a loader function and keeps them by identifier."""

    def __init__(self, loader: Callable[..., R]) -> None:
        self._loader = loader
        self._resources: Dict[K, R] = {}

    def load(self, identifier: K, filename: str, *args: Any) -> R:
        """Load filename with the loader and store the result under identifier."""
        message = f"ResourceHolder.load - Failed to load {filename}"
        try:
            resource = self._loader(filename, *args)
        except Exception as exc:
            raise ResourceLoadError(message) from exc
        if resource is None or resource is False:
            raise ResourceLoadError(message)
        if identifier in self._resources:
            raise ValueError(f"ResourceHolder.load - ID {identifier!r} was already loaded")
        self._resources[identifier] = resource
        return resource

    def get(self, identifier: K) -> R:
        try:
            return self._resources[identifier]
        except KeyError:
            raise KeyError(f"ResourceHolder.get - ID {identifier!r} was not found") from None

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._resources

    def __len__(self) -> int:
        return len(self._resources)