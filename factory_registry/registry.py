from __future__ import annotations

import importlib
import logging
from typing import Any, Callable, Dict, Iterator, Mapping, Tuple

from contracts.errors import InstantiationError, TypeNotFoundError

logger = logging.getLogger(__name__)

Factory = Callable[[], Any]


def _resolve_qualified_name(qualified_name: str) -> Any:
    name = str(qualified_name).strip()
    module_name, _, attr = name.rpartition(".")
    if not module_name or not attr:
        raise TypeNotFoundError(f"not a fully qualified name: {name!r}")
    try:
        module = importlib.import_module(module_name)
    except Exception as exc:
        raise TypeNotFoundError(f"cannot find the defined class: {name}") from exc
    try:
        return getattr(module, attr)
    except AttributeError as exc:
        raise TypeNotFoundError(f"cannot find the defined class: {name}") from exc


class FactoryRegistry:
    """
    Maps configuration keys to zero-argument factories.

    Resolution happens when an entry is registered (typically at startup);
    ``instantiate`` only looks up the key and calls the factory, building a
    new object on every call.
    """

    def __init__(self, factories: Mapping[str, Factory] | None = None) -> None:
        self._factories: Dict[str, Factory] = {}
        for key, factory in (factories or {}).items():
            self.register(key, factory)

    @classmethod
    def from_qualified_names(cls, names: Mapping[str, str]) -> "FactoryRegistry":
        registry = cls()
        for key, qualified_name in names.items():
            target = _resolve_qualified_name(qualified_name)
            if not callable(target):
                raise InstantiationError(f"defined class {qualified_name} cannot be instantiated: not callable")
            registry.register(key, target)
        return registry

    def register(self, key: str, factory: Factory) -> "FactoryRegistry":
        k = str(key).strip() if key is not None else ""
        if not k:
            raise ValueError("factory key must be a non-empty string")
        if not callable(factory):
            raise TypeError(f"factory for {k!r} is not callable")
        self._factories[k] = factory
        logger.debug("registered factory %r -> %r", k, factory)
        return self

    def keys(self) -> Tuple[str, ...]:
        return tuple(sorted(self._factories))

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.strip() in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._factories)

    def instantiate(self, key: str) -> Any:
        factory = self._factories.get(str(key).strip())
        if factory is None:
            raise TypeNotFoundError(f"no implementation registered for {key!r}")
        try:
            return factory()
        except Exception as exc:
            raise InstantiationError(f"defined class for {key!r} cannot be instantiated: {exc}") from exc


def instantiate(registry: FactoryRegistry, key: str) -> Any:
    return registry.instantiate(key)
