# pure_boot/systems/base.py

import logging
from typing import Dict, Iterator, List, Optional, Protocol, Tuple, runtime_checkable

from pure_boot.utils.exceptions import (
    SystemInitializationError,
    SystemRegistrationError,
)

LOG = logging.getLogger(__name__)


@runtime_checkable
class GlobalSystem(Protocol):
    """
    A subsystem with a single-shot, process-wide initialization.

    Any object with a `name` and an `initialize()` method qualifies. A system may
    also declare `requires`, the names of systems that must come before it.
    """
    name: str

    def initialize(self) -> None:
        ...


class SystemRegistry:
    """
    Ordered registry of global systems.

    Registration order is initialization order. Every system is initialized at
    most once; the first failure stops the run.
    """

    def __init__(self):
        self._systems: List[GlobalSystem] = []
        self._by_name: Dict[str, GlobalSystem] = {}
        self._initialized: List[str] = []
        self._failures: Dict[str, SystemInitializationError] = {}

    def register(self, system: GlobalSystem) -> GlobalSystem:
        if not isinstance(system, GlobalSystem):
            raise TypeError(f"{type(system).__name__} does not implement the GlobalSystem interface")

        name = system.name
        if not name:
            raise SystemRegistrationError("Global system must have a non-empty name")
        if name in self._by_name:
            raise SystemRegistrationError(f"Global system already registered: '{name}'")

        missing = [dep for dep in getattr(system, "requires", ()) if dep not in self._by_name]
        if missing:
            raise SystemRegistrationError(
                f"Global system '{name}' requires {missing} to be registered first"
            )

        self._systems.append(system)
        self._by_name[name] = system
        LOG.debug(f"Registered global system '{name}' at position {len(self._systems)}")
        return system

    def initialize_all(self) -> None:
        """
        Initializes every registered system that has not run yet, in order.

        A system that failed is never retried: a repeated call re-raises the
        error recorded for it.
        """
        for system in self._systems:
            if system.name in self._initialized:
                continue
            if system.name in self._failures:
                raise self._failures[system.name]

            LOG.debug(f"Initializing global system '{system.name}'")
            try:
                system.initialize()
            except Exception as e:
                LOG.debug(f"Global system '{system.name}' failed to initialize: {e}")
                failure = SystemInitializationError(system.name)
                self._failures[system.name] = failure
                raise failure from e

            self._initialized.append(system.name)
            LOG.info(f"Global system '{system.name}' initialized")

    def get(self, name: str) -> Optional[GlobalSystem]:
        return self._by_name.get(name)

    def is_initialized(self, name: str) -> bool:
        return name in self._initialized

    def failed(self, name: str) -> bool:
        return name in self._failures

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(system.name for system in self._systems)

    @property
    def initialized(self) -> Tuple[str, ...]:
        return tuple(self._initialized)

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[GlobalSystem]:
        return iter(self._systems)

    def __len__(self) -> int:
        return len(self._systems)
