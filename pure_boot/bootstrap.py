# pure_boot/bootstrap.py

import logging
from typing import Callable, Optional, Sequence

from pure_boot.config.models import BootConfig
from pure_boot.core import BootstrapContext
from pure_boot.systems.base import SystemRegistry
from pure_boot.systems.commandline import CommandLineSystem
from pure_boot.systems.logger import LoggerSystem
from pure_boot.utils.arguments import populate_arguments

LOG = logging.getLogger(__name__)


def default_registry(context: BootstrapContext) -> SystemRegistry:
    """The command-line system first, then the logger that consumes its flags."""
    registry = SystemRegistry()
    registry.register(CommandLineSystem(context))
    registry.register(LoggerSystem(context))
    return registry


def bootstrap(
    argv: Sequence[str],
    config: Optional[BootConfig] = None,
    registry_factory: Callable[[BootstrapContext], SystemRegistry] = default_registry,
) -> BootstrapContext:
    """
    Captures `argv` into a fresh context and initializes every global system.

    Errors from capture or from any system propagate unchanged.
    """
    context = BootstrapContext(config=config or BootConfig())
    populate_arguments(len(argv), argv, context.arguments)

    registry = registry_factory(context)
    registry.initialize_all()

    LOG.debug(f"Bootstrap complete: {list(registry.initialized)}")
    return context
