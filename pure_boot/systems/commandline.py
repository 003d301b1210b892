# pure_boot/systems/commandline.py

import enum
import logging
from typing import Tuple

from pure_boot.core import BootstrapContext
from pure_boot.utils.exceptions import ArgumentsNotPopulatedError, PreconditionViolationError
from pure_boot.utils.flags import FlagDescriptor, FlagKind

LOG = logging.getLogger(__name__)


class ArgumentIdentifier(enum.Enum):
    """Recognized command-line flags. Members are the keys used to query the FlagHandler."""
    logger_verbosity = enum.auto()
    logger_verbose = enum.auto()
    logger_enable_file = enum.auto()
    logger_append_file = enum.auto()


def flag_descriptors(context: BootstrapContext) -> Tuple[FlagDescriptor, ...]:
    """One descriptor per ArgumentIdentifier, defaults taken from the logger configuration."""
    defaults = context.config.logger
    return (
        FlagDescriptor(
            ArgumentIdentifier.logger_verbosity, "--logger-verbosity", FlagKind.INTEGER,
            default=defaults.verbosity,
            help="Console verbosity, 0 (critical) to 4 (debug).",
        ),
        FlagDescriptor(
            ArgumentIdentifier.logger_verbose, "--logger-verbose", FlagKind.SWITCH,
            default=defaults.verbose,
            help="Show debug output on the console.",
        ),
        FlagDescriptor(
            ArgumentIdentifier.logger_enable_file, "--logger-enable-file", FlagKind.SWITCH,
            default=defaults.enable_file,
            help="Also write the log to a file.",
        ),
        FlagDescriptor(
            ArgumentIdentifier.logger_append_file, "--logger-append-file", FlagKind.SWITCH,
            default=defaults.append_file,
            help="Append to the log file instead of truncating it.",
        ),
    )


class CommandLineSystem:
    """
    Bridges the captured startup arguments and the FlagHandler.

    initialize() registers every ArgumentIdentifier and parses the argument
    vector. Parse errors propagate to the caller.
    """
    name = "commandline"

    def __init__(self, context: BootstrapContext):
        self.context = context
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        if self._initialized:
            raise PreconditionViolationError("Command-line system is already initialized")

        arguments = self.context.arguments
        if not arguments.populated:
            raise ArgumentsNotPopulatedError(
                "Startup arguments must be captured before the command-line system is initialized"
            )

        flags = self.context.flags
        for descriptor in flag_descriptors(self.context):
            flags.register(descriptor)

        flags.parse(arguments.tokens)
        self._initialized = True

        for identifier in ArgumentIdentifier:
            LOG.debug(f"{identifier.name} = {flags.get(identifier)!r}")
