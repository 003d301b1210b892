# pure_boot/systems/logger.py

import logging
from typing import Optional

from pure_boot.core import BootstrapContext
from pure_boot.systems.commandline import ArgumentIdentifier
from pure_boot.utils.exceptions import FlagsNotParsedError, PreconditionViolationError
from pure_boot.utils.logger import RichAppLogger, initialize_app_logger, verbosity_to_level


class LoggerSystem:
    """Configures the application logger from the parsed logger flags."""
    name = "logger"
    requires = ("commandline",)

    def __init__(self, context: BootstrapContext, app_name: str = "pure_boot"):
        self.context = context
        self.app_name = app_name
        self.app_logger: Optional[RichAppLogger] = None

    def initialize(self) -> None:
        if self.app_logger is not None:
            raise PreconditionViolationError("Logger system is already initialized")

        flags = self.context.flags
        if not flags.parsed:
            raise FlagsNotParsedError("The command-line system must be initialized before the logger system")

        verbosity = flags.get(ArgumentIdentifier.logger_verbosity)
        verbose = flags.get(ArgumentIdentifier.logger_verbose)
        enable_file = flags.get(ArgumentIdentifier.logger_enable_file)
        append_file = flags.get(ArgumentIdentifier.logger_append_file)

        settings = self.context.config.logger
        self.app_logger = initialize_app_logger(
            app_name=self.app_name,
            log_directory=settings.log_directory,
            log_file_name=settings.log_file_name,
            file_log_level=logging.DEBUG,
            console_log_level=verbosity_to_level(verbosity, verbose),
            enable_file=enable_file,
            append_file=append_file,
        )
        self.context.app_logger = self.app_logger

        self.app_logger.debug(
            f"Logger configured: verbosity={verbosity}, verbose={verbose}, "
            f"file={self.app_logger.log_file or 'disabled'}, append={append_file}"
        )
