import logging
import re
from unittest.mock import patch

import pytest
from rich.logging import RichHandler
from rich.text import Text

from pure_boot.config.models import BootConfig, LoggerConfig
from pure_boot.core import BootstrapContext
from pure_boot.systems.commandline import CommandLineSystem
from pure_boot.systems.logger import LoggerSystem
from pure_boot.utils.arguments import populate_arguments
from pure_boot.utils.exceptions import FlagsNotParsedError, PreconditionViolationError
from pure_boot.utils.logger import (
    SECTION_LEVEL_NUM,
    AppLogger,
    RichAppLogger,
    SectionFilter,
    initialize_app_logger,
    verbosity_to_level,
)

# --- Helper Function for Stripping ANSI ---

def strip_ansi(text):
    """Strips all ANSI escape codes from a string."""
    return re.sub(r'\x1b\[.*?m', '', text)

# --- Fixtures for Testing ---

@pytest.fixture(scope="function")
def cleanup_logging_state():
    """Fixture to reset the logging state before and after each test."""
    logging.setLoggerClass(AppLogger)

    for logger_name in list(logging.root.manager.loggerDict.keys()):
        logger = logging.getLogger(logger_name)
        logger.handlers = []

    yield

    for logger_name in list(logging.root.manager.loggerDict.keys()):
        logger = logging.getLogger(logger_name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers = []


@pytest.fixture(scope="function")
def rich_logger(tmp_path, cleanup_logging_state):
    """
    Initializes RichAppLogger with file output in a temporary log directory,
    and returns the wrapper instance and directory path.
    """
    log_dir = tmp_path / "logs"

    logger_wrapper = initialize_app_logger(
        app_name="TestApp",
        log_directory=str(log_dir),
        log_file_name="test.log",
        file_log_level=logging.DEBUG
    )

    yield logger_wrapper, log_dir


def booted_logger_system(argv, tmp_path, app_name="TestBoot"):
    """Runs the command-line and logger systems against `argv`."""
    config = BootConfig(logger=LoggerConfig(log_directory=str(tmp_path / "logs"), log_file_name="boot.log"))
    context = BootstrapContext(config=config)
    populate_arguments(len(argv), argv, context.arguments)
    CommandLineSystem(context).initialize()

    system = LoggerSystem(context, app_name=app_name)
    system.initialize()
    return context, system

# --- Helper Functions ---

def app_handlers(logger):
    """Handlers attached by initialize_app_logger, ignoring any added by the test runner."""
    return [h for h in logger.handlers if isinstance(h, (logging.FileHandler, RichHandler))]


def get_file_content(log_dir, filename="test.log"):
    """Reads the content of the log file."""
    log_path = log_dir / filename
    if log_path.exists():
        with open(log_path, 'r', encoding='utf-8') as f:
            return f.read()
    return ""

# ----------------------------------------------------------------------
# --- verbosity_to_level ---
# ----------------------------------------------------------------------

@pytest.mark.parametrize("verbosity, expected", [
    (-3, logging.CRITICAL),
    (0, logging.CRITICAL),
    (1, logging.ERROR),
    (2, logging.WARNING),
    (3, logging.INFO),
    (4, logging.DEBUG),
    (10, logging.DEBUG),
])
def test_verbosity_to_level(verbosity, expected):
    assert verbosity_to_level(verbosity) == expected


def test_verbose_forces_debug():
    assert verbosity_to_level(0, verbose=True) == logging.DEBUG

# ----------------------------------------------------------------------
# --- initialize_app_logger ---
# ----------------------------------------------------------------------

def test_initialization_and_configuration(rich_logger):
    """Tests if initialization correctly sets up the logger and handlers."""
    logger_wrapper, log_dir = rich_logger

    assert isinstance(logger_wrapper, RichAppLogger)
    assert isinstance(logger_wrapper.logger, AppLogger)
    assert log_dir.is_dir()

    handlers = app_handlers(logger_wrapper.logger)
    assert len(handlers) == 2
    assert any(isinstance(h, logging.FileHandler) for h in handlers)
    assert any(isinstance(h, RichHandler) for h in handlers)
    assert logger_wrapper.log_file.endswith("test.log")
    assert logger_wrapper.console_level == logging.INFO


def test_file_disabled(tmp_path, cleanup_logging_state):
    """Without enable_file only the console handler is attached and no directory is made."""
    log_dir = tmp_path / "nofile"
    logger_wrapper = initialize_app_logger("NoFileApp", log_directory=str(log_dir), enable_file=False)

    assert len(app_handlers(logger_wrapper.logger)) == 1
    assert logger_wrapper.log_file is None
    assert not log_dir.exists()


def test_standard_logging_to_file(rich_logger):
    """Tests standard log levels (INFO, ERROR) successfully write to the file."""
    logger_wrapper, log_dir = rich_logger

    logger_wrapper.info("Standard information message.")
    logger_wrapper.error("An application error.")
    logger_wrapper.debug("Debug goes to the file too.")

    file_content = get_file_content(log_dir)
    assert "Standard information message." in file_content
    assert "An application error." in file_content
    assert "Debug goes to the file too." in file_content


@pytest.mark.parametrize("append_file, keeps_old", [(True, True), (False, False)])
def test_append_or_truncate(tmp_path, cleanup_logging_state, append_file, keeps_old):
    log_dir = tmp_path / "logs"
    log_dir.mkdir()
    (log_dir / "test.log").write_text("previous run\n", encoding="utf-8")

    logger_wrapper = initialize_app_logger(
        "AppendApp", log_directory=str(log_dir), log_file_name="test.log", append_file=append_file
    )
    logger_wrapper.info("current run")
    logger_wrapper.close()

    file_content = get_file_content(log_dir)
    assert "current run" in file_content
    assert ("previous run" in file_content) is keeps_old


def test_reinitialization_replaces_handlers(rich_logger, tmp_path):
    logger_wrapper, log_dir = rich_logger
    again = initialize_app_logger("TestApp", log_directory=str(log_dir), log_file_name="test.log")
    assert again.logger is logger_wrapper.logger
    assert len(app_handlers(again.logger)) == 2


def test_exception_method(rich_logger):
    """Tests the explicit exception() method for logging and TUI traceback."""
    logger_wrapper, log_dir = rich_logger

    with patch.object(logger_wrapper.console, 'print') as mock_console_print, \
         patch.object(logger_wrapper.console, 'print_exception') as mock_print_exception:

        try:
            raise RuntimeError("External system failure")
        except RuntimeError:
            logger_wrapper.exception("Caught an unhandled error.")

        mock_console_print.assert_any_call(
            "[bold red]FATAL ERROR: Caught an unhandled error.[/bold red]"
        )
        mock_print_exception.assert_called_once_with(show_locals=False)

    file_content = get_file_content(log_dir)
    assert "ERROR" in file_content
    assert "Caught an unhandled error." in file_content
    assert "RuntimeError: External system failure" in file_content


def test_section_logging(rich_logger):
    """Tests section() writes to the file and prints the TUI header."""
    logger_wrapper, log_dir = rich_logger
    section_message = "Starting a new phase."

    with patch.object(logger_wrapper.console, 'print') as mock_console_print:
        logger_wrapper.section(section_message)

    file_content = get_file_content(log_dir)
    assert "SECTION" in file_content
    assert "SECTION: Starting a new phase." in file_content

    headers = [
        strip_ansi(str(c.args[0])) for c in mock_console_print.call_args_list
        if c.args and isinstance(c.args[0], Text)
    ]
    assert headers == [f"SECTION: {section_message}"]


def test_section_records_are_kept_off_the_console(rich_logger):
    """The styled header replaces the SECTION record on the console; other levels still reach it."""
    logger_wrapper, _ = rich_logger
    console_handler = next(h for h in logger_wrapper.logger.handlers if isinstance(h, RichHandler))

    def record(level):
        return logging.LogRecord("TestApp", level, __file__, 1, "message", None, None)

    assert any(isinstance(f, SectionFilter) for f in console_handler.filters)
    assert not console_handler.filter(record(SECTION_LEVEL_NUM))
    assert console_handler.filter(record(logging.INFO))

    with patch.object(console_handler, "emit") as mock_emit:
        logger_wrapper.section("Only once.")
        logger_wrapper.info("Regular message.")

    emitted = [c.args[0].getMessage() for c in mock_emit.call_args_list]
    assert emitted == ["Regular message."]

# ----------------------------------------------------------------------
# --- LoggerSystem ---
# ----------------------------------------------------------------------

def test_logger_system_uses_defaults(tmp_path, cleanup_logging_state):
    context, system = booted_logger_system(["prog"], tmp_path)

    assert context.app_logger is system.app_logger
    assert system.app_logger.console_level == logging.INFO
    assert system.app_logger.log_file is None


def test_logger_system_follows_the_flags(tmp_path, cleanup_logging_state):
    context, system = booted_logger_system(
        ["prog", "--logger-verbosity", "1", "--logger-enable-file"], tmp_path
    )

    assert system.app_logger.console_level == logging.ERROR
    assert system.app_logger.log_file.endswith("boot.log")

    system.app_logger.info("written to file")
    assert "written to file" in get_file_content(tmp_path / "logs", "boot.log")


def test_logger_system_verbose_wins(tmp_path, cleanup_logging_state):
    _, system = booted_logger_system(["prog", "--logger-verbosity", "0", "--logger-verbose"], tmp_path)
    assert system.app_logger.console_level == logging.DEBUG


def test_logger_system_requires_parsed_flags(tmp_path, cleanup_logging_state):
    system = LoggerSystem(BootstrapContext(), app_name="Unparsed")
    with pytest.raises(FlagsNotParsedError):
        system.initialize()


def test_logger_system_initializes_once(tmp_path, cleanup_logging_state):
    _, system = booted_logger_system(["prog"], tmp_path)
    with pytest.raises(PreconditionViolationError):
        system.initialize()
