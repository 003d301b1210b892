# pure_boot/utils/exceptions.py


class PureBootError(Exception):
    """Base exception for every error raised during bootstrap."""


# --- Precondition violations (programmer errors, not recoverable) ---

class PreconditionViolationError(PureBootError):
    """Raised when an operation is called out of its lifecycle order."""


class ArgumentsAlreadyPopulatedError(PreconditionViolationError):
    """Raised when the raw argument vector is captured a second time."""
    def __init__(self, message: str = "Argument vector has already been populated"):
        super().__init__(message)


class ArgumentsNotPopulatedError(PreconditionViolationError):
    """Raised when a consumer needs the argument vector before it was captured."""
    def __init__(self, message: str = "Argument vector has not been populated"):
        super().__init__(message)


class FlagsNotParsedError(PreconditionViolationError):
    """Raised when a flag value is requested before the arguments were parsed."""
    def __init__(self, message: str = "Flags have not been parsed yet"):
        super().__init__(message)


# --- Flag handling ---

class FlagRegistrationError(PureBootError):
    """Raised for a duplicate flag identifier or option name."""


class UnknownFlagError(PureBootError, KeyError):
    """Raised when a flag identifier was never registered."""
    def __init__(self, identifier):
        self.identifier = identifier
        super().__init__(f"Unknown flag identifier: {identifier!r}")

    def __str__(self):
        return self.args[0]


class FlagParseError(PureBootError):
    """Raised when a supplied argument does not fit the shape of its flag."""
    def __init__(self, option: str, value=None, message: str = "Invalid flag value"):
        self.option = option
        self.value = value
        self.message = message
        detail = f"Option: '{self.option}'"
        if value is not None:
            detail += f", Value: '{self.value}'"
        super().__init__(f"{self.message} ({detail})")


# --- Global systems ---

class SystemRegistrationError(PureBootError):
    """Raised when a global system cannot be added to the registry."""


class SystemInitializationError(PureBootError):
    """Raised when a global system fails inside initialize()."""
    def __init__(self, system_name: str, message: str = "Global system failed to initialize"):
        self.system_name = system_name
        super().__init__(f"{message}: System='{system_name}'")


# --- Configuration ---

class ConfigurationError(PureBootError, ValueError):
    """Raised when the configuration file cannot be read or validated."""
