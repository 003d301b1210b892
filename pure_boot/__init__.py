# pure_boot/__init__.py

# Utility imports
from .utils.exceptions import PureBootError
from .utils.exceptions import PreconditionViolationError
from .utils.exceptions import FlagParseError

# Import *
__all__ = [
    "PureBootError",
    "PreconditionViolationError",
    "FlagParseError",
]

# Versioning
__version__ = "0.1.0"
