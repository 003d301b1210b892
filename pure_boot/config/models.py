# pure_boot/config/models.py

import tomlkit
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pathlib import Path

from pure_boot.utils.exceptions import ConfigurationError


class LoggerConfig(BaseModel):
    """Defaults for the logger flags and the location of the log file."""
    model_config = ConfigDict(extra="forbid")

    verbosity: int = Field(3, ge=0, description="Console verbosity, 0 (critical) to 4 (debug).")
    verbose: bool = False
    enable_file: bool = False
    append_file: bool = False

    log_directory: str = Field("logs", min_length=1)
    log_file_name: str = Field("application.log", min_length=1)


class BootConfig(BaseModel):
    """The top-level configuration model representing the whole TOML file."""
    model_config = ConfigDict(extra="forbid")

    logger: LoggerConfig = Field(default_factory=LoggerConfig)

    @classmethod
    def load_config_from_file(cls, path: Path) -> 'BootConfig':
        """Loads and validates a TOML file against the Pydantic schema."""
        try:
            content = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Error reading configuration file: {e}") from e

        try:
            data = tomlkit.parse(content).unwrap()
        except Exception as e:
            raise ConfigurationError(f"Invalid TOML format in file: {e}") from e

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e
