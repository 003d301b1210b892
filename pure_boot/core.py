# core.py
from dataclasses import dataclass, field
from typing import Optional

from pure_boot.config.models import BootConfig
from pure_boot.utils.arguments import RawArgumentVector
from pure_boot.utils.flags import FlagHandler
from pure_boot.utils.logger import RichAppLogger


@dataclass
class BootstrapContext:
    """
    Process-wide state shared by the global systems.

    Built once at startup and injected into every system; each part is
    written once during bootstrap and only read afterwards.
    """
    config: BootConfig = field(default_factory=BootConfig)
    arguments: RawArgumentVector = field(default_factory=RawArgumentVector)
    flags: FlagHandler = field(default_factory=FlagHandler)
    app_logger: Optional[RichAppLogger] = None

