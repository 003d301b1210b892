# pure_boot/systems/__init__.py

from .base import GlobalSystem, SystemRegistry
from .commandline import ArgumentIdentifier, CommandLineSystem
from .logger import LoggerSystem

__all__ = [
    "GlobalSystem",
    "SystemRegistry",
    "ArgumentIdentifier",
    "CommandLineSystem",
    "LoggerSystem",
]
