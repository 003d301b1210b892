# pure_boot/utils/flags.py

import enum
import logging
from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Optional, Sequence, Tuple

import click
from click.core import ParameterSource

from pure_boot.utils.exceptions import (
    FlagParseError,
    FlagRegistrationError,
    FlagsNotParsedError,
    PreconditionViolationError,
    UnknownFlagError,
)

LOG = logging.getLogger(__name__)


class FlagKind(enum.Enum):
    """Shape of the value a flag expects."""
    INTEGER = "integer"   # --flag N
    SWITCH = "switch"     # presence flag, True when given


@dataclass(frozen=True)
class FlagDescriptor:
    """Static description of one recognized command-line flag."""
    identifier: Hashable
    option: str
    kind: FlagKind
    default: Any = None
    help: str = ""

    @property
    def param_name(self) -> str:
        return self.option.lstrip("-").replace("-", "_")


class FlagHandler:
    """
    Registry of flag descriptors and storage for their parsed values.

    Parsing is delegated to click: the registered descriptors are turned into a
    click.Command that is parsed once against the startup tokens. Tokens that do
    not belong to a registered flag are kept in extra_arguments.
    """

    def __init__(self, prog_name: str = "pure-boot"):
        self._prog_name = prog_name
        self._descriptors: Dict[Hashable, FlagDescriptor] = {}
        self._values: Dict[Hashable, Any] = {}
        self._sources: Dict[Hashable, ParameterSource] = {}
        self._extra: Tuple[str, ...] = ()
        self._parsed = False

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register(self, descriptor: FlagDescriptor) -> None:
        if self._parsed:
            raise PreconditionViolationError(
                f"Cannot register '{descriptor.option}' after the arguments were parsed"
            )
        if not descriptor.option.startswith("--"):
            raise FlagRegistrationError(f"Option must start with '--': '{descriptor.option}'")
        if descriptor.identifier in self._descriptors:
            raise FlagRegistrationError(f"Flag identifier already registered: {descriptor.identifier!r}")
        if any(d.option == descriptor.option for d in self._descriptors.values()):
            raise FlagRegistrationError(f"Option already registered: '{descriptor.option}'")

        self._descriptors[descriptor.identifier] = descriptor
        LOG.debug(f"Registered flag {descriptor.option} ({descriptor.kind.value}, default={descriptor.default!r})")

    @property
    def descriptors(self) -> List[FlagDescriptor]:
        return list(self._descriptors.values())

    # -------------------------------------------------------------------------
    # Parsing
    # -------------------------------------------------------------------------

    def _build_command(self) -> click.Command:
        params = []
        for descriptor in self._descriptors.values():
            if descriptor.kind is FlagKind.SWITCH:
                params.append(click.Option(
                    [descriptor.option, descriptor.param_name],
                    is_flag=True,
                    default=bool(descriptor.default),
                    help=descriptor.help,
                ))
            else:
                params.append(click.Option(
                    [descriptor.option, descriptor.param_name],
                    type=click.INT,
                    default=descriptor.default,
                    help=descriptor.help,
                ))

        return click.Command(
            name=self._prog_name,
            params=params,
            add_help_option=False,
            context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
        )

    def parse(self, tokens: Sequence[str]) -> Dict[Hashable, Any]:
        """
        Parses `tokens` (argv without the program name) into flag values.

        Raises FlagParseError for a malformed value of a registered flag.
        """
        if self._parsed:
            raise PreconditionViolationError("Flags have already been parsed")

        command = self._build_command()
        args = list(tokens)
        try:
            # make_context consumes the list it is given
            ctx = command.make_context(self._prog_name, list(args))
        except click.BadParameter as e:
            option = e.param.opts[0] if e.param is not None else (e.param_hint or "?")
            LOG.debug(f"Rejected value for {option}: {e.format_message()}")
            raise FlagParseError(option, _find_value(args, option), e.format_message()) from e
        except click.BadOptionUsage as e:
            LOG.debug(f"Rejected usage of {e.option_name}: {e.format_message()}")
            raise FlagParseError(e.option_name, _find_value(args, e.option_name), e.format_message()) from e
        except click.ClickException as e:
            LOG.debug(f"Failed to parse startup arguments: {e.format_message()}")
            raise FlagParseError("?", None, e.format_message()) from e

        for identifier, descriptor in self._descriptors.items():
            self._values[identifier] = ctx.params[descriptor.param_name]
            self._sources[identifier] = ctx.get_parameter_source(descriptor.param_name)
        self._extra = tuple(ctx.args)
        self._parsed = True

        if self._extra:
            LOG.debug(f"Unrecognized arguments left for other consumers: {list(self._extra)}")
        return dict(self._values)

    # -------------------------------------------------------------------------
    # Read interface
    # -------------------------------------------------------------------------

    @property
    def parsed(self) -> bool:
        return self._parsed

    @property
    def extra_arguments(self) -> Tuple[str, ...]:
        return self._extra

    def get(self, identifier: Hashable) -> Any:
        if identifier not in self._descriptors:
            raise UnknownFlagError(identifier)
        if not self._parsed:
            raise FlagsNotParsedError()
        return self._values[identifier]

    def is_default(self, identifier: Hashable) -> bool:
        """True when the value was not given on the command line."""
        self.get(identifier)
        return self._sources[identifier] is not ParameterSource.COMMANDLINE

    def values(self) -> Dict[Hashable, Any]:
        if not self._parsed:
            raise FlagsNotParsedError()
        return dict(self._values)


def _find_value(tokens: Sequence[str], option: Optional[str]) -> Optional[str]:
    """Returns the raw token supplied for `option`, if any."""
    if not option:
        return None
    for index, token in enumerate(tokens):
        if token.startswith(option + "="):
            return token[len(option) + 1:]
        if token == option and index + 1 < len(tokens):
            return tokens[index + 1]
    return None
