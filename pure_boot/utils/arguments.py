# pure_boot/utils/arguments.py

import logging
from typing import Iterator, Optional, Sequence, Tuple

from pure_boot.utils.exceptions import (
    ArgumentsAlreadyPopulatedError,
    PreconditionViolationError,
)

LOG = logging.getLogger(__name__)


class RawArgumentVector:
    """
    The unmodified process argument vector, captured once at startup.

    Created empty, populated exactly once by populate(), read-only afterwards.
    """

    def __init__(self):
        self._values: Tuple[str, ...] = ()
        self._populated = False

    def populate(self, count: int, values: Sequence[str]) -> None:
        """Copies the first `count` entries of `values` into the vector."""
        if self._populated:
            raise ArgumentsAlreadyPopulatedError()

        if not isinstance(count, int) or isinstance(count, bool) or count < 0:
            raise PreconditionViolationError(f"Argument count must be a non-negative integer, got {count!r}")

        if values is None or len(values) < count:
            available = 0 if values is None else len(values)
            raise PreconditionViolationError(
                f"Argument count {count} exceeds the {available} values supplied"
            )

        captured = []
        for index in range(count):
            value = values[index]
            if not isinstance(value, str):
                raise PreconditionViolationError(
                    f"Argument {index} must be a string, got {type(value).__name__}"
                )
            captured.append(value)

        self._values = tuple(captured)
        self._populated = True
        LOG.debug(f"Captured {count} startup arguments: {list(self._values)}")

    @property
    def populated(self) -> bool:
        return self._populated

    @property
    def program(self) -> Optional[str]:
        """The first token (program name), if any."""
        return self._values[0] if self._values else None

    @property
    def tokens(self) -> Tuple[str, ...]:
        """Everything after the program name."""
        return self._values[1:]

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index):
        return self._values[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __repr__(self) -> str:
        state = "populated" if self._populated else "empty"
        return f"RawArgumentVector({state}, {list(self._values)!r})"


def populate_arguments(count: int, values: Sequence[str], store: RawArgumentVector) -> RawArgumentVector:
    """
    Captures the startup arguments into `store`.

    Fails with ArgumentsAlreadyPopulatedError when the store was already filled.
    """
    store.populate(count, values)
    return store
