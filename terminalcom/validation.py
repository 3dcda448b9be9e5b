from collections.abc import Iterable, Mapping
from typing import Any

INSTANCE_TYPES_URL = "https://www.terminal.com/faq#instanceTypes"


class InvalidParameter(ValueError):
    def __init__(self, message: str, *, keys: Iterable[str] = ()):
        super().__init__(message)
        self.keys = tuple(keys)


def _quoted(keys: Iterable[str]) -> str:
    return ", ".join(repr(key) for key in keys)


def ensure_options_validity(options: Mapping[str, Any], *valid_keys: str) -> None:
    allowed = set(valid_keys)
    unrecognised = [key for key in options if key not in allowed]
    if unrecognised:
        raise InvalidParameter(f"Unrecognised options: {_quoted(unrecognised)}", keys=unrecognised)


def ensure_paired(options: Mapping[str, Any], first: str, second: str) -> None:
    if (first in options) != (second in options):
        missing = second if first in options else first
        raise InvalidParameter(
            f"You have to specify both {first} and {second} of the corresponding instance type "
            f"as described at {INSTANCE_TYPES_URL}",
            keys=[missing],
        )


def ensure_present(options: Mapping[str, Any], *required_keys: str) -> None:
    missing = [key for key in required_keys if key not in options]
    if missing:
        raise InvalidParameter(f"Missing required options: {_quoted(missing)}", keys=missing)
