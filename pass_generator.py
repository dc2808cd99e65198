# pass_generator.py
"""
Validate a string-keyed options map and build a random password from it.

Options example:

    {"length": "5", "numbers": "true", "uppercase": "false"}

Only four keys mean anything: ``length``, ``numbers``, ``uppercase`` and
``symbols``. Lowercase letters are always part of the password.
"""
from __future__ import annotations

import logging
import re
import secrets
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional, Sequence, Tuple

log = logging.getLogger("passgen.core")

# Character sets
LOWER = "abcdefghijklmnopqrstuvwxyz"
DIGITS = "0123456789"
UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
SYMBOLS = "!#$%&()*+,-./:;<=>?@[]^_{|}~"

LOWERCASE_CLASS = "lowercase"
ALLOWED_OPTIONS: Tuple[str, ...] = ("numbers", "uppercase", "symbols")

ALPHABETS: Dict[str, str] = {
    LOWERCASE_CLASS: LOWER,
    "numbers": DIGITS,
    "uppercase": UPPER,
    "symbols": SYMBOLS,
}

_DIGITS_RE = re.compile(r"[0-9]+")
_BOOLEANS = {"true": True, "false": False}

_RNG = secrets.SystemRandom()


class ErrorReason(str, Enum):
    MISSING_LENGTH = "length missing"
    INVALID_LENGTH = "length not an integer"
    NON_BOOLEAN_OPTION = "options values must be boolean"
    UNSUPPORTED_OPTION = "only numbers, uppercase, symbols options allowed"
    LENGTH_TOO_SMALL = "length too small for requested options"


class OptionsError(ValueError):
    """Raised by parse_options; carries the reason of the first failed check."""

    def __init__(self, reason: ErrorReason):
        super().__init__(reason.value)
        self.reason = reason


@dataclass(frozen=True)
class ParsedRequest:
    length: int
    classes: Tuple[str, ...]

    @property
    def all_classes(self) -> Tuple[str, ...]:
        return (LOWERCASE_CLASS,) + self.classes


@dataclass(frozen=True)
class GenerateResult:
    password: Optional[str] = field(default=None, repr=False)
    error: Optional[ErrorReason] = None

    def __post_init__(self):
        if (self.password is None) == (self.error is None):
            raise ValueError("exactly one of password and error must be set")

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, str]:
        if self.error is not None:
            return {"error": self.error.value}
        return {"password": self.password}


def parse_options(options: Mapping[str, str]) -> ParsedRequest:
    """
    Run the validation chain over raw options.

    Checks run in a fixed order and the first failure wins:
      presence of length, length is digits only, every other value is
      "true"/"false", every "true" key is an allowed class, length fits
      one character per class.
    """
    if "length" not in options:
        raise OptionsError(ErrorReason.MISSING_LENGTH)

    raw_length = options["length"].strip()
    if not _DIGITS_RE.fullmatch(raw_length):
        raise OptionsError(ErrorReason.INVALID_LENGTH)
    length = int(raw_length, 10)

    flags: Dict[str, bool] = {}
    for key, value in options.items():
        if key == "length":
            continue
        flag = _BOOLEANS.get(value.strip())
        if flag is None:
            raise OptionsError(ErrorReason.NON_BOOLEAN_OPTION)
        flags[key] = flag

    classes = tuple(key for key, flag in flags.items() if flag)
    if any(key not in ALLOWED_OPTIONS for key in classes):
        raise OptionsError(ErrorReason.UNSUPPORTED_OPTION)

    # one mandatory character per class, lowercase included
    if length < len(classes) + 1:
        raise OptionsError(ErrorReason.LENGTH_TOO_SMALL)

    return ParsedRequest(length=length, classes=classes)


def _shuffle(chars: list, rng) -> None:
    # Fisher-Yates, in place
    for i in range(len(chars) - 1, 0, -1):
        j = rng.randrange(i + 1)
        chars[i], chars[j] = chars[j], chars[i]


def assemble(length: int, classes: Sequence[str], rng=None) -> str:
    """
    Build a password of `length` characters drawing from `classes`.

    Every class contributes one character, the rest are drawn by picking a
    class uniformly and then a character from it. The result is shuffled.
    """
    if rng is None:
        rng = _RNG
    pools = [ALPHABETS[name] for name in classes]
    remaining = length - len(pools)
    if remaining < 0:
        raise ValueError(f"length {length} too short for {len(pools)} classes")

    chars = [rng.choice(pool) for pool in pools]

    for _ in range(remaining):
        chars.append(rng.choice(rng.choice(pools)))

    _shuffle(chars, rng)
    return "".join(chars)


def generate(options: Mapping[str, str], rng=None) -> GenerateResult:
    """
    Validate `options` and generate a password.

    Never raises for bad input: failures come back as
    ``GenerateResult(error=...)``.

    >>> generate({"length": "5"}).ok
    True
    >>> generate({"length": "abc"}).to_dict()
    {'error': 'length not an integer'}
    """
    try:
        request = parse_options(options)
    except OptionsError as e:
        log.debug("rejected options %s: %s", sorted(options), e.reason.value)
        return GenerateResult(error=e.reason)

    password = assemble(request.length, request.all_classes, rng)
    log.debug("generated %d chars from %s", request.length, ",".join(request.all_classes))
    return GenerateResult(password=password)
