"""A small printf: %c %s %d %i %u %x %X %p %o with h, hh, l and ll lengths."""

from __future__ import annotations

import sys
from enum import Enum, auto
from typing import Callable, TextIO


class Length(Enum):
    """Length modifiers of a conversion."""

    DEFAULT = 0
    SHORT_SHORT = 1
    SHORT = 2
    LONG = 3
    LONG_LONG = 4


class _State(Enum):
    NORMAL = auto()
    LENGTH = auto()
    LENGTH_SHORT = auto()
    LENGTH_LONG = auto()
    SPEC = auto()


# int is 16 bits wide on the target, long 32 and long long 64.
_WIDTH = {
    Length.DEFAULT: 16,
    Length.SHORT_SHORT: 16,
    Length.SHORT: 16,
    Length.LONG: 32,
    Length.LONG_LONG: 64,
}

_DIGITS = "0123456789abcdef"

_NUMERIC = {
    "d": (10, True),
    "i": (10, True),
    "u": (10, False),
    "X": (16, False),
    "x": (16, False),
    "p": (16, False),
    "o": (8, False),
}


def format_number(
    value: int,
    length: Length = Length.DEFAULT,
    signed: bool = False,
    radix: int = 10,
) -> str:
    """Render ``value`` truncated to the width ``length`` selects, in ``radix``."""
    if not 2 <= radix <= len(_DIGITS):
        raise ValueError(f"unsupported radix {radix}")
    bits = _WIDTH[Length(length)]
    number = int(value) & ((1 << bits) - 1)
    negative = signed and bool(number >> (bits - 1))
    if negative:
        number = (1 << bits) - number

    digits = []
    while True:
        number, rem = divmod(number, radix)
        digits.append(_DIGITS[rem])
        if not number:
            break
    if negative:
        digits.append("-")
    return "".join(reversed(digits))


def _char(value: int | str) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise ValueError("%c needs a single character")
        return value
    if isinstance(value, int):
        return chr(value & 0xFF)
    raise TypeError(f"%c needs a character or an integer, not {type(value).__name__}")


def _text(value: str | bytes) -> str:
    if isinstance(value, bytes):
        value = value.decode("latin-1")
    if not isinstance(value, str):
        raise TypeError(f"%s needs a string, not {type(value).__name__}")
    return value.split("\0", 1)[0]


def _convert(spec: str, length: Length, take: Callable[[], object]) -> str:
    if spec == "c":
        return _char(take())
    if spec == "s":
        return _text(take())
    if spec == "%":
        return "%"
    if spec in _NUMERIC:
        radix, signed = _NUMERIC[spec]
        return format_number(take(), length, signed, radix)
    return ""


def format_string(fmt: str, *args: object) -> str:
    """Expand ``fmt`` with ``args``; unknown conversions are dropped."""
    remaining = iter(args)

    def take() -> object:
        try:
            return next(remaining)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None

    out = []
    state = _State.NORMAL
    length = Length.DEFAULT
    for ch in fmt:
        if state is _State.NORMAL:
            if ch == "%":
                state = _State.LENGTH
            else:
                out.append(ch)
            continue
        if state is _State.LENGTH and ch == "h":
            length, state = Length.SHORT, _State.LENGTH_SHORT
            continue
        if state is _State.LENGTH and ch == "l":
            length, state = Length.LONG, _State.LENGTH_LONG
            continue
        if state is _State.LENGTH_SHORT and ch == "h":
            length, state = Length.SHORT_SHORT, _State.SPEC
            continue
        if state is _State.LENGTH_LONG and ch == "l":
            length, state = Length.LONG_LONG, _State.SPEC
            continue
        out.append(_convert(ch, length, take))
        state = _State.NORMAL
        length = Length.DEFAULT
    return "".join(out)


def putc(c: int | str, stream: TextIO | None = None) -> None:
    """Write one character."""
    (sys.stdout if stream is None else stream).write(_char(c))


def puts(text: str | bytes, stream: TextIO | None = None) -> None:
    """Write ``text`` up to its first NUL, without adding a newline."""
    (sys.stdout if stream is None else stream).write(_text(text))


def printf(fmt: str, *args: object, stream: TextIO | None = None) -> None:
    """Write ``fmt`` expanded with ``args``."""
    (sys.stdout if stream is None else stream).write(format_string(fmt, *args))