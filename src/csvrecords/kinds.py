"""
Primitive kinds supported as CSV cell values.

Every participating field maps to exactly one PrimitiveKind. The kind decides
both directions of the cell conversion:

    value --to_text--> "cell text" --from_text--> value

ARCHITECTURAL RULE:
    This module is the only place that knows how a value looks as text.
    The codec never inspects Python types itself, it asks for a kind.

Integer kinds are bounded like two's complement machine integers:
    BYTE 8 bit, SHORT 16 bit, INTEGER 32 bit, LONG 64 bit.
"""

import math
import re
import struct
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from csvrecords.errors import ConversionError


class PrimitiveKind(Enum):
    """The nine representable field kinds."""

    TEXT = "text"
    CHARACTER = "character"
    BYTE = "byte"
    SHORT = "short"
    INTEGER = "integer"
    LONG = "long"
    BOOLEAN = "boolean"
    SINGLE_FLOAT = "single_float"
    DOUBLE_FLOAT = "double_float"

    @property
    def python_type(self) -> type:
        """Python storage type for values of this kind."""
        return _PYTHON_TYPES[self]

    @property
    def is_integral(self) -> bool:
        return self in _INTEGER_BOUNDS


_PYTHON_TYPES: Dict[PrimitiveKind, type] = {
    PrimitiveKind.TEXT: str,
    PrimitiveKind.CHARACTER: str,
    PrimitiveKind.BYTE: int,
    PrimitiveKind.SHORT: int,
    PrimitiveKind.INTEGER: int,
    PrimitiveKind.LONG: int,
    PrimitiveKind.BOOLEAN: bool,
    PrimitiveKind.SINGLE_FLOAT: float,
    PrimitiveKind.DOUBLE_FLOAT: float,
}

# Kinds inferred from a bare Python annotation. Narrower kinds are opt-in.
_DEFAULT_KINDS: Dict[type, PrimitiveKind] = {
    str: PrimitiveKind.TEXT,
    bool: PrimitiveKind.BOOLEAN,
    int: PrimitiveKind.INTEGER,
    float: PrimitiveKind.DOUBLE_FLOAT,
}


def _bits(width: int) -> Tuple[int, int]:
    return -(1 << (width - 1)), (1 << (width - 1)) - 1


_INTEGER_BOUNDS: Dict[PrimitiveKind, Tuple[int, int]] = {
    PrimitiveKind.BYTE: _bits(8),
    PrimitiveKind.SHORT: _bits(16),
    PrimitiveKind.INTEGER: _bits(32),
    PrimitiveKind.LONG: _bits(64),
}

_INTEGER_LITERAL = re.compile(r'^[+-]?[0-9]+$')

NULL_CHARACTER = "\0"


def infer_kind(python_type: Any) -> Optional[PrimitiveKind]:
    """
    Infer the default kind for a Python annotation.

    Args:
        python_type: Annotation with Annotated/marker metadata already removed

    Returns:
        PrimitiveKind, or None if the type is not representable
    """
    if not isinstance(python_type, type):
        return None
    return _DEFAULT_KINDS.get(python_type)


def accepts_type(kind: PrimitiveKind, python_type: Any) -> bool:
    """Whether a field declared as `python_type` may be stored as `kind`."""
    return python_type is kind.python_type


def _to_single(value: float) -> float:
    """Round a float to IEEE-754 single precision."""
    try:
        return struct.unpack('f', struct.pack('f', value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _single_repr(value: float) -> str:
    """Shortest decimal text that reads back as the same single precision value."""
    if math.isnan(value) or math.isinf(value):
        return repr(value)
    for precision in range(1, 10):
        text = f"{value:.{precision}g}"
        if _to_single(float(text)) == value:
            if 'e' not in text and '.' not in text:
                text += ".0"
            return text
    return repr(value)


def to_text(kind: PrimitiveKind, value: Any) -> str:
    """
    Convert a field value into its cell text.

    Args:
        kind: Primitive kind of the field
        value: Current field value

    Returns:
        Canonical text for the value (without quotes)

    Raises:
        ConversionError: If the value is None or not of the kind's type
    """
    if value is None:
        raise ConversionError(f"cannot write None as {kind.value}", value=value)

    if kind is PrimitiveKind.TEXT:
        if not isinstance(value, str):
            raise ConversionError(f"expected str for text, got {type(value).__name__}", value=value)
        return value

    if kind is PrimitiveKind.CHARACTER:
        if not isinstance(value, str) or len(value) != 1:
            raise ConversionError(f"expected a single character, got {value!r}", value=value)
        return value

    if kind is PrimitiveKind.BOOLEAN:
        if not isinstance(value, bool):
            raise ConversionError(f"expected bool, got {type(value).__name__}", value=value)
        return "true" if value else "false"

    if kind.is_integral:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConversionError(f"expected int for {kind.value}, got {type(value).__name__}", value=value)
        _check_range(kind, value, value)
        return str(value)

    # Floating point kinds accept ints too, the same way assignment widens
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConversionError(f"expected float for {kind.value}, got {type(value).__name__}", value=value)
    if kind is PrimitiveKind.SINGLE_FLOAT:
        return _single_repr(_to_single(float(value)))
    return repr(float(value))


def from_text(kind: PrimitiveKind, text: str) -> Any:
    """
    Convert cell text into a value of the given kind.

    Args:
        kind: Primitive kind of the target field
        text: Cell text with quotes already removed

    Returns:
        Parsed value

    Raises:
        ConversionError: If the text is not a valid literal for the kind
    """
    if kind is PrimitiveKind.TEXT:
        return text

    if kind is PrimitiveKind.CHARACTER:
        return text[0] if text else NULL_CHARACTER

    if kind is PrimitiveKind.BOOLEAN:
        # Anything except a case-insensitive "true" is false
        return text.lower() == "true"

    if kind.is_integral:
        if not _INTEGER_LITERAL.match(text):
            raise ConversionError(f"invalid {kind.value} literal: {text!r}", value=text)
        value = int(text)
        _check_range(kind, value, text)
        return value

    if '_' in text:
        raise ConversionError(f"invalid {kind.value} literal: {text!r}", value=text)
    try:
        value = float(text)
    except ValueError:
        raise ConversionError(f"invalid {kind.value} literal: {text!r}", value=text)
    if kind is PrimitiveKind.SINGLE_FLOAT:
        return _to_single(value)
    return value


def _check_range(kind: PrimitiveKind, value: int, original: Any) -> None:
    low, high = _INTEGER_BOUNDS[kind]
    if not low <= value <= high:
        raise ConversionError(
            f"value {value} out of range for {kind.value} [{low}, {high}]", value=original
        )


__all__ = [
    "PrimitiveKind",
    "NULL_CHARACTER",
    "infer_kind",
    "accepts_type",
    "to_text",
    "from_text",
]
