"""
Codec options and their YAML representation.

Example options file:

    line_terminator: "\\n"
    encoding: utf-8
    strict: false

The separator (,) and quote (") characters are part of the format and are
not configurable.
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

SEPARATOR = ","
QUOTE = '"'

_ESCAPES = {"\\n": "\n", "\\r\\n": "\r\n", "\\r": "\r"}


@dataclass(frozen=True)
class CodecOptions:
    """
    Settings shared by serialize and deserialize.

    Properties:
        line_terminator: Written after every line (reading always accepts \\n and \\r\\n)
        encoding: Text encoding for the file based entry points
        strict: If True the first ConversionError aborts the call instead of
                being reported and skipped
    """

    line_terminator: str = os.linesep
    encoding: str = "utf-8"
    strict: bool = False


def options_from_dict(data: Optional[Dict[str, Any]]) -> CodecOptions:
    """
    Build CodecOptions from a plain mapping.

    Raises:
        ValueError: On unknown keys or wrongly typed values
    """
    if not data:
        return CodecOptions()
    if not isinstance(data, dict):
        raise ValueError(f"Options must be a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(CodecOptions)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown codec options: {unknown}")

    values = dict(data)
    if "line_terminator" in values:
        terminator = values["line_terminator"]
        if not isinstance(terminator, str) or not terminator:
            raise ValueError("line_terminator must be a non-empty string")
        values["line_terminator"] = _ESCAPES.get(terminator, terminator)
    if "encoding" in values and not isinstance(values["encoding"], str):
        raise ValueError("encoding must be a string")
    if "strict" in values and not isinstance(values["strict"], bool):
        raise ValueError("strict must be true or false")

    return CodecOptions(**values)


def options_to_dict(options: CodecOptions) -> Dict[str, Any]:
    return {
        "line_terminator": options.line_terminator,
        "encoding": options.encoding,
        "strict": options.strict,
    }


def load_options(path: Union[str, Path]) -> CodecOptions:
    """
    Read CodecOptions from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the content is not a valid options mapping
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    return options_from_dict(data)


__all__ = [
    "SEPARATOR",
    "QUOTE",
    "CodecOptions",
    "options_from_dict",
    "options_to_dict",
    "load_options",
]
