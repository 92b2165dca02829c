"""
Diagnostics sink for recoverable conversion problems.

The codec never aborts a serialize/deserialize call because of a single bad
cell. Instead it reports the error here and moves on. By default every
report is also emitted as a CsvConversionWarning so it is visible without
any setup; pass your own Diagnostics to inspect what was skipped.
"""

import warnings
from dataclasses import dataclass, field
from typing import List


class CsvConversionWarning(UserWarning):
    """A cell was skipped or left at its default value."""
    pass


@dataclass
class Diagnostics:
    """
    Ordered record of errors recovered during conversion.

    CsvCodec clears its sink at the start of each call, so `errors` never
    grows beyond what one serialize or deserialize produced.
    """

    emit_warnings: bool = True
    errors: List[Exception] = field(default_factory=list)

    def report(self, error: Exception) -> None:
        self.errors.append(error)
        if self.emit_warnings:
            warnings.warn(f"{type(error).__name__}: {error}", CsvConversionWarning, stacklevel=3)

    @property
    def messages(self) -> List[str]:
        return [str(e) for e in self.errors]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def clear(self) -> None:
        self.errors.clear()


__all__ = ["Diagnostics", "CsvConversionWarning"]
