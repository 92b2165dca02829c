"""
Participation marker for record fields.

A field takes part in the CSV schema only if it carries a CsvField marker.
Two spellings are supported:

    @dataclass
    class Product:
        number: int = csv_field(default=0)
        code: int = csv_field(default=0, kind=PrimitiveKind.SHORT, name="product_code")

    class Product:
        number: Annotated[int, CsvField()] = 0
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Optional

from csvrecords.kinds import PrimitiveKind

METADATA_KEY = "csvrecords"


@dataclass(frozen=True)
class CsvField:
    """
    Marks a field as a CSV column.

    Properties:
        name: Explicit column name. If None, the field's own name is used.
        kind: Explicit primitive kind. If None, it is inferred from the
              field annotation (str, bool, int, float).
    """

    name: Optional[str] = None
    kind: Optional[PrimitiveKind] = None

    def column_name(self, field_name: str) -> str:
        return self.name if self.name else field_name


def csv_field(*, name: Optional[str] = None, kind: Optional[PrimitiveKind] = None, **kwargs: Any) -> Any:
    """
    Declare a marked dataclass field.

    Accepts every keyword of dataclasses.field (default, default_factory, ...).
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[METADATA_KEY] = CsvField(name=name, kind=kind)
    return dataclasses.field(metadata=metadata, **kwargs)


__all__ = ["CsvField", "csv_field", "METADATA_KEY"]
