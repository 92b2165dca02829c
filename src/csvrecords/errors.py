"""
Exception types for schema construction and value conversion.

Two families:
    - SchemaError: raised while building a Schema. Fatal, a codec is never
      created for a type that fails these checks.
    - ConversionError: raised for a single cell during serialize/deserialize.
      Recovered locally by the codec unless strict mode is enabled.
"""

from typing import Any, Optional


class SchemaError(ValueError):
    """Record type cannot be described as a CSV schema."""
    pass


class UnserializableTypeError(SchemaError):
    """A marked field has a type outside the supported primitive kinds."""

    def __init__(self, field_name: str, actual_type: Any):
        self.field_name = field_name
        self.actual_type = actual_type
        type_name = getattr(actual_type, "__name__", repr(actual_type))
        super().__init__(
            f"The field {field_name} of type {type_name} is an unserializable type."
        )


class NoFieldsMarkedError(SchemaError):
    """No usable marked field was discovered on the record type."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(
            f"No field of the class {type_name} has been marked with CsvField to be serialized."
        )


class MissingConstructorError(SchemaError):
    """Record type cannot be constructed without arguments."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(
            f"The class {type_name} needs a constructor that takes no parameters."
        )


class ConversionError(ValueError):
    """
    A single cell could not be converted or assigned.

    Attributes:
        column: Column name the cell belongs to (None when unknown)
        value: Offending text or value
    """

    def __init__(self, message: str, column: Optional[str] = None, value: Any = None):
        self.column = column
        self.value = value
        super().__init__(message)

    def with_column(self, column: str) -> "ConversionError":
        """Return a copy of this error attributed to `column`."""
        if self.column == column:
            return self
        prefix = f"column {column!r}: "
        return ConversionError(prefix + str(self), column=column, value=self.value)


__all__ = [
    "SchemaError",
    "UnserializableTypeError",
    "NoFieldsMarkedError",
    "MissingConstructorError",
    "ConversionError",
]
