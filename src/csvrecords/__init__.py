"""
csvrecords: convert marked record objects to and from quoted CSV text.

A record type opts fields in with a CsvField marker and exposes a
getter/setter pair for each of them. The package then:

    - builds a Schema once per type (discovery + validation)
    - serializes records into a header line plus one line per record
    - deserializes such text back into fresh records, matching cells to
      fields by header name

ARCHITECTURAL GUARANTEE:
------------------------
Schema errors surface when the codec is created, never later.
Conversion errors affect one cell only and are reported, not raised
(unless strict mode is requested).
"""

from csvrecords.codec import CsvCodec, deserialize, serialize
from csvrecords.config import CodecOptions, load_options
from csvrecords.diagnostics import CsvConversionWarning, Diagnostics
from csvrecords.errors import (
    ConversionError,
    MissingConstructorError,
    NoFieldsMarkedError,
    SchemaError,
    UnserializableTypeError,
)
from csvrecords.kinds import PrimitiveKind
from csvrecords.markers import CsvField, csv_field
from csvrecords.schema import FieldDescriptor, Schema, build_schema

__version__ = "0.1.0"

__all__ = [
    "CsvCodec",
    "serialize",
    "deserialize",
    "CodecOptions",
    "load_options",
    "Diagnostics",
    "CsvConversionWarning",
    "SchemaError",
    "UnserializableTypeError",
    "NoFieldsMarkedError",
    "MissingConstructorError",
    "ConversionError",
    "PrimitiveKind",
    "CsvField",
    "csv_field",
    "FieldDescriptor",
    "Schema",
    "build_schema",
]
