"""
Codec: records <-> quoted CSV text, driven by a Schema.

Wire format:

    "col1","col2",...,"colN",
    "v1a","v2a",...,"vNa",
    ...

    - Every cell, header included, is wrapped in double quotes.
    - Every cell is followed by a separator, including the last one.
    - Lines end with the configured terminator on write; on read \\r is
      dropped and lines are split on \\n.

Quoting is deliberately naive. Reading splits on every separator and then
removes every quote character, so values containing ",", '"' or a newline
do not survive a round trip.

ERROR POLICY:
    A cell that cannot be read, converted or assigned is reported to the
    Diagnostics sink and skipped. The rest of the line and the rest of the
    document still load. CodecOptions(strict=True) raises instead.
"""

from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Union

from csvrecords.config import QUOTE, SEPARATOR, CodecOptions
from csvrecords.diagnostics import Diagnostics
from csvrecords.errors import ConversionError
from csvrecords.kinds import from_text, to_text
from csvrecords.schema import FieldDescriptor, Schema, build_schema


def split_lines(text: str) -> List[str]:
    """Drop carriage returns and split on line feeds."""
    return text.replace("\r", "").split("\n")


def remove_quotes(tokens: Iterable[str]) -> List[str]:
    """Strip every quote character from every token."""
    return [token.replace(QUOTE, "") for token in tokens]


def split_cells(line: str) -> List[str]:
    """Split a line into unquoted cell texts."""
    return remove_quotes(line.split(SEPARATOR))


def format_line(cells: Iterable[str], line_terminator: str) -> str:
    """Quote each cell, follow each with a separator, end the line."""
    return "".join(QUOTE + cell + QUOTE + SEPARATOR for cell in cells) + line_terminator


def header_line(schema: Schema, options: Optional[CodecOptions] = None) -> str:
    options = options or CodecOptions()
    return format_line(schema.columns, options.line_terminator)


def _recover(error: ConversionError, options: CodecOptions, diagnostics: Diagnostics) -> None:
    if options.strict:
        raise error
    diagnostics.report(error)


def _read_cell(descriptor: FieldDescriptor, record: Any) -> str:
    try:
        value = descriptor.read(record)
    except ConversionError:
        raise
    except Exception as e:
        raise ConversionError(
            f"column {descriptor.name!r}: getter failed: {e}", column=descriptor.name
        ) from e
    try:
        return to_text(descriptor.kind, value)
    except ConversionError as e:
        raise e.with_column(descriptor.name) from e


def _write_cell(descriptor: FieldDescriptor, record: Any, text: str) -> None:
    try:
        value = from_text(descriptor.kind, text)
    except ConversionError as e:
        raise e.with_column(descriptor.name) from e
    try:
        descriptor.write(record, value)
    except Exception as e:
        raise ConversionError(
            f"column {descriptor.name!r}: setter failed: {e}", column=descriptor.name, value=text
        ) from e


def serialize(
    schema: Schema,
    records: Iterable[Any],
    options: Optional[CodecOptions] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> str:
    """
    Render records as CSV text.

    Args:
        schema: Schema of the record type
        records: Records in output order (not re-sorted)
        options: Codec options (line terminator, strict mode)
        diagnostics: Sink for skipped cells

    Returns:
        Header line followed by one line per record

    Raises:
        ConversionError: Only in strict mode
    """
    options = options or CodecOptions()
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    parts = [header_line(schema, options)]
    for record in records:
        cells = []
        for descriptor in schema:
            try:
                cells.append(_read_cell(descriptor, record))
            except ConversionError as e:
                # Degraded row: the cell is omitted
                _recover(e, options, diagnostics)
        parts.append(format_line(cells, options.line_terminator))
    return "".join(parts)


def deserialize(
    schema: Schema,
    text: str,
    options: Optional[CodecOptions] = None,
    diagnostics: Optional[Diagnostics] = None,
    factory: Optional[Callable[[], Any]] = None,
) -> List[Any]:
    """
    Parse CSV text into fresh records.

    Cells are matched to columns by the header names, so the header may
    list columns in any order. Columns missing from the header leave the
    field at its constructor default.

    Args:
        schema: Schema of the record type
        text: Whole CSV document
        options: Codec options (strict mode)
        diagnostics: Sink for skipped cells
        factory: Produces a blank record (defaults to schema.new_record)

    Returns:
        One record per non-empty data line, in document order

    Raises:
        ConversionError: Only in strict mode
    """
    options = options or CodecOptions()
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    factory = factory or schema.new_record

    numbered = [(n, line) for n, line in enumerate(split_lines(text), start=1) if line]
    if not numbered:
        return []

    header = split_cells(numbered[0][1])
    positions = {}
    for descriptor in schema:
        if descriptor.name in header:
            positions[descriptor.name] = header.index(descriptor.name)

    records = []
    for line_number, line in numbered[1:]:
        values = split_cells(line)
        try:
            record = factory()
        except Exception as e:
            _recover(ConversionError(f"line {line_number}: cannot create record: {e}"), options, diagnostics)
            continue
        if record is None:
            _recover(ConversionError(f"line {line_number}: factory produced no record"), options, diagnostics)
            continue

        for descriptor in schema:
            idx = positions.get(descriptor.name)
            if idx is None:
                continue
            try:
                if idx >= len(values):
                    raise ConversionError(
                        f"column {descriptor.name!r}: line {line_number} has no cell {idx + 1}",
                        column=descriptor.name,
                    )
                _write_cell(descriptor, record, values[idx])
            except ConversionError as e:
                _recover(e, options, diagnostics)

        records.append(record)

    return records


class CsvCodec:
    """
    Serializer/deserializer bound to one record type.

    Holds the pending records: fill it with add_* and call serialize(), or
    call deserialize() to replace its content with parsed records.

    The diagnostics sink is cleared at the start of every serialize or
    deserialize call, so it only describes the most recent call.

    The collection is not thread-safe. Use one CsvCodec per caller or
    serialize access externally.

    Example:
        codec = CsvCodec(Product)
        codec.add_items(Product("Test1", 123), Product("Test2", 456))
        text = codec.serialize()
    """

    def __init__(
        self,
        record_type: Union[type, Schema],
        options: Optional[CodecOptions] = None,
        diagnostics: Optional[Diagnostics] = None,
    ):
        if isinstance(record_type, Schema):
            self.schema = record_type
        else:
            self.schema = build_schema(record_type)
        self.options = options or CodecOptions()
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self._items: List[Any] = []

    @property
    def record_type(self) -> type:
        return self.schema.record_type

    @property
    def items(self) -> List[Any]:
        """Copy of the held records. Mutating it does not affect the codec."""
        return list(self._items)

    @property
    def item_count(self) -> int:
        return len(self._items)

    def add_item(self, item: Any) -> None:
        if item is not None:
            self._items.append(item)

    def add_items(self, *items: Any) -> None:
        self.add_range(items)

    def add_range(self, items: Iterable[Any]) -> None:
        for item in items:
            self.add_item(item)

    def remove_item(self, index: int) -> Any:
        return self._items.pop(index)

    def remove_items(self, condition: Callable[[Any], bool]) -> int:
        """
        Remove every held record for which `condition` returns True.

        Returns:
            Number of removed records
        """
        kept = [item for item in self._items if not condition(item)]
        removed = len(self._items) - len(kept)
        self._items = kept
        return removed

    def clear_items(self) -> None:
        self._items.clear()

    def serialize(self) -> str:
        self.diagnostics.clear()
        return serialize(self.schema, self._items, self.options, self.diagnostics)

    def deserialize(self, text: str) -> List[Any]:
        """
        Replace the held records with those parsed from `text`.

        In strict mode a failing call leaves the held records untouched.
        """
        self.diagnostics.clear()
        records = deserialize(self.schema, text, self.options, self.diagnostics)
        self._items[:] = records
        return self.items

    def serialize_to_file(self, path: Union[str, Path]) -> None:
        """
        Write the held records to a file.

        Raises:
            OSError: If the file cannot be written
        """
        # newline="" keeps the configured terminator as is
        with open(path, 'w', encoding=self.options.encoding, newline='') as f:
            f.write(self.serialize())

    def deserialize_from_file(self, path: Union[str, Path]) -> List[Any]:
        """
        Replace the held records with those parsed from a file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            OSError: If the file cannot be read
        """
        with open(path, 'r', encoding=self.options.encoding, newline='') as f:
            content = f.read()
        return self.deserialize(content)


__all__ = [
    "split_lines",
    "split_cells",
    "remove_quotes",
    "format_line",
    "header_line",
    "serialize",
    "deserialize",
    "CsvCodec",
]
