"""
Example record types used by the demo script and the test-suite.

Product is the smallest useful record: a text and an integer column.
Measurement covers all nine primitive kinds and uses both marker spellings.
"""
from dataclasses import dataclass
from typing import Annotated, List

from csvrecords.kinds import PrimitiveKind
from csvrecords.markers import CsvField, csv_field


@dataclass
class Product:
    number: int = csv_field(default=0)
    name: str = csv_field(default="")

    def getNumber(self) -> int:
        return self.number

    def setNumber(self, number: int) -> None:
        self.number = number

    def getName(self) -> str:
        return self.name

    def setName(self, name: str) -> None:
        self.name = name


class Measurement:
    """Sensor reading. Uses snake_case accessors and Annotated markers."""

    label: Annotated[str, CsvField()]
    grade: Annotated[str, CsvField(kind=PrimitiveKind.CHARACTER)]
    channel: Annotated[int, CsvField(kind=PrimitiveKind.BYTE)]
    offset: Annotated[int, CsvField(kind=PrimitiveKind.SHORT)]
    count: Annotated[int, CsvField()]
    timestamp: Annotated[int, CsvField(kind=PrimitiveKind.LONG, name="ts")]
    valid: Annotated[bool, CsvField()]
    ratio: Annotated[float, CsvField(kind=PrimitiveKind.SINGLE_FLOAT)]
    value: Annotated[float, CsvField()]

    def __init__(self):
        self.label = ""
        self.grade = "\0"
        self.channel = 0
        self.offset = 0
        self.count = 0
        self.timestamp = 0
        self.valid = False
        self.ratio = 0.0
        self.value = 0.0

    def get_label(self):
        return self.label

    def set_label(self, value):
        self.label = value

    def get_grade(self):
        return self.grade

    def set_grade(self, value):
        self.grade = value

    def get_channel(self):
        return self.channel

    def set_channel(self, value):
        self.channel = value

    def get_offset(self):
        return self.offset

    def set_offset(self, value):
        self.offset = value

    def get_count(self):
        return self.count

    def set_count(self, value):
        self.count = value

    def get_timestamp(self):
        return self.timestamp

    def set_timestamp(self, value):
        self.timestamp = value

    def get_valid(self):
        return self.valid

    def set_valid(self, value):
        self.valid = value

    def get_ratio(self):
        return self.ratio

    def set_ratio(self, value):
        self.ratio = value

    def get_value(self):
        return self.value

    def set_value(self, value):
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, Measurement):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self):
        return f"Measurement({vars(self)!r})"


def build_example_products(count: int = 3) -> List[Product]:
    """Products Test1, Test2, ... numbered 123, 456, 789, ..."""
    return [Product(number=123 + 333 * i, name=f"Test{i + 1}") for i in range(count)]
