"""
Tests for the Schema Descriptor.

These tests verify:
    - Marker discovery (dataclass metadata and Annotated)
    - Accessor resolution and silent exclusion of incomplete pairs
    - Column naming and registration order
    - Validation order and error details
    - Explicit registration without name based lookup
"""

from dataclasses import dataclass
from typing import Annotated

import pytest

from csvrecords.errors import (
    MissingConstructorError,
    NoFieldsMarkedError,
    SchemaError,
    UnserializableTypeError,
)
from csvrecords.examples import Measurement, Product
from csvrecords.kinds import PrimitiveKind
from csvrecords.markers import CsvField, csv_field
from csvrecords.schema import FieldDescriptor, Schema, accessor_names, build_schema


@dataclass
class PartialAccessors:
    kept: int = csv_field(default=0)
    getter_only: int = csv_field(default=0)
    setter_only: int = csv_field(default=0)
    unmarked: int = 0

    def getKept(self):
        return self.kept

    def setKept(self, value):
        self.kept = value

    def getGetter_only(self):
        return self.getter_only

    def setSetter_only(self, value):
        self.setter_only = value

    def getUnmarked(self):
        return self.unmarked

    def setUnmarked(self, value):
        self.unmarked = value


@dataclass
class WithList:
    name: str = csv_field(default="")
    tags: list = csv_field(default_factory=list)

    def get_name(self):
        return self.name

    def set_name(self, value):
        self.name = value

    def get_tags(self):
        return self.tags

    def set_tags(self, value):
        self.tags = value


class KindMismatch:
    code: Annotated[str, CsvField(kind=PrimitiveKind.INTEGER)]

    def __init__(self):
        self.code = ""

    def get_code(self):
        return self.code

    def set_code(self, value):
        self.code = value


@dataclass
class NothingMarked:
    name: str = ""

    def getName(self):
        return self.name

    def setName(self, value):
        self.name = value


@dataclass
class MarkedWithoutAccessors:
    name: str = csv_field(default="")


@dataclass
class NeedsArgs:
    value: int = csv_field()

    def get_value(self):
        return self.value

    def set_value(self, value):
        self.value = value


class BadTypeAndNeedsArgs:
    payload: Annotated[dict, CsvField()]

    def __init__(self, payload):
        self.payload = payload

    def get_payload(self):
        return self.payload

    def set_payload(self, value):
        self.payload = value


@dataclass
class Renamed:
    first: int = csv_field(default=0, name="alpha")
    second: int = csv_field(default=0, name="alpha")

    def get_first(self):
        return self.first

    def set_first(self, value):
        self.first = value

    def get_second(self):
        return self.second

    def set_second(self, value):
        self.second = value


@dataclass
class ExtendedProduct(Product):
    price: float = csv_field(default=0.0)

    def get_price(self):
        return self.price

    def set_price(self, value):
        self.price = value


class Plain:
    def __init__(self):
        self.n = 0


class TestAccessorNames:
    """Test accessor naming convention."""

    def test_capitalized_then_snake(self):
        """getColor is tried before get_color."""
        assert accessor_names("color") == [("getColor", "setColor"), ("get_color", "set_color")]

    def test_already_capitalized(self):
        """A capitalized field keeps its spelling."""
        assert accessor_names("Color")[0] == ("getColor", "setColor")


class TestDiscovery:
    """Test which fields become columns."""

    def test_declaration_order(self):
        """Columns follow field declaration order."""
        schema = build_schema(Product)
        assert schema.columns == ("number", "name")

    def test_inferred_kinds(self):
        """Kinds are inferred from bare annotations."""
        schema = build_schema(Product)
        assert schema["number"].kind is PrimitiveKind.INTEGER
        assert schema["name"].kind is PrimitiveKind.TEXT

    def test_annotated_markers_and_explicit_kinds(self):
        """Annotated markers carry explicit kinds in declaration order."""
        schema = build_schema(Measurement)
        assert schema.columns == (
            "label", "grade", "channel", "offset", "count", "ts", "valid", "ratio", "value",
        )
        assert schema["grade"].kind is PrimitiveKind.CHARACTER
        assert schema["channel"].kind is PrimitiveKind.BYTE
        assert schema["offset"].kind is PrimitiveKind.SHORT
        assert schema["ts"].kind is PrimitiveKind.LONG
        assert schema["valid"].kind is PrimitiveKind.BOOLEAN
        assert schema["ratio"].kind is PrimitiveKind.SINGLE_FLOAT
        assert schema["value"].kind is PrimitiveKind.DOUBLE_FLOAT

    def test_name_override(self):
        """The column is named by the marker, the attribute keeps its own name."""
        schema = build_schema(Measurement)
        assert "timestamp" not in schema
        assert schema["ts"].attribute == "timestamp"

    def test_partial_accessors_are_excluded(self):
        """Marked fields without a full getter/setter pair are silently dropped."""
        schema = build_schema(PartialAccessors)
        assert schema.columns == ("kept",)

    def test_unmarked_fields_are_ignored(self):
        """Fields without a marker never become columns."""
        schema = build_schema(PartialAccessors)
        assert "unmarked" not in schema

    def test_inherited_fields_come_first(self):
        """Base class columns precede subclass columns."""
        schema = build_schema(ExtendedProduct)
        assert schema.columns == ("number", "name", "price")

    def test_duplicate_column_name_keeps_later_field(self):
        """The later field wins a duplicate column name."""
        schema = build_schema(Renamed)
        assert schema.columns == ("alpha",)
        assert schema["alpha"].attribute == "second"

    def test_descriptor_read_write(self):
        """Descriptors read and write through the accessors."""
        schema = build_schema(Product)
        product = Product(number=1, name="a")
        schema["number"].write(product, 42)
        assert product.number == 42
        assert schema["name"].read(product) == "a"


class TestValidation:
    """Test schema validation errors."""

    def test_unsupported_type(self):
        """A list field is rejected with its name and type."""
        with pytest.raises(UnserializableTypeError) as info:
            build_schema(WithList)
        assert info.value.field_name == "tags"
        assert info.value.actual_type is list
        assert "tags" in str(info.value)

    def test_kind_incompatible_with_annotation(self):
        """An explicit kind must fit the annotation."""
        with pytest.raises(UnserializableTypeError) as info:
            build_schema(KindMismatch)
        assert info.value.field_name == "code"

    def test_no_marked_fields(self):
        """A type with no marked field is rejected."""
        with pytest.raises(NoFieldsMarkedError) as info:
            build_schema(NothingMarked)
        assert info.value.type_name == "NothingMarked"

    def test_marked_fields_without_accessors(self):
        """Dropped fields do not count towards the non-empty check."""
        with pytest.raises(NoFieldsMarkedError):
            build_schema(MarkedWithoutAccessors)

    def test_missing_zero_argument_constructor(self):
        """A type needing constructor arguments is rejected."""
        with pytest.raises(MissingConstructorError) as info:
            build_schema(NeedsArgs)
        assert info.value.type_name == "NeedsArgs"

    def test_type_check_runs_first(self):
        """An unsupported field is reported before the constructor check."""
        with pytest.raises(UnserializableTypeError):
            build_schema(BadTypeAndNeedsArgs)

    def test_errors_are_schema_errors(self):
        """Every schema failure is a SchemaError and a ValueError."""
        for record_type in (WithList, NothingMarked, NeedsArgs):
            with pytest.raises(SchemaError):
                build_schema(record_type)
            with pytest.raises(ValueError):
                build_schema(record_type)


class TestSchemaObject:
    """Test Schema behaviour after construction."""

    def test_fields_are_read_only(self):
        """The field mapping cannot be modified."""
        schema = build_schema(Product)
        with pytest.raises(TypeError):
            schema.fields["extra"] = schema["name"]

    def test_mapping_protocol(self):
        """Schema supports len, iteration and get."""
        schema = build_schema(Product)
        assert len(schema) == 2
        assert [d.name for d in schema] == ["number", "name"]
        assert schema.get("missing") is None
        assert schema.record_type is Product

    def test_new_record(self):
        """new_record builds a default instance."""
        record = build_schema(Product).new_record()
        assert record == Product()


class TestExplicitRegistration:
    """Test Schema.from_descriptors."""

    def test_registered_accessors(self):
        """Explicit descriptors work without name lookup."""
        schema = Schema.from_descriptors(Plain, [
            FieldDescriptor(
                name="n",
                kind=PrimitiveKind.INTEGER,
                getter=lambda r: r.n,
                setter=lambda r, v: setattr(r, "n", v),
            ),
        ])
        record = schema.new_record()
        schema["n"].write(record, 7)
        assert schema["n"].read(record) == 7

    def test_registration_is_validated(self):
        """Explicit registration is validated like discovery."""
        with pytest.raises(NoFieldsMarkedError):
            Schema.from_descriptors(Plain, [])
        with pytest.raises(UnserializableTypeError):
            Schema.from_descriptors(Plain, [
                FieldDescriptor(name="n", kind=None, getter=lambda r: r.n, setter=lambda r, v: None),
            ])
