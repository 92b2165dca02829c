"""
Schema Descriptor: which fields of a record type become CSV columns.

A Schema is built once per record type and never changes afterwards.
Building one does three things:

    1. Discovery
        Walk the declared fields (base classes first, then declaration
        order). Keep only fields carrying a CsvField marker. For a marked
        field `color` look for an accessor pair on the type:
            getColor / setColor     (first character upper-cased)
            get_color / set_color
        A marked field without a complete pair is dropped silently.

    2. Kind resolution
        The marker's explicit kind, or the kind inferred from the
        annotation (str, bool, int, float).

    3. Validation, in this order
        - every column has a supported kind      -> UnserializableTypeError
        - at least one column exists             -> NoFieldsMarkedError
        - the type is constructible with no args -> MissingConstructorError

INVARIANTS:
    - Column order is registration order and is the order of every
      serialized line.
    - A Schema that exists is valid. Nothing is checked again at use time.
"""

from __future__ import annotations

import dataclasses
import inspect
from dataclasses import dataclass
from types import MappingProxyType
from typing import Annotated, Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple
from typing import get_args, get_origin, get_type_hints

from csvrecords.errors import MissingConstructorError, NoFieldsMarkedError, UnserializableTypeError
from csvrecords.kinds import PrimitiveKind, accepts_type, infer_kind
from csvrecords.markers import METADATA_KEY, CsvField

Getter = Callable[[Any], Any]
Setter = Callable[[Any, Any], None]


@dataclass(frozen=True)
class FieldDescriptor:
    """
    One participating field.

    Properties:
        name: Column name (marker override or the field's own name)
        kind: Primitive kind of the stored value
        getter: Reads the current value from a record
        setter: Assigns a value to a record
        attribute: Field name on the record type
        declared_type: Annotation the kind was resolved from (diagnostics only)
    """

    name: str
    kind: PrimitiveKind
    getter: Getter
    setter: Setter
    attribute: Optional[str] = None
    declared_type: Any = None

    def read(self, record: Any) -> Any:
        return self.getter(record)

    def write(self, record: Any, value: Any) -> None:
        self.setter(record, value)


class Schema:
    """
    Immutable, ordered mapping from column name to FieldDescriptor.

    Use build_schema() for marker discovery or Schema.from_descriptors()
    to register accessors explicitly. Both paths validate.
    """

    __slots__ = ("_record_type", "_fields")

    def __init__(self, record_type: type, descriptors: Iterable[FieldDescriptor]):
        fields: Dict[str, FieldDescriptor] = {}
        for descriptor in descriptors:
            fields[descriptor.name] = descriptor
        _validate(record_type, fields)
        self._record_type = record_type
        self._fields: Mapping[str, FieldDescriptor] = MappingProxyType(fields)

    @classmethod
    def from_descriptors(cls, record_type: type, descriptors: Iterable[FieldDescriptor]) -> Schema:
        return cls(record_type, descriptors)

    @property
    def record_type(self) -> type:
        return self._record_type

    @property
    def columns(self) -> Tuple[str, ...]:
        """Column names in registration order."""
        return tuple(self._fields)

    @property
    def fields(self) -> Mapping[str, FieldDescriptor]:
        return self._fields

    def get(self, name: str) -> Optional[FieldDescriptor]:
        return self._fields.get(name)

    def new_record(self) -> Any:
        """Produce a blank instance of the record type."""
        return self._record_type()

    def __getitem__(self, name: str) -> FieldDescriptor:
        return self._fields[name]

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Schema({self._record_type.__name__}, columns={list(self._fields)})"


def accessor_names(field_name: str) -> List[Tuple[str, str]]:
    """
    Candidate (getter, setter) method names for a field, in lookup order.

    Example:
        accessor_names("color") -> [("getColor", "setColor"), ("get_color", "set_color")]
    """
    capitalized = field_name[:1].upper() + field_name[1:]
    return [
        ("get" + capitalized, "set" + capitalized),
        ("get_" + field_name, "set_" + field_name),
    ]


def _resolve_accessors(record_type: type, field_name: str) -> Optional[Tuple[Getter, Setter]]:
    for getter_name, setter_name in accessor_names(field_name):
        if not callable(getattr(record_type, getter_name, None)):
            continue
        if not callable(getattr(record_type, setter_name, None)):
            continue

        def getter(record: Any, _name: str = getter_name) -> Any:
            return getattr(record, _name)()

        def setter(record: Any, value: Any, _name: str = setter_name) -> None:
            getattr(record, _name)(value)

        return getter, setter
    return None


def _find_marker(record_type: type, name: str, hint: Any) -> Tuple[Optional[CsvField], Any]:
    """Return (marker, bare type) for one annotated attribute."""
    marker: Optional[CsvField] = None
    bare = hint

    if get_origin(hint) is Annotated:
        bare = get_args(hint)[0]
        for extra in hint.__metadata__:
            if isinstance(extra, CsvField):
                marker = extra
                break

    if dataclasses.is_dataclass(record_type):
        for f in dataclasses.fields(record_type):
            if f.name == name and isinstance(f.metadata.get(METADATA_KEY), CsvField):
                marker = f.metadata[METADATA_KEY]
                break

    return marker, bare


def _resolve_kind(marker: CsvField, declared_type: Any) -> Optional[PrimitiveKind]:
    if marker.kind is not None:
        return marker.kind if accepts_type(marker.kind, declared_type) else None
    return infer_kind(declared_type)


def discover_fields(record_type: type) -> List[FieldDescriptor]:
    """
    Find every marked field with a complete accessor pair.

    Kinds are resolved but not validated: an unsupported field is returned
    with kind None so validation can name it.
    """
    hints = get_type_hints(record_type, include_extras=True)
    descriptors = []

    for name, hint in hints.items():
        marker, declared_type = _find_marker(record_type, name, hint)
        if marker is None:
            continue

        accessors = _resolve_accessors(record_type, name)
        if accessors is None:
            continue

        getter, setter = accessors
        descriptors.append(FieldDescriptor(
            name=marker.column_name(name),
            kind=_resolve_kind(marker, declared_type),
            getter=getter,
            setter=setter,
            attribute=name,
            declared_type=declared_type,
        ))

    return descriptors


def _validate(record_type: type, fields: Mapping[str, FieldDescriptor]) -> None:
    for descriptor in fields.values():
        if not isinstance(descriptor.kind, PrimitiveKind):
            raise UnserializableTypeError(descriptor.attribute or descriptor.name, descriptor.declared_type)

    if not fields:
        raise NoFieldsMarkedError(record_type.__name__)

    if not _is_constructible(record_type):
        raise MissingConstructorError(record_type.__name__)


def _is_constructible(record_type: type) -> bool:
    if inspect.isabstract(record_type):
        return False
    try:
        signature = inspect.signature(record_type)
    except (TypeError, ValueError):
        # No introspectable signature (some builtins); construction is tried at use time
        return True
    try:
        signature.bind()
    except TypeError:
        return False
    return True


def build_schema(record_type: type) -> Schema:
    """
    Build and validate the schema of a record type.

    Args:
        record_type: Class whose marked fields become columns

    Returns:
        Validated, immutable Schema

    Raises:
        UnserializableTypeError: A marked field has an unsupported type
        NoFieldsMarkedError: No usable marked field was found
        MissingConstructorError: The type needs constructor arguments
    """
    return Schema(record_type, discover_fields(record_type))


__all__ = [
    "FieldDescriptor",
    "Schema",
    "accessor_names",
    "discover_fields",
    "build_schema",
]
