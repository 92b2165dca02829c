"""
Serialization helpers describing a Schema as dict / JSON / YAML.

Useful for documenting the column layout of a record type or checking it
into a repository next to the CSV files it produces. The description is
one-way: getters and setters are code and cannot be restored from it.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from csvrecords.schema import FieldDescriptor, Schema


def field_to_dict(f: FieldDescriptor) -> Dict[str, Any]:
    return {"name": f.name, "attribute": f.attribute, "kind": f.kind.value}


def schema_to_dict(s: Schema) -> Dict[str, Any]:
    return {
        "record_type": s.record_type.__qualname__,
        "module": s.record_type.__module__,
        "columns": [field_to_dict(f) for f in s],
    }


def schema_to_json(s: Schema) -> str:
    return json.dumps(schema_to_dict(s), sort_keys=True)


def schema_to_yaml(s: Schema) -> str:
    # Keep column order; it is the wire order
    return yaml.safe_dump(schema_to_dict(s), sort_keys=False)
