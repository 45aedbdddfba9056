"""Schema-driven (de)serialization between JSON trees and models.

Models are declared as Pydantic classes, but decoding does not go through
Pydantic's validators. Each model is turned into an explicit ``Schema``, an
ordered list of ``FieldSpec`` entries, and ``decode()`` walks that list:

    - a required field that is missing raises ``MissingFieldError``
    - an optional field that is missing keeps its declared default, which is
      ``ABSENT`` for everything except booleans that opt into a real default
    - a field of the wrong JSON shape raises ``TypeMismatchError``
    - strings are never coerced, numbers accept both int and float on the wire
    - keys the schema doesn't know about are ignored

``encode()`` is the inverse and omits every field that is ``ABSENT``.

Example:
    >>> schema = schema_for(Repository)
    >>> repo = decode(schema, {"id": 1, "name": "x", ...})
    >>> encode(repo)
    {'id': 1, 'name': 'x', ...}

"""

from __future__ import annotations

import logging
import threading
import types
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel

from ghkit.exceptions import MissingFieldError, TypeMismatchError

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


class Absent:
    """Type of the ``ABSENT`` marker: a field that was not sent at all."""

    _instance: Absent | None = None

    def __new__(cls) -> Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT = Absent()

# An optional field: may be missing (ABSENT) or sent as null (None).
Maybe = Union[T, None, Absent]


def is_absent(value: object) -> bool:
    """Check whether a decoded field was left out of the wire object."""
    return value is ABSENT


# =============================================================================
# Schema
# =============================================================================


@dataclass(frozen=True)
class FieldSpec:
    """How one model attribute maps onto the wire.

    Attributes:
        name: Attribute name on the model.
        wire_name: Key in the JSON object.
        type: Value type with ``None`` and ``Absent`` stripped off.
        required: Whether the key must be present.
        nullable: Whether ``null`` is an accepted value.

    """

    name: str
    wire_name: str
    type: Any
    required: bool
    nullable: bool


@dataclass(frozen=True)
class Schema:
    """Ordered field list for one model type."""

    type_id: str
    model: type[BaseModel]
    fields: tuple[FieldSpec, ...]

    def field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)


def build_schema(model: type[BaseModel]) -> Schema:
    """Derive the explicit schema of a Pydantic model.

    Raises:
        ValueError: If two fields share a wire name.
        TypeError: If a field type is not supported by the codec, or an
            optional non-boolean field defaults to something other than ``ABSENT``.

    """
    specs: list[FieldSpec] = []
    seen: set[str] = set()

    for name, info in model.model_fields.items():
        wire_name = info.alias or name
        if wire_name in seen:
            raise ValueError(f"{model.__name__}: duplicate wire name '{wire_name}'")
        seen.add(wire_name)

        value_type, nullable = _split_optional(info.annotation)
        _check_supported(model, name, value_type)
        if not info.is_required() and value_type is not bool:
            if info.default_factory is not None or info.default is not ABSENT:
                raise TypeError(
                    f"{model.__name__}.{name}: optional field must default to ABSENT"
                )
        specs.append(
            FieldSpec(
                name=name,
                wire_name=wire_name,
                type=value_type,
                required=info.is_required(),
                nullable=nullable,
            )
        )

    return Schema(type_id=model.__name__, model=model, fields=tuple(specs))


def _split_optional(annotation: Any) -> tuple[Any, bool]:
    """Strip ``None`` and ``Absent`` out of a union annotation."""
    if get_origin(annotation) not in (Union, types.UnionType):
        return annotation, False

    args = get_args(annotation)
    rest = [a for a in args if a is not type(None) and a is not Absent]
    nullable = type(None) in args
    if len(rest) != 1:
        raise TypeError(f"Unsupported union type: {annotation!r}")
    return rest[0], nullable


def _check_supported(model: type[BaseModel], name: str, tp: Any) -> None:
    if tp is Any or tp in (str, int, float, bool):
        return
    origin = get_origin(tp)
    if origin is list:
        _check_supported(model, name, _arg(tp, 0))
        return
    if origin is dict:
        _check_supported(model, name, _arg(tp, 1))
        return
    if isinstance(tp, type) and issubclass(tp, BaseModel):
        return
    raise TypeError(f"{model.__name__}.{name}: unsupported field type {tp!r}")


def _arg(tp: Any, index: int) -> Any:
    args = get_args(tp)
    return args[index] if len(args) > index else Any


class SchemaRegistry:
    """Mapping from type identifier to model, with lazily built schemas.

    Schemas are built on first lookup so that models may refer to classes
    declared later in the same module.
    """

    __slots__ = ("_lock", "_models", "_schemas")

    def __init__(self) -> None:
        self._models: dict[str, type[BaseModel]] = {}
        self._schemas: dict[type[BaseModel], Schema] = {}
        self._lock = threading.Lock()

    def register(self, model: type[BaseModel]) -> None:
        """Register a model under its class name."""
        with self._lock:
            self._models[model.__name__] = model
            self._schemas.pop(model, None)

    def lookup(self, type_id: str) -> Schema:
        """Return the schema registered under ``type_id``.

        Raises:
            LookupError: If no model is registered under that name.

        """
        try:
            model = self._models[type_id]
        except KeyError:
            raise LookupError(f"No schema registered for '{type_id}'") from None
        return self.schema_for(model)

    def schema_for(self, model: type[BaseModel]) -> Schema:
        """Return (building if needed) the schema of a model class."""
        with self._lock:
            schema = self._schemas.get(model)
        if schema is not None:
            return schema

        schema = build_schema(model)
        with self._lock:
            self._schemas[model] = schema
        logger.debug("Built schema for %s (%d fields)", schema.type_id, len(schema.fields))
        return schema

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._models

    def __len__(self) -> int:
        return len(self._models)


registry = SchemaRegistry()


def schema_for(model: type[BaseModel]) -> Schema:
    """Return the schema for a model class from the default registry."""
    return registry.schema_for(model)


# =============================================================================
# Decoding
# =============================================================================


def decode(schema: Schema, tree: Any, where: str = "") -> Any:
    """Decode a JSON object into an instance of ``schema.model``.

    Args:
        schema: Schema of the target model.
        tree: Parsed JSON value; must be an object.
        where: Field path prefix used in error messages.

    Returns:
        The decoded model instance.

    Raises:
        MissingFieldError: A required field is missing.
        TypeMismatchError: A value has the wrong JSON shape.

    """
    if not isinstance(tree, Mapping):
        raise TypeMismatchError(where, "object", json_type_name(tree))

    values: dict[str, Any] = {}
    for spec in schema.fields:
        path = f"{where}.{spec.wire_name}" if where else spec.wire_name
        if spec.wire_name not in tree:
            if spec.required:
                raise MissingFieldError(path)
            continue

        raw = tree[spec.wire_name]
        if raw is None:
            if not spec.nullable:
                raise TypeMismatchError(path, type_name(spec.type), "null")
            values[spec.name] = None
            continue

        values[spec.name] = _decode_value(spec.type, raw, path)

    return schema.model.model_construct(_fields_set=set(values), **values)


def decode_list(schema: Schema, tree: Any, where: str = "") -> list[Any]:
    """Decode a JSON array of objects, failing on the first bad element."""
    if not isinstance(tree, list):
        raise TypeMismatchError(where, "array", json_type_name(tree))
    return [decode(schema, item, f"{where}[{i}]") for i, item in enumerate(tree)]


def _decode_value(tp: Any, value: Any, path: str) -> Any:
    if tp is Any:
        return value

    if tp is str:
        if not isinstance(value, str):
            raise TypeMismatchError(path, "string", json_type_name(value))
        return value

    if tp is bool:
        if not isinstance(value, bool):
            raise TypeMismatchError(path, "boolean", json_type_name(value))
        return value

    if tp is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        raise TypeMismatchError(path, "integer", json_type_name(value))

    if tp is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        raise TypeMismatchError(path, "number", json_type_name(value))

    origin = get_origin(tp)
    if origin is list:
        if not isinstance(value, list):
            raise TypeMismatchError(path, "array", json_type_name(value))
        item_type = _arg(tp, 0)
        return [_decode_nullable(item_type, item, f"{path}[{i}]") for i, item in enumerate(value)]

    if origin is dict:
        if not isinstance(value, Mapping):
            raise TypeMismatchError(path, "object", json_type_name(value))
        value_type = _arg(tp, 1)
        return {
            key: _decode_nullable(value_type, item, f"{path}.{key}") for key, item in value.items()
        }

    if isinstance(tp, type) and issubclass(tp, BaseModel):
        return decode(schema_for(tp), value, path)

    raise TypeError(f"Unsupported field type {tp!r}")


def _decode_nullable(tp: Any, value: Any, path: str) -> Any:
    if value is None:
        if tp is Any:
            return None
        raise TypeMismatchError(path, type_name(tp), "null")
    return _decode_value(tp, value, path)


# =============================================================================
# Encoding
# =============================================================================


def encode(value: Any) -> Any:
    """Turn a model (or a structure containing models) into a JSON tree.

    ``ABSENT`` fields are omitted; fields are emitted in declaration order.
    """
    if isinstance(value, BaseModel):
        schema = schema_for(type(value))
        tree: dict[str, Any] = {}
        for spec in schema.fields:
            field_value = getattr(value, spec.name, ABSENT)
            if field_value is ABSENT:
                continue
            tree[spec.wire_name] = encode(field_value)
        return tree

    if isinstance(value, Mapping):
        return {key: encode(item) for key, item in value.items() if item is not ABSENT}

    if isinstance(value, (list, tuple)):
        return [encode(item) for item in value]

    return value


# =============================================================================
# Type names for error messages
# =============================================================================


def json_type_name(value: Any) -> str:
    """Return the JSON name of a parsed value's type."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def type_name(tp: Any) -> str:
    """Return the JSON name expected for a declared field type."""
    names = {str: "string", int: "integer", float: "number", bool: "boolean"}
    if tp in names:
        return names[tp]
    origin = get_origin(tp)
    if origin is list:
        return "array"
    if origin is dict or (isinstance(tp, type) and issubclass(tp, BaseModel)):
        return "object"
    return "any"
