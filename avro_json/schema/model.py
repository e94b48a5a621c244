"""Schema node types.

Schema nodes are immutable once built. Named nodes (record, error,
request, enum, fixed) may be referenced from several places, including
from inside themselves, so a schema is a graph rather than a tree;
code walking it must be driven by the data, not by the schema alone.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class SchemaKind(Enum):
    """Closed set of schema node kinds."""

    NULL = "null"
    BOOLEAN = "boolean"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    BYTES = "bytes"
    STRING = "string"
    FIXED = "fixed"
    ENUM = "enum"
    ARRAY = "array"
    MAP = "map"
    UNION = "union"
    RECORD = "record"
    ERROR = "error"
    REQUEST = "request"


PRIMITIVE_KINDS = frozenset({
    SchemaKind.NULL,
    SchemaKind.BOOLEAN,
    SchemaKind.INT,
    SchemaKind.LONG,
    SchemaKind.FLOAT,
    SchemaKind.DOUBLE,
    SchemaKind.BYTES,
    SchemaKind.STRING,
})

NAMED_KINDS = frozenset({
    SchemaKind.FIXED,
    SchemaKind.ENUM,
    SchemaKind.RECORD,
    SchemaKind.ERROR,
})

RECORD_KINDS = frozenset({
    SchemaKind.RECORD,
    SchemaKind.ERROR,
    SchemaKind.REQUEST,
})

SCALAR_KINDS = PRIMITIVE_KINDS | {SchemaKind.FIXED, SchemaKind.ENUM}


class Schema:
    """Base class for all schema nodes."""

    __slots__ = ("_kind",)

    def __init__(self, kind: SchemaKind):
        self._kind = kind

    @property
    def kind(self) -> SchemaKind:
        """Get the kind tag of this node."""
        return self._kind

    @property
    def type(self) -> str:
        """Get the kind tag as its schema-language string."""
        return self._kind.value

    def to_json(self, names: Optional[set] = None) -> Any:
        """Return the JSON-like definition of this node."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_json()!r})"


class PrimitiveSchema(Schema):
    """Schema node for null, boolean, int, long, float, double, bytes and string."""

    __slots__ = ()

    def __init__(self, kind: SchemaKind):
        if kind not in PRIMITIVE_KINDS:
            raise ValueError(f"{kind} is not a primitive kind")
        super().__init__(kind)

    def to_json(self, names: Optional[set] = None) -> Any:
        return self.type

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PrimitiveSchema) and self._kind == other._kind

    def __hash__(self) -> int:
        return hash(self._kind)


class NamedSchema(Schema):
    """Base class for schema nodes identified by a full name."""

    __slots__ = ("_name", "_namespace")

    def __init__(self, kind: SchemaKind, name: str, namespace: Optional[str] = None):
        super().__init__(kind)
        if "." in name:
            namespace, _, name = name.rpartition(".")
        self._name = name
        self._namespace = namespace or None

    @property
    def name(self) -> str:
        """Get the short name."""
        return self._name

    @property
    def namespace(self) -> Optional[str]:
        """Get the namespace, if any."""
        return self._namespace

    @property
    def fullname(self) -> str:
        """Get the namespace-qualified name."""
        if self._namespace:
            return f"{self._namespace}.{self._name}"
        return self._name

    def _reference(self, names: Optional[set]) -> Optional[str]:
        if names is None:
            return None
        if self.fullname in names:
            return self.fullname
        names.add(self.fullname)
        return None


class FixedSchema(NamedSchema):
    """Schema node for a fixed-size byte sequence."""

    __slots__ = ("_size",)

    def __init__(self, name: str, size: int, namespace: Optional[str] = None):
        super().__init__(SchemaKind.FIXED, name, namespace)
        self._size = size

    @property
    def size(self) -> int:
        """Get the declared byte length."""
        return self._size

    def to_json(self, names: Optional[set] = None) -> Any:
        ref = self._reference(names)
        if ref:
            return ref
        return {"type": "fixed", "name": self.fullname, "size": self._size}


class EnumSchema(NamedSchema):
    """Schema node for an enumeration of symbols."""

    __slots__ = ("_symbols", "_default")

    def __init__(
        self,
        name: str,
        symbols: List[str],
        namespace: Optional[str] = None,
        default: Optional[str] = None,
    ):
        super().__init__(SchemaKind.ENUM, name, namespace)
        self._symbols = tuple(symbols)
        self._default = default

    @property
    def symbols(self) -> Tuple[str, ...]:
        """Get the declared symbols in order."""
        return self._symbols

    @property
    def default(self) -> Optional[str]:
        """Get the fallback symbol, if declared."""
        return self._default

    def to_json(self, names: Optional[set] = None) -> Any:
        ref = self._reference(names)
        if ref:
            return ref
        result = {"type": "enum", "name": self.fullname, "symbols": list(self._symbols)}
        if self._default is not None:
            result["default"] = self._default
        return result


class ArraySchema(Schema):
    """Schema node for an ordered sequence of items."""

    __slots__ = ("_items",)

    def __init__(self, items: Schema):
        super().__init__(SchemaKind.ARRAY)
        self._items = items

    @property
    def items(self) -> Schema:
        """Get the item schema."""
        return self._items

    def to_json(self, names: Optional[set] = None) -> Any:
        return {"type": "array", "items": self._items.to_json(names)}


class MapSchema(Schema):
    """Schema node for a string-keyed mapping."""

    __slots__ = ("_values",)

    def __init__(self, values: Schema):
        super().__init__(SchemaKind.MAP)
        self._values = values

    @property
    def values(self) -> Schema:
        """Get the value schema."""
        return self._values

    def to_json(self, names: Optional[set] = None) -> Any:
        return {"type": "map", "values": self._values.to_json(names)}


class UnionSchema(Schema):
    """Schema node for a union of branches, in declaration order."""

    __slots__ = ("_schemas",)

    def __init__(self, schemas: List[Schema]):
        super().__init__(SchemaKind.UNION)
        self._schemas = tuple(schemas)

    @property
    def schemas(self) -> Tuple[Schema, ...]:
        """Get the branch schemas in declaration order."""
        return self._schemas

    def to_json(self, names: Optional[set] = None) -> Any:
        return [s.to_json(names) for s in self._schemas]


@dataclass(frozen=True)
class Field:
    """A record field: name, type and optional default literal."""

    name: str
    type: Schema
    index: int
    default: Any = None
    has_default: bool = False
    doc: Optional[str] = None

    def to_json(self, names: Optional[set] = None) -> Dict[str, Any]:
        result = {"name": self.name, "type": self.type.to_json(names)}
        if self.has_default:
            result["default"] = self.default
        if self.doc is not None:
            result["doc"] = self.doc
        return result


class RecordSchema(NamedSchema):
    """Schema node for records, errors and protocol requests.

    Fields are attached after construction so that a record can refer
    to itself; see :meth:`set_fields`.
    """

    __slots__ = ("_fields", "_fields_dict")

    def __init__(
        self,
        name: str,
        namespace: Optional[str] = None,
        fields: Optional[List[Field]] = None,
        kind: SchemaKind = SchemaKind.RECORD,
    ):
        if kind not in RECORD_KINDS:
            raise ValueError(f"{kind} is not a record kind")
        super().__init__(kind, name, namespace)
        self._fields: Tuple[Field, ...] = ()
        self._fields_dict: Dict[str, Field] = {}
        if fields is not None:
            self.set_fields(fields)

    def set_fields(self, fields: List[Field]) -> None:
        """Attach the field list. Only allowed once."""
        if self._fields:
            raise ValueError(f"Fields of {self.fullname} are already set")
        self._fields = tuple(fields)
        self._fields_dict = {f.name: f for f in self._fields}

    @property
    def fields(self) -> Tuple[Field, ...]:
        """Get the fields in declaration order."""
        return self._fields

    @property
    def fields_dict(self) -> Dict[str, Field]:
        """Get the fields keyed by name."""
        return dict(self._fields_dict)

    def field(self, name: str) -> Optional[Field]:
        """Get a field by name."""
        return self._fields_dict.get(name)

    def to_json(self, names: Optional[set] = None) -> Any:
        if names is None:
            names = set()
        if self._kind == SchemaKind.REQUEST:
            return [f.to_json(names) for f in self._fields]
        ref = self._reference(names)
        if ref:
            return ref
        return {
            "type": self.type,
            "name": self.fullname,
            "fields": [f.to_json(names) for f in self._fields],
        }
