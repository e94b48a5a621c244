"""Build schema nodes from JSON-like schema definitions.

Definitions are the already-decoded form of the schema language: a
string naming a primitive or a previously defined type, a list for a
union, or a dict for everything else. Named types are registered in a
:class:`Names` table as soon as they are created, before their children
are parsed, so a record can reference itself by name.

Example:
    >>> node = parse({
    ...     "type": "record",
    ...     "name": "LongList",
    ...     "fields": [
    ...         {"name": "value", "type": "long"},
    ...         {"name": "next", "type": ["null", "LongList"]},
    ...     ],
    ... })
    >>> node.fields[1].type.schemas[1] is node
    True
"""

import json as json_module
from typing import Any, Dict, List, Optional

from avro_json.exceptions import SchemaParseException
from avro_json.schema.model import (
    ArraySchema,
    EnumSchema,
    Field,
    FixedSchema,
    MapSchema,
    NamedSchema,
    PrimitiveSchema,
    RecordSchema,
    Schema,
    SchemaKind,
    UnionSchema,
    PRIMITIVE_KINDS,
)


_PRIMITIVES: Dict[str, PrimitiveSchema] = {
    kind.value: PrimitiveSchema(kind) for kind in PRIMITIVE_KINDS
}


class Names:
    """Registry of named types, keyed by full name."""

    def __init__(self, default_namespace: Optional[str] = None):
        self._names: Dict[str, NamedSchema] = {}
        self.default_namespace = default_namespace

    def fullname(self, name: str, namespace: Optional[str] = None) -> str:
        """Qualify a name with the given or default namespace."""
        if "." in name:
            return name
        namespace = namespace if namespace is not None else self.default_namespace
        if namespace:
            return f"{namespace}.{name}"
        return name

    def get(self, name: str, namespace: Optional[str] = None) -> Optional[NamedSchema]:
        """Look up a named type, trying the qualified name first."""
        schema = self._names.get(self.fullname(name, namespace))
        if schema is None:
            schema = self._names.get(name)
        return schema

    def add(self, schema: NamedSchema) -> None:
        """Register a named type; duplicates are rejected."""
        if schema.fullname in self._names:
            raise SchemaParseException(f"The name {schema.fullname!r} is already in use")
        if schema.name in _PRIMITIVES:
            raise SchemaParseException(f"{schema.fullname!r} is a reserved type name")
        self._names[schema.fullname] = schema

    def __contains__(self, fullname: str) -> bool:
        return fullname in self._names

    def __len__(self) -> int:
        return len(self._names)


def parse(definition: Any, names: Optional[Names] = None) -> Schema:
    """Build a schema node from a JSON-like definition.

    Args:
        definition: A string, list or dict in schema-language form.
        names: Registry of already known named types. A fresh one is
            used when omitted.

    Returns:
        The root schema node.

    Raises:
        SchemaParseException: If the definition is not a valid schema.
    """
    if names is None:
        names = Names()
    return _parse(definition, names, names.default_namespace)


def parse_json(text: str, names: Optional[Names] = None) -> Schema:
    """Parse a schema from its JSON text.

    Raises:
        SchemaParseException: If the text is not JSON or not a valid schema.
    """
    try:
        definition = json_module.loads(text)
    except json_module.JSONDecodeError as e:
        raise SchemaParseException(f"Schema is not valid JSON: {e}", cause=e)
    return parse(definition, names)


def _parse(definition: Any, names: Names, namespace: Optional[str]) -> Schema:
    if isinstance(definition, str):
        return _parse_reference(definition, names, namespace)
    if isinstance(definition, list):
        return _parse_union(definition, names, namespace)
    if isinstance(definition, dict):
        return _parse_complex(definition, names, namespace)
    raise SchemaParseException(f"Could not make an Avro schema from {definition!r}")


def _parse_reference(name: str, names: Names, namespace: Optional[str]) -> Schema:
    if name in _PRIMITIVES:
        return _PRIMITIVES[name]
    schema = names.get(name, namespace)
    if schema is None:
        raise SchemaParseException(f"Unknown named type: {name!r}")
    return schema


def _parse_union(branches: List[Any], names: Names, namespace: Optional[str]) -> UnionSchema:
    schemas = []
    seen = set()
    for branch in branches:
        schema = _parse(branch, names, namespace)
        if schema.kind == SchemaKind.UNION:
            raise SchemaParseException("Unions may not immediately contain other unions")
        key = schema.fullname if isinstance(schema, NamedSchema) else schema.type
        if key in seen:
            raise SchemaParseException(f"Duplicate type in union: {key}")
        seen.add(key)
        schemas.append(schema)
    return UnionSchema(schemas)


def _parse_complex(definition: Dict[str, Any], names: Names, namespace: Optional[str]) -> Schema:
    type_name = definition.get("type")
    if type_name is None:
        raise SchemaParseException(f"No \"type\" property: {definition!r}")

    if not isinstance(type_name, str) or type_name not in _COMPLEX_PARSERS:
        if isinstance(type_name, str) and type_name in _PRIMITIVES:
            return _PRIMITIVES[type_name]
        # {"type": <definition>} wraps another schema
        return _parse(type_name, names, namespace)

    return _COMPLEX_PARSERS[type_name](definition, names, namespace)


def _require_name(definition: Dict[str, Any]) -> str:
    name = definition.get("name")
    if not isinstance(name, str) or not name:
        raise SchemaParseException(f"Named type requires a \"name\": {definition!r}")
    return name


def _named_namespace(definition: Dict[str, Any], namespace: Optional[str]) -> Optional[str]:
    name = _require_name(definition)
    if "." in name:
        return name.rpartition(".")[0]
    return definition.get("namespace", namespace)


def _parse_fixed(definition: Dict[str, Any], names: Names, namespace: Optional[str]) -> FixedSchema:
    size = definition.get("size")
    if isinstance(size, bool) or not isinstance(size, int) or size < 0:
        raise SchemaParseException(f"Fixed schema requires a non-negative \"size\": {definition!r}")
    schema = FixedSchema(
        _require_name(definition), size, _named_namespace(definition, namespace)
    )
    names.add(schema)
    return schema


def _parse_enum(definition: Dict[str, Any], names: Names, namespace: Optional[str]) -> EnumSchema:
    symbols = definition.get("symbols")
    if not isinstance(symbols, list) or not all(isinstance(s, str) for s in symbols):
        raise SchemaParseException(f"Enum schema requires a list of \"symbols\": {definition!r}")
    if len(set(symbols)) != len(symbols):
        raise SchemaParseException(f"Duplicate symbol in enum: {symbols!r}")
    default = definition.get("default")
    if default is not None and default not in symbols:
        raise SchemaParseException(f"Enum default {default!r} is not one of {symbols!r}")
    schema = EnumSchema(
        _require_name(definition),
        symbols,
        _named_namespace(definition, namespace),
        default,
    )
    names.add(schema)
    return schema


def _parse_array(definition: Dict[str, Any], names: Names, namespace: Optional[str]) -> ArraySchema:
    if "items" not in definition:
        raise SchemaParseException(f"Array schema requires \"items\": {definition!r}")
    return ArraySchema(_parse(definition["items"], names, namespace))


def _parse_map(definition: Dict[str, Any], names: Names, namespace: Optional[str]) -> MapSchema:
    if "values" not in definition:
        raise SchemaParseException(f"Map schema requires \"values\": {definition!r}")
    return MapSchema(_parse(definition["values"], names, namespace))


def _parse_record(definition: Dict[str, Any], names: Names, namespace: Optional[str]) -> RecordSchema:
    kind = SchemaKind(definition["type"])
    field_defs = definition.get("fields")
    if not isinstance(field_defs, list):
        raise SchemaParseException(f"Record schema requires a list of \"fields\": {definition!r}")

    if kind == SchemaKind.REQUEST:
        schema = RecordSchema(definition.get("name") or "request", kind=kind)
        field_namespace = namespace
    else:
        field_namespace = _named_namespace(definition, namespace)
        schema = RecordSchema(_require_name(definition), field_namespace, kind=kind)
        names.add(schema)

    fields = []
    for index, field_def in enumerate(field_defs):
        fields.append(_parse_field(field_def, index, names, field_namespace))
    if len({f.name for f in fields}) != len(fields):
        raise SchemaParseException(f"Duplicate field name in {schema.fullname}")
    schema.set_fields(fields)
    return schema


def _parse_field(definition: Any, index: int, names: Names, namespace: Optional[str]) -> Field:
    if not isinstance(definition, dict):
        raise SchemaParseException(f"Field definition must be an object: {definition!r}")
    name = definition.get("name")
    if not isinstance(name, str) or not name:
        raise SchemaParseException(f"Field requires a \"name\": {definition!r}")
    if "type" not in definition:
        raise SchemaParseException(f"Field {name!r} requires a \"type\"")
    return Field(
        name=name,
        type=_parse(definition["type"], names, namespace),
        index=index,
        default=definition.get("default"),
        has_default="default" in definition,
        doc=definition.get("doc"),
    )


_COMPLEX_PARSERS = {
    "fixed": _parse_fixed,
    "enum": _parse_enum,
    "array": _parse_array,
    "map": _parse_map,
    "record": _parse_record,
    "error": _parse_record,
    "request": _parse_record,
}
