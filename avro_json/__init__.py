"""Avro JSON codec.

Converts between typed Python values and the JSON encoding of Avro
data, resolving differences between the writer's and the reader's
schema along the way.

Example:
    >>> from avro_json import parse, encode, decode
    >>> schema = parse(["null", "long"])
    >>> encode(schema, 5)
    {'long': 5}
    >>> decode(schema, None, {"long": 5})
    5
"""

from avro_json.config import CodecConfig, EmptyInputPolicy
from avro_json.exceptions import (
    AvroJsonException,
    TypeMismatchException,
    SchemaMismatchException,
    UnknownSchemaKindException,
    EncodingRangeException,
    RecursionLimitExceededException,
    SchemaParseException,
    ConfigurationException,
    AvroJsonSerializationException,
)
from avro_json.schema import (
    SchemaKind,
    Schema,
    Names,
    parse,
    parse_json,
    validate,
    match_schemas,
)
from avro_json.codec import (
    SchemaResolver,
    DefaultMaterializer,
    RecursiveDecoder,
    RecursiveEncoder,
    JsonDecoder,
    JsonEncoder,
    JsonDatumReader,
    JsonDatumWriter,
    decode,
    encode,
    loads,
    dumps,
)

__version__ = "0.1.0"

__all__ = [
    "CodecConfig",
    "EmptyInputPolicy",
    "AvroJsonException",
    "TypeMismatchException",
    "SchemaMismatchException",
    "UnknownSchemaKindException",
    "EncodingRangeException",
    "RecursionLimitExceededException",
    "SchemaParseException",
    "ConfigurationException",
    "AvroJsonSerializationException",
    "SchemaKind",
    "Schema",
    "Names",
    "parse",
    "parse_json",
    "validate",
    "match_schemas",
    "SchemaResolver",
    "DefaultMaterializer",
    "RecursiveDecoder",
    "RecursiveEncoder",
    "JsonDecoder",
    "JsonEncoder",
    "JsonDatumReader",
    "JsonDatumWriter",
    "decode",
    "encode",
    "loads",
    "dumps",
]
