"""Schema-driven JSON codec: primitives, resolution, defaults, decoder and encoder."""

from avro_json.codec.resolver import SchemaResolver, branch_discriminant
from avro_json.codec.defaults import DefaultMaterializer
from avro_json.codec.decoder import RecursiveDecoder, decode
from avro_json.codec.encoder import RecursiveEncoder, encode
from avro_json.codec.json_io import (
    JsonDecoder,
    JsonEncoder,
    JsonDatumReader,
    JsonDatumWriter,
    loads,
    dumps,
)

__all__ = [
    "SchemaResolver",
    "branch_discriminant",
    "DefaultMaterializer",
    "RecursiveDecoder",
    "decode",
    "RecursiveEncoder",
    "encode",
    "JsonDecoder",
    "JsonEncoder",
    "JsonDatumReader",
    "JsonDatumWriter",
    "loads",
    "dumps",
]
