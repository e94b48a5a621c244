"""JSON text transport for the codec.

:class:`JsonDecoder` and :class:`JsonEncoder` move JSON text in and out
of file-like objects; :class:`JsonDatumReader` and
:class:`JsonDatumWriter` bind them to schemas and run the recursive
decoder and encoder over the parsed value.

Example:
    Writing and reading a record::

        import io
        from avro_json.schema import parse
        from avro_json.codec.json_io import (
            JsonDatumReader, JsonDatumWriter, JsonDecoder, JsonEncoder,
        )

        schema = parse({"type": "record", "name": "Point",
                        "fields": [{"name": "x", "type": "int"},
                                   {"name": "y", "type": "int"}]})
        buffer = io.StringIO()
        JsonDatumWriter(schema).write({"x": 1, "y": 2}, JsonEncoder(buffer))

        buffer.seek(0)
        point = JsonDatumReader(schema).read(JsonDecoder(buffer))
"""

import io
import json as json_module
from typing import Any, Optional

from avro_json.codec.decoder import RecursiveDecoder
from avro_json.codec.encoder import RecursiveEncoder
from avro_json.config import CodecConfig, EmptyInputPolicy
from avro_json.exceptions import AvroJsonSerializationException
from avro_json.logging import get_logger
from avro_json.schema.model import Schema


_logger = get_logger("json_io")

EMPTY_INPUT_LITERAL = '""'


class JsonDecoder:
    """Reads one JSON document from a file-like object.

    Args:
        reader: Object with a ``read()`` method returning text.
        config: Codec configuration; controls the empty input policy.
    """

    def __init__(self, reader: Any, config: Optional[CodecConfig] = None):
        self._reader = reader
        self._config = config or CodecConfig()

    @property
    def reader(self) -> Any:
        return self._reader

    def data(self) -> Any:
        """Read and parse the whole document.

        Returns:
            The parsed JSON value.

        Raises:
            AvroJsonSerializationException: If the text is not JSON, bytes
                input is not UTF-8, or the text is empty under the strict
                policy.
        """
        text = self._reader.read()
        if isinstance(text, bytes):
            try:
                text = text.decode("utf-8")
            except UnicodeDecodeError as e:
                raise AvroJsonSerializationException(f"JSON input is not valid UTF-8: {e}", cause=e)
        if not text:
            if self._config.empty_input == EmptyInputPolicy.STRICT:
                raise AvroJsonSerializationException("Empty JSON input")
            _logger.debug("Empty JSON input read as %s", EMPTY_INPUT_LITERAL)
            text = EMPTY_INPUT_LITERAL
        try:
            return json_module.loads(text)
        except json_module.JSONDecodeError as e:
            raise AvroJsonSerializationException(f"Failed to parse JSON: {e}", cause=e)


class JsonEncoder:
    """Writes one JSON document to a file-like object.

    Args:
        writer: Object with a ``write(str)`` method.
        config: Codec configuration; controls separators and escaping.
    """

    def __init__(self, writer: Any, config: Optional[CodecConfig] = None):
        self._writer = writer
        self._config = config or CodecConfig()

    @property
    def writer(self) -> Any:
        return self._writer

    def write(self, data: Any) -> None:
        """Print a JSON value and write it out.

        Raises:
            AvroJsonSerializationException: If the value cannot be printed.
        """
        self._writer.write(to_json_text(data, self._config))


def to_json_text(data: Any, config: Optional[CodecConfig] = None) -> str:
    """Print a JSON value as text using the configured layout."""
    config = config or CodecConfig()
    try:
        return json_module.dumps(
            data,
            separators=config.json_separators,
            ensure_ascii=config.ensure_ascii,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise AvroJsonSerializationException(f"Failed to serialize to JSON: {e}", cause=e)


class JsonDatumReader:
    """Reads typed values with a writer's and an optional reader's schema.

    Args:
        writers_schema: The schema the data was written with.
        readers_schema: The schema to read the data as. Defaults to the
            writer's schema.
        config: Codec configuration.
    """

    def __init__(
        self,
        writers_schema: Optional[Schema] = None,
        readers_schema: Optional[Schema] = None,
        config: Optional[CodecConfig] = None,
    ):
        self.writers_schema = writers_schema
        self.readers_schema = readers_schema
        self._config = config or CodecConfig()
        self._decoder = RecursiveDecoder(max_depth=self._config.max_depth)

    @property
    def config(self) -> CodecConfig:
        return self._config

    def read(self, decoder: JsonDecoder) -> Any:
        """Read one document from a :class:`JsonDecoder`."""
        return self.read_data(decoder.data())

    def read_data(self, data: Any) -> Any:
        """Decode an already parsed JSON value."""
        if self.writers_schema is None:
            raise AvroJsonSerializationException("No writer's schema set")
        return self._decoder.decode(self.writers_schema, self.readers_schema, data)


class JsonDatumWriter:
    """Writes typed values with a schema.

    Args:
        writers_schema: The schema to write values with.
        config: Codec configuration.
    """

    def __init__(self, writers_schema: Optional[Schema] = None, config: Optional[CodecConfig] = None):
        self.writers_schema = writers_schema
        self._config = config or CodecConfig()
        self._encoder = RecursiveEncoder(max_depth=self._config.max_depth)

    @property
    def config(self) -> CodecConfig:
        return self._config

    def write(self, datum: Any, encoder: JsonEncoder) -> None:
        """Encode a typed value and write it to a :class:`JsonEncoder`."""
        encoder.write(self.write_data(datum))

    def write_data(self, datum: Any) -> Any:
        """Encode a typed value to a JSON value without printing it."""
        if self.writers_schema is None:
            raise AvroJsonSerializationException("No writer's schema set")
        return self._encoder.encode(self.writers_schema, datum)


def loads(
    text: str,
    writers_schema: Schema,
    readers_schema: Optional[Schema] = None,
    config: Optional[CodecConfig] = None,
) -> Any:
    """Decode a typed value from JSON text.

    Example:
        >>> loads('{"long": 5}', parse(["null", "long"]))
        5
    """
    config = config or CodecConfig()
    data = JsonDecoder(io.StringIO(text), config).data()
    return JsonDatumReader(writers_schema, readers_schema, config).read_data(data)


def dumps(datum: Any, schema: Schema, config: Optional[CodecConfig] = None) -> str:
    """Encode a typed value to JSON text.

    Example:
        >>> dumps(b"\\x00\\xffA", parse("bytes"))
        '"\\\\u0000ÿA"'
    """
    config = config or CodecConfig()
    return to_json_text(JsonDatumWriter(schema, config).write_data(datum), config)
