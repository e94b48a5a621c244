"""Schema evolution example.

Data written with an older schema is read with a newer one: fields the
reader added are filled from their defaults, fields the reader dropped
are discarded and an int is widened to a double.
"""

import logging

from avro_json import loads, parse
from avro_json.logging import configure_logging, trace_resolution


WRITER_SCHEMA = {
    "type": "record",
    "name": "Reading",
    "namespace": "example.sensors",
    "fields": [
        {"name": "sensor", "type": "string"},
        {"name": "value", "type": "int"},
        {"name": "raw", "type": "bytes"},
    ],
}

READER_SCHEMA = {
    "type": "record",
    "name": "Reading",
    "namespace": "example.sensors",
    "fields": [
        {"name": "sensor", "type": "string"},
        {"name": "value", "type": ["null", "double"]},
        {"name": "unit", "type": "string", "default": "celsius"},
        {"name": "tags", "type": {"type": "map", "values": "string"}, "default": {}},
    ],
}


def main():
    # Resolution decisions are logged at DEBUG level by the decoder and resolver
    configure_logging(level=logging.WARNING)
    trace_resolution()

    writer = parse(WRITER_SCHEMA)
    reader = parse(READER_SCHEMA)

    text = '{"sensor": "t-1", "value": 21, "raw": "\\u0001\\u0002"}'
    reading = loads(text, writer, reader)
    print(f"Read as newer schema: {reading}")


if __name__ == "__main__":
    main()
