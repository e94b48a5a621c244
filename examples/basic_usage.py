"""Basic usage example for the Avro JSON codec.

This example demonstrates how to:
- Parse a record schema
- Encode a typed value to JSON text
- Decode JSON text back into a typed value
"""

from avro_json import dumps, loads, parse


def main():
    schema = parse({
        "type": "record",
        "name": "User",
        "namespace": "example.avro",
        "fields": [
            {"name": "name", "type": "string"},
            {"name": "favorite_number", "type": ["null", "int"]},
            {"name": "avatar", "type": "bytes"},
        ],
    })

    user = {"name": "Ada", "favorite_number": 7, "avatar": b"\x89PNG"}

    # Unions are tagged with the branch name; bytes travel as one character per byte
    text = dumps(user, schema)
    print(f"Encoded: {text}")

    decoded = loads(text, schema)
    print(f"Decoded: {decoded}")
    assert decoded == user

    # A null union value is written as bare null
    print(f"Null union: {dumps({'name': 'Bob', 'favorite_number': None, 'avatar': b''}, schema)}")


if __name__ == "__main__":
    main()
