"""Configuration example.

Codec settings can be built in code or loaded from YAML, either as the
whole document or from an ``avro_json`` section of a larger one.
"""

from avro_json import (
    AvroJsonSerializationException,
    CodecConfig,
    EmptyInputPolicy,
    loads,
    parse,
)


YAML_CONFIG = """
avro_json:
  max_depth: 64
  empty_input: strict
  json_separators: [", ", ": "]
  ensure_ascii: true
"""


def main():
    config = CodecConfig.from_yaml_string(YAML_CONFIG)
    print(f"Loaded: {config}")
    assert config.empty_input == EmptyInputPolicy.STRICT

    try:
        loads("", parse("string"), config=config)
    except AvroJsonSerializationException as e:
        print(f"Strict policy rejected empty input: {e}")

    # The default policy reads empty input as the empty string
    print(f"Legacy policy: {loads('', parse('string'))!r}")


if __name__ == "__main__":
    main()
