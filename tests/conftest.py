"""Shared pytest fixtures for codec tests."""

import logging

import pytest

from avro_json.config import CodecConfig, EmptyInputPolicy
from avro_json.logging import AVRO_JSON_ROOT_LOGGER, COMPONENTS
from avro_json.schema import parse


@pytest.fixture
def default_config():
    """Create a default CodecConfig."""
    return CodecConfig()


@pytest.fixture
def strict_config():
    """Create a CodecConfig that rejects empty input."""
    return CodecConfig(empty_input=EmptyInputPolicy.STRICT)


@pytest.fixture
def user_schema():
    """Record schema with a nullable field."""
    return parse({
        "type": "record",
        "name": "User",
        "namespace": "example.avro",
        "fields": [
            {"name": "name", "type": "string"},
            {"name": "favorite_number", "type": ["null", "int"]},
        ],
    })


@pytest.fixture
def user_schema_v2():
    """Reader's version of the user schema with an added field."""
    return parse({
        "type": "record",
        "name": "User",
        "namespace": "example.avro",
        "fields": [
            {"name": "name", "type": "string"},
            {"name": "favorite_number", "type": ["null", "int"]},
            {"name": "age", "type": "int", "default": 0},
            {"name": "nickname", "type": ["null", "string"]},
        ],
    })


@pytest.fixture
def linked_list_schema():
    """Self-referencing record schema."""
    return parse({
        "type": "record",
        "name": "LongList",
        "fields": [
            {"name": "value", "type": "long"},
            {"name": "next", "type": ["null", "LongList"]},
        ],
    })


@pytest.fixture(autouse=True)
def reset_logging():
    """Leave the codec logger as it was found."""
    logger = logging.getLogger(AVRO_JSON_ROOT_LOGGER)
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for component in COMPONENTS:
        logging.getLogger(f"{AVRO_JSON_ROOT_LOGGER}.{component}").setLevel(logging.NOTSET)
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.setLevel(level)
    logger.disabled = False
