"""Logging for the Avro JSON codec.

All codec loggers live under the ``avro_json`` logger. A
:class:`logging.NullHandler` is attached to it at import time, so nothing
is printed until an application configures logging, either through its
own setup or with :func:`configure_logging`.

The codec only emits DEBUG records, one per schema resolution decision:

* ``avro_json.resolver``: which reader union branch a writer value was read as.
* ``avro_json.decoder``: record fields dropped or filled from defaults.
* ``avro_json.json_io``: empty input documents coerced to ``""``.

Example:
    >>> from avro_json.logging import configure_logging, trace_resolution
    >>> configure_logging(level=logging.WARNING)
    >>> trace_resolution()
"""

import logging
from typing import Optional, Tuple


AVRO_JSON_ROOT_LOGGER = "avro_json"

COMPONENTS: Tuple[str, ...] = ("decoder", "resolver", "json_io")
RESOLUTION_COMPONENTS: Tuple[str, ...] = ("decoder", "resolver")

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logging.getLogger(AVRO_JSON_ROOT_LOGGER).addHandler(logging.NullHandler())


class AvroJsonLoggerFactory:
    """Creates and manages the codec's component loggers."""

    _configured: bool = False
    _handler: Optional[logging.Handler] = None

    @classmethod
    def get_logger(cls, name: str = "") -> logging.Logger:
        """Get the logger of a codec component.

        Args:
            name: Component name, one of :data:`COMPONENTS` for the
                codec's own loggers. Empty for the ``avro_json`` logger.
        """
        if not name:
            return logging.getLogger(AVRO_JSON_ROOT_LOGGER)
        return logging.getLogger(f"{AVRO_JSON_ROOT_LOGGER}.{name}")

    @classmethod
    def configure(
        cls,
        level: int = logging.INFO,
        format_string: str = DEFAULT_FORMAT,
        handler: Optional[logging.Handler] = None,
    ) -> logging.Logger:
        """Attach a handler to the ``avro_json`` logger and set its level.

        Calling this again replaces the handler installed by the previous
        call; handlers added by the application are left alone.

        Args:
            level: Level of the ``avro_json`` logger. The handler itself
                does not filter, so component loggers set lower still print.
            format_string: Format applied to the handler.
            handler: Handler to install. A ``StreamHandler`` if omitted.

        Returns:
            The ``avro_json`` logger.
        """
        logger = cls.get_logger()
        logger.setLevel(level)

        if cls._handler is not None and cls._handler in logger.handlers:
            logger.removeHandler(cls._handler)

        if handler is None:
            handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(format_string))
        logger.addHandler(handler)

        cls._handler = handler
        cls._configured = True
        return logger

    @classmethod
    def set_level(cls, level: int, component: str = "") -> None:
        cls.get_logger(component).setLevel(level)

    @classmethod
    def trace_resolution(cls, enabled: bool = True) -> None:
        """Turn DEBUG records of schema resolution on or off.

        Only the decoder and resolver loggers are touched. When turned
        off their level is reset so they inherit from ``avro_json`` again.
        """
        level = logging.DEBUG if enabled else logging.NOTSET
        for component in RESOLUTION_COMPONENTS:
            cls.set_level(level, component)

    @classmethod
    def disable(cls) -> None:
        """Silence every codec logger."""
        cls.get_logger().disabled = True

    @classmethod
    def enable(cls) -> None:
        cls.get_logger().disabled = False

    @classmethod
    def is_configured(cls) -> bool:
        return cls._configured


def get_logger(name: str = "") -> logging.Logger:
    """Get the logger of a codec component. See :meth:`AvroJsonLoggerFactory.get_logger`."""
    return AvroJsonLoggerFactory.get_logger(name)


def configure_logging(
    level: int = logging.INFO,
    format_string: str = DEFAULT_FORMAT,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Install a handler for codec logging. See :meth:`AvroJsonLoggerFactory.configure`."""
    return AvroJsonLoggerFactory.configure(level, format_string, handler)


def set_level(level: int, component: str = "") -> None:
    """Set the level of one component logger, or of ``avro_json`` if empty."""
    AvroJsonLoggerFactory.set_level(level, component)


def trace_resolution(enabled: bool = True) -> None:
    """Turn schema resolution DEBUG records on or off."""
    AvroJsonLoggerFactory.trace_resolution(enabled)
