"""Writer/reader schema resolution and union branch selection."""

from typing import Any, Callable, Optional

from avro_json.exceptions import SchemaMismatchException
from avro_json.logging import get_logger
from avro_json.schema.model import NAMED_KINDS, Schema, SchemaKind
from avro_json.schema.validation import match_schemas


_logger = get_logger("resolver")

SchemaMatcher = Callable[[Schema, Schema], bool]


def branch_discriminant(schema: Schema) -> str:
    """Get the key that tags a union branch in JSON.

    Named kinds are tagged by full name, everything else by kind.
    """
    if schema.kind in NAMED_KINDS:
        return schema.fullname
    return schema.type


class SchemaResolver:
    """Reconciles a writer's schema with a reader's schema.

    The compatibility predicate is injected so that callers can supply
    a stricter or looser notion of compatibility; by default
    :func:`avro_json.schema.match_schemas` is used.

    Args:
        match: Predicate deciding whether a writer node can be read as a
            reader node.

    Example:
        >>> resolver = SchemaResolver()
        >>> branch = resolver.resolve_reader_for_union(parse("long"), parse(["null", "long"]))
        >>> branch.type
        'long'
    """

    def __init__(self, match: Optional[SchemaMatcher] = None):
        self._match = match or match_schemas

    def schemas_compatible(self, writers_schema: Schema, readers_schema: Schema) -> bool:
        """Check whether the writer's node can be read as the reader's node."""
        return self._match(writers_schema, readers_schema)

    def ensure_compatible(self, writers_schema: Schema, readers_schema: Schema) -> None:
        """Raise unless the writer's node can be read as the reader's node.

        Raises:
            SchemaMismatchException: If the schemas are incompatible.
        """
        if not self.schemas_compatible(writers_schema, readers_schema):
            raise SchemaMismatchException(writers_schema, readers_schema)

    def resolve_reader_for_union(self, writers_schema: Schema, readers_schema: Schema) -> Schema:
        """Pick the reader union branch that a non-union writer is read as.

        Branches are tried in declaration order and the first compatible
        one wins.

        Args:
            writers_schema: A non-union writer node.
            readers_schema: A union reader node.

        Returns:
            The selected reader branch.

        Raises:
            SchemaMismatchException: If no branch is compatible.
        """
        for branch in readers_schema.schemas:
            if self.schemas_compatible(writers_schema, branch):
                _logger.debug(
                    "Reading %s as reader union branch %s",
                    writers_schema.type,
                    branch_discriminant(branch),
                )
                return branch
        raise SchemaMismatchException(writers_schema, readers_schema)

    def select_writer_branch(self, writers_schema: Schema, discriminant: Any) -> Schema:
        """Find the writer union branch a JSON union value was tagged with.

        Args:
            writers_schema: A union writer node.
            discriminant: ``None`` for a null value, otherwise the single
                key of the object wrapping the value.

        Returns:
            The matching writer branch.

        Raises:
            SchemaMismatchException: If no branch carries the discriminant.
        """
        tag = SchemaKind.NULL.value if discriminant is None else discriminant
        for branch in writers_schema.schemas:
            if branch.type == tag:
                return branch
            if branch.kind in NAMED_KINDS and tag in (branch.fullname, branch.name):
                return branch
        raise SchemaMismatchException(
            writers_schema,
            None,
            f"No branch of union {writers_schema.to_json()!r} matches {tag!r}",
        )
