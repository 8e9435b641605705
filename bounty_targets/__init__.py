"""
HackerOne scope scanner.

- query_builder builds the paginated teams/scopes query from the live schema.
- hackerone drives pagination, validates pages and normalizes programs.
- graphql_client provides the HTTP and offline replay transports.
"""

from bounty_targets.errors import (
    GraphQLError,
    PaginationCursorError,
    PaginationLimitError,
    PartialResultError,
    ScannerError,
    SchemaError,
)
from bounty_targets.hackerone import HackerOneScanner, normalize_program, partition_scopes
from bounty_targets.query_builder import QueryDocument, Schema, build_query

__all__ = [
    "GraphQLError",
    "HackerOneScanner",
    "PaginationCursorError",
    "PaginationLimitError",
    "PartialResultError",
    "QueryDocument",
    "ScannerError",
    "Schema",
    "SchemaError",
    "build_query",
    "normalize_program",
    "partition_scopes",
]
