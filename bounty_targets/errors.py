# bounty_targets/errors.py
"""
Errors raised while scanning.

Every error aborts the whole scan; nothing is cached on failure.
"""


class ScannerError(Exception):
    """Base class for scanner errors."""


class SchemaError(ScannerError):
    """A type required by the query is missing from the introspected schema."""


class PartialResultError(ScannerError):
    """The server returned a null/empty node where a full record was expected."""


class PaginationLimitError(ScannerError):
    """A nested scopes page came back full, so scopes may have been truncated."""


class GraphQLError(ScannerError):
    """The GraphQL endpoint reported errors or returned no data."""


class PaginationCursorError(ScannerError):
    """A page reported a next page but its end cursor did not advance."""
