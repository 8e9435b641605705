# bounty_targets/hackerone.py
"""
HackerOne scope scanning.

- normalize_program / partition_scopes are pure functions over raw team nodes.
- HackerOneScanner drives the teams pagination to exhaustion, rejects partial pages,
  and memoizes the full result for the lifetime of the instance.
"""

import logging
import threading
from typing import Any, Dict, List, Optional, Tuple

from bounty_targets.errors import PaginationCursorError, PaginationLimitError, PartialResultError
from bounty_targets.graphql_client import GraphQLClient
from bounty_targets.query_builder import QueryDocument, Schema, build_query
from config import (
    SCOPE_EXCLUDED_FIELDS,
    SCOPE_TYPE,
    SCOPES_CONNECTION,
    SCOPES_PAGE_SIZE,
    TEAM_EXCLUDED_FIELDS,
    TEAM_TYPE,
)
from models import PROGRAM_FIELDS, Page, Program, Scope

logger = logging.getLogger(__name__)

# --- Normalization ---------------------------------------------------------

def partition_scopes(scopes: List[Scope]) -> Tuple[List[Scope], List[Scope]]:
    """
    Split scopes into (in_scope, out_of_scope) on eligible_for_submission.

    Only an explicit True is in scope; False, None and missing are treated the same.
    Each bucket is sorted by asset_identifier; the sort is stable.
    """
    in_scope = [s for s in scopes if s.eligible_for_submission is True]
    out_of_scope = [s for s in scopes if s.eligible_for_submission is not True]

    def key(scope: Scope) -> str:
        return scope.asset_identifier or ""

    return sorted(in_scope, key=key), sorted(out_of_scope, key=key)


def normalize_program(node: Dict[str, Any], scope_limit: int = SCOPES_PAGE_SIZE,
                      scope_connection: str = SCOPES_CONNECTION) -> Program:
    """
    Reshape a raw team node into a Program.

    Raises PaginationLimitError if the scopes page is full (scopes may be truncated)
    and PartialResultError if any scope edge came back null or empty.
    """
    edges = (node.get(scope_connection) or {}).get("edges") or []
    if len(edges) == scope_limit:
        raise PaginationLimitError(
            f"Program {node.get('name')!r} returned {scope_limit} scopes; scopes need pagination"
        )

    scopes: List[Scope] = []
    for edge in edges:
        if not edge or not edge.get("node"):
            raise PartialResultError(f"Some scopes of program {node.get('name')!r} timed out")
        scopes.append(Scope.from_node(edge["node"]))

    in_scope, out_of_scope = partition_scopes(scopes)
    program = Program(**{name: node.get(name) for name in PROGRAM_FIELDS})
    program.in_scope = in_scope
    program.out_of_scope = out_of_scope
    return program

# --- Scan engine -----------------------------------------------------------

class HackerOneScanner:
    """
    Scans every HackerOne program and its structured scopes.

    The schema, query and result are initialized lazily and only once. A failed
    scan caches nothing, so calling scan() again starts over.
    """

    def __init__(self, client: Optional[Any] = None):
        self._client = client
        self._schema: Optional[Schema] = None
        self._query: Optional[QueryDocument] = None
        self._results: Optional[List[Program]] = None
        self._lock = threading.RLock()

    @property
    def client(self):
        if self._client is None:
            self._client = GraphQLClient()
        return self._client

    def schema(self) -> Schema:
        """
        Load the schema and build the query on first use.
        """
        with self._lock:
            if self._schema is None:
                schema = self.client.load_schema()
                self._query = build_query(
                    schema,
                    TEAM_TYPE,
                    SCOPE_TYPE,
                    outer_excludes=TEAM_EXCLUDED_FIELDS,
                    inner_excludes=SCOPE_EXCLUDED_FIELDS,
                )
                self._schema = schema
            return self._schema

    @property
    def query(self) -> QueryDocument:
        self.schema()
        return self._query

    def scan(self) -> List[Program]:
        """
        Return every program, in the order the server paginated them.
        """
        with self._lock:
            if self._results is not None:
                return self._results

            query = self.query
            results: List[Program] = []
            after: Optional[str] = None
            page_number = 0
            while True:
                data = self.client.execute(query.text, variables={"after": after})
                page = Page.from_connection(data[query.outer_connection])
                page_number += 1

                if any(node is None for node in page.nodes):
                    raise PartialResultError(f"Some teams timed out on page {page_number}")

                results.extend(
                    normalize_program(node, query.inner_page_size, query.inner_connection)
                    for node in page.nodes
                )
                logger.info("Page %d: %d/%s programs", page_number, len(results), page.total_count)

                if not page.has_next_page:
                    break
                if page.end_cursor is None or page.end_cursor == after:
                    raise PaginationCursorError(
                        f"Page {page_number} has a next page but its cursor did not advance ({page.end_cursor!r})"
                    )
                after = page.end_cursor

            self._results = results
            return self._results

    def uris(self) -> List[str]:
        """
        In-scope URL assets of every program, in program then scope order.
        """
        return [
            scope.asset_identifier
            for program in self.scan()
            for scope in program.in_scope
            if scope.asset_type == "URL"
        ]
