# bounty_targets/graphql_client.py
"""
GraphQL transports.

- GraphQLClient talks to the live endpoint over a requests.Session.
- ReplayClient serves a recorded capture (introspection result + pages) for offline runs.

Both expose the same two calls the scanner needs: load_schema() and execute().
HTTP and network errors from requests are not wrapped.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from bounty_targets.errors import GraphQLError
from bounty_targets.query_builder import INTROSPECTION_QUERY, Schema
from config import DEFAULT_GRAPHQL_ENDPOINT, REQUEST_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)


def _extract_data(payload: Any) -> Dict[str, Any]:
    """
    Return the `data` object of a GraphQL response payload.

    Errors that come alongside data are logged and the data is returned: a timed-out
    field arrives as null plus an error entry, and the scanner rejects the null itself.
    Raises GraphQLError only when there is no data.
    """
    if not isinstance(payload, dict):
        raise GraphQLError(f"Unexpected GraphQL response type: {type(payload).__name__}")
    errors = payload.get("errors") or []
    summary = "; ".join(str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors)
    data = payload.get("data")
    if data is None:
        if errors:
            raise GraphQLError(f"GraphQL API errors: {summary}")
        raise GraphQLError("GraphQL response contained no data")
    if errors:
        logger.warning("GraphQL returned data with errors: %s", summary)
    return data


class GraphQLClient:
    """
    Minimal GraphQL-over-HTTP client.

    A session can be injected (tests pass a fake with a `post` method).
    """

    def __init__(self, endpoint: str = DEFAULT_GRAPHQL_ENDPOINT,
                 session: Optional[requests.Session] = None,
                 timeout: float = REQUEST_TIMEOUT,
                 user_agent: str = USER_AGENT):
        self.endpoint = endpoint
        self.session = session or requests.Session()
        self.timeout = timeout
        self.user_agent = user_agent
        self.requests_made = 0

    def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        POST a query and return its `data` object.
        """
        self.requests_made += 1
        response = self.session.post(
            self.endpoint,
            json={"query": query, "variables": variables or {}},
            headers={"Accept": "application/json", "User-Agent": self.user_agent},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return _extract_data(response.json())

    def load_schema(self) -> Schema:
        logger.info("Loading GraphQL schema from %s", self.endpoint)
        return Schema.from_introspection(self.execute(INTROSPECTION_QUERY))


class ReplayClient:
    """
    Offline transport backed by a capture dict:

    {
      "schema": { "__schema": { "types": [ ... ] } },
      "pages": [ { "teams": { ... } }, ... ]
    }

    Pages are returned in order, one per execute() call, regardless of the cursor.
    """

    def __init__(self, capture: Dict[str, Any]):
        self._schema_data = capture.get("schema") or {}
        self._pages: List[Dict[str, Any]] = list(capture.get("pages") or [])
        self.requests_made = 0

    def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if self.requests_made >= len(self._pages):
            raise GraphQLError(
                f"Capture has {len(self._pages)} pages; page {self.requests_made + 1} was requested"
            )
        page = self._pages[self.requests_made]
        self.requests_made += 1
        # Pages may be stored as bare data objects or as full response payloads.
        payload = page if "data" in page or "errors" in page else {"data": page}
        return _extract_data(payload)

    def load_schema(self) -> Schema:
        return Schema.from_introspection(self._schema_data)
