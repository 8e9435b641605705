# models.py
"""
Data models used by the scanner.

- Keep simple, serializable dataclasses for programs and their scopes.
- Page wraps one decoded page of the paginated teams connection.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

SCOPE_FIELDS = (
    "asset_identifier",
    "asset_type",
    "availability_requirement",
    "confidentiality_requirement",
    "eligible_for_bounty",
    "eligible_for_submission",
    "instruction",
    "integrity_requirement",
    "max_severity",
)

PROGRAM_FIELDS = ("name", "url", "offers_bounties", "offers_swag")


@dataclass
class Scope:
    """
    One asset definition declared by a program.

    Fields:
    - asset_identifier: the asset itself (e.g., "https://example.com" or "*.example.com")
    - asset_type: enum-like string such as "URL", "WILDCARD", "CIDR"
    - *_requirement / max_severity: severity-like strings, may be None
    - eligible_for_submission: True puts the scope in the in-scope bucket
    """
    asset_identifier: Optional[str] = None
    asset_type: Optional[str] = None
    availability_requirement: Optional[str] = None
    confidentiality_requirement: Optional[str] = None
    eligible_for_bounty: Optional[bool] = None
    eligible_for_submission: Optional[bool] = None
    instruction: Optional[str] = None
    integrity_requirement: Optional[str] = None
    max_severity: Optional[str] = None

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> "Scope":
        return cls(**{name: node.get(name) for name in SCOPE_FIELDS})


@dataclass
class Program:
    """
    Represents a single bug-bounty program.

    in_scope and out_of_scope are always present, each sorted by asset_identifier.
    """
    name: Optional[str] = None
    url: Optional[str] = None
    offers_bounties: Optional[bool] = None
    offers_swag: Optional[bool] = None
    in_scope: List[Scope] = field(default_factory=list)
    out_of_scope: List[Scope] = field(default_factory=list)


@dataclass
class Page:
    """
    One page of the teams connection as returned by the server.

    nodes may contain None entries when the server timed out on a team.
    """
    end_cursor: Optional[str]
    has_next_page: bool
    total_count: Optional[int] = None
    nodes: List[Optional[Dict[str, Any]]] = field(default_factory=list)

    @classmethod
    def from_connection(cls, connection: Dict[str, Any]) -> "Page":
        page_info = connection.get("pageInfo") or {}
        edges = connection.get("edges") or []
        return cls(
            end_cursor=page_info.get("endCursor"),
            has_next_page=bool(page_info.get("hasNextPage")),
            total_count=connection.get("total_count"),
            nodes=[edge.get("node") if edge else None for edge in edges],
        )
