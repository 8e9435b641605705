# tests/conftest.py
"""
Shared fixtures: a small introspection result, raw team/scope node builders,
and a fake transport that records every request.
"""

import pytest

from bounty_targets.query_builder import Schema


def _field(name, args=()):
    return {"name": name, "args": [{"name": a} for a in args]}


INTROSPECTION = {
    "__schema": {
        "types": [
            {"name": "PageInfo", "fields": [_field("endCursor"), _field("hasNextPage"),
                                            _field("hasPreviousPage"), _field("startCursor")]},
            {"name": "Team", "fields": [
                _field("handle"),
                _field("name"),
                _field("url"),
                _field("offers_bounties"),
                _field("offers_swag"),
                _field("submission_state"),
                _field("structured_scopes", args=("first", "after")),
                _field("reports", args=("first",)),
            ]},
            {"name": "StructuredScope", "fields": [
                _field("asset_identifier"),
                _field("asset_type"),
                _field("availability_requirement"),
                _field("confidentiality_requirement"),
                _field("created_at"),
                _field("eligible_for_bounty"),
                _field("eligible_for_submission"),
                _field("instruction"),
                _field("integrity_requirement"),
                _field("max_severity"),
            ]},
            {"name": "String", "fields": None},
        ]
    }
}


def scope_node(identifier, eligible=True, asset_type="URL", **extra):
    node = {
        "asset_identifier": identifier,
        "asset_type": asset_type,
        "availability_requirement": "high",
        "confidentiality_requirement": "high",
        "eligible_for_bounty": True,
        "eligible_for_submission": eligible,
        "instruction": None,
        "integrity_requirement": "medium",
        "max_severity": "critical",
        "created_at": "2020-01-01T00:00:00Z",
    }
    node.update(extra)
    return node


def team_node(name, scopes=(), **extra):
    node = {
        "handle": name.lower(),
        "name": name,
        "url": f"https://hackerone.com/{name.lower()}",
        "offers_bounties": True,
        "offers_swag": False,
        "structured_scopes": {
            "total_count": len(scopes),
            "edges": [{"node": s} for s in scopes],
        },
    }
    node.update(extra)
    return node


def teams_page(nodes, end_cursor=None, has_next_page=False, total_count=None):
    return {
        "teams": {
            "pageInfo": {"endCursor": end_cursor, "hasNextPage": has_next_page},
            "total_count": total_count if total_count is not None else len(nodes),
            "edges": [{"node": n} for n in nodes],
        }
    }


class FakeClient:
    """
    Transport double: serves pages in order and records every call.
    """

    def __init__(self, pages, introspection=INTROSPECTION):
        self.pages = list(pages)
        self.introspection = introspection
        self.calls = []
        self.schema_loads = 0

    def load_schema(self):
        self.schema_loads += 1
        return Schema.from_introspection(self.introspection)

    def execute(self, query, variables=None):
        self.calls.append(dict(variables or {}))
        return self.pages[len(self.calls) - 1]


@pytest.fixture
def schema():
    return Schema.from_introspection(INTROSPECTION)
