# bounty_targets/query_builder.py
"""
Schema-driven query construction.

- Schema wraps an introspection result and answers "which fields does this type have,
  and do they take arguments?".
- select_fields picks every argument-free field of a type minus an exclusion list.
- build_query emits the single paginated teams -> structured_scopes query.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple

from bounty_targets.errors import SchemaError
from config import (
    PAGE_INFO_TYPE,
    SCOPES_CONNECTION,
    SCOPES_PAGE_SIZE,
    TEAMS_CONNECTION,
    TEAMS_PAGE_SIZE,
)

# Only what field selection needs: type names, field names and argument names.
INTROSPECTION_QUERY = """
query IntrospectFields {
  __schema {
    types {
      name
      fields(includeDeprecated: true) {
        name
        args { name }
      }
    }
  }
}
"""


@dataclass(frozen=True)
class FieldInfo:
    name: str
    has_arguments: bool = False


@dataclass(frozen=True)
class FieldSet:
    """Fields selected for one type, in schema order."""
    type_name: str
    fields: Tuple[str, ...]

    def render(self) -> str:
        return ",\n".join(self.fields)


@dataclass(frozen=True)
class QueryDocument:
    """
    A built query plus the parameters it was built with.

    The scan engine checks page limits against these values rather than the config
    module so the check always matches what was actually requested.
    """
    text: str
    outer_connection: str = TEAMS_CONNECTION
    inner_connection: str = SCOPES_CONNECTION
    inner_page_size: int = SCOPES_PAGE_SIZE


class Schema:
    """
    Field metadata per type name, built from an introspection result.
    """

    def __init__(self, types: Dict[str, Dict[str, FieldInfo]]):
        self._types = types

    @classmethod
    def from_introspection(cls, data: Dict[str, Any]) -> "Schema":
        """
        Build a Schema from the `data` object of an introspection query.
        Types without fields (scalars, enums, inputs) are kept with an empty field map.
        """
        if "__schema" not in data:
            raise SchemaError("Introspection result has no __schema")
        types: Dict[str, Dict[str, FieldInfo]] = {}
        for type_def in data["__schema"].get("types") or []:
            fields: Dict[str, FieldInfo] = {}
            for field_def in type_def.get("fields") or []:
                fields[field_def["name"]] = FieldInfo(
                    name=field_def["name"],
                    has_arguments=bool(field_def.get("args")),
                )
            types[type_def["name"]] = fields
        return cls(types)

    def has_type(self, type_name: str) -> bool:
        return type_name in self._types

    def fields_of(self, type_name: str) -> Dict[str, FieldInfo]:
        if type_name not in self._types:
            raise SchemaError(f"Type {type_name!r} not found in schema")
        return dict(self._types[type_name])


def select_fields(schema: Schema, type_name: str, exclude: Iterable[str] = ()) -> FieldSet:
    """
    Return every field of `type_name` that takes no arguments and is not excluded.
    Raises SchemaError if the type is unknown or nothing is left to select.
    """
    excluded = set(exclude)
    names = tuple(
        name for name, info in schema.fields_of(type_name).items()
        if not info.has_arguments and name not in excluded
    )
    if not names:
        raise SchemaError(f"Type {type_name!r} has no selectable fields")
    return FieldSet(type_name=type_name, fields=names)


def _indent(text: str, spaces: int) -> str:
    pad = " " * spaces
    return "\n".join(pad + line for line in text.splitlines())


def build_query(schema: Schema, outer_type: str, inner_type: str,
                outer_excludes: Iterable[str] = (), inner_excludes: Iterable[str] = (),
                outer_page_size: int = TEAMS_PAGE_SIZE,
                inner_page_size: int = SCOPES_PAGE_SIZE,
                outer_connection: str = TEAMS_CONNECTION,
                inner_connection: str = SCOPES_CONNECTION) -> QueryDocument:
    """
    Build the paginated programs -> scopes query.

    The query takes a single `$after` cursor for the outer connection. The inner
    connection is requested with a fixed page size and is never paginated.
    """
    page_info = select_fields(schema, PAGE_INFO_TYPE)
    outer = select_fields(schema, outer_type, outer_excludes)
    inner = select_fields(schema, inner_type, inner_excludes)

    text = f"""query($after: String) {{
  {outer_connection}(first: {outer_page_size}, after: $after) {{
    pageInfo {{
{_indent(page_info.render(), 6)}
    }},
    total_count,
    edges {{
      node {{
{_indent(outer.render(), 8)},
        {inner_connection}(first: {inner_page_size}) {{
          total_count,
          edges {{
            node {{
{_indent(inner.render(), 14)}
            }}
          }}
        }}
      }}
    }}
  }}
}}
"""
    return QueryDocument(
        text=text,
        outer_connection=outer_connection,
        inner_connection=inner_connection,
        inner_page_size=inner_page_size,
    )
