"""
Central configuration and tunable constants.

- The GraphQL endpoint can be overridden by CLI args or environment variables.
- Page sizes are centralized here so the query and the scan engine agree on them.
"""

# Remote source
DEFAULT_GRAPHQL_ENDPOINT = "https://hackerone.com/graphql"
ENDPOINT_ENV_VAR = "HACKERONE_GRAPHQL_URL"
USER_AGENT = "bounty-targets-scanner"
REQUEST_TIMEOUT = 60  # seconds, per request

# Pagination:
# - More than 10 teams per page causes the server to silently drop results.
# - Scopes are not paginated; a program with this many scopes fails the scan.
TEAMS_PAGE_SIZE = 10
SCOPES_PAGE_SIZE = 100

# Schema types and connections
TEAM_TYPE = "Team"
SCOPE_TYPE = "StructuredScope"
PAGE_INFO_TYPE = "PageInfo"
TEAMS_CONNECTION = "teams"
SCOPES_CONNECTION = "structured_scopes"

# Fields handled separately (the nested connection) or not worth parsing
TEAM_EXCLUDED_FIELDS = ("structured_scopes", "submission_state")
SCOPE_EXCLUDED_FIELDS = ("created_at",)

# Reports
DEFAULT_REPORT_DIR = "reports"
