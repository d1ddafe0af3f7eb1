"""
GRID relay: the server-side half of GridRelayClient.

Takes {apiKey, query, variables} from the dashboard, calls GRID's GraphQL
endpoint with the key as bearer token and hands back GRID's JSON untouched.
Failures become {error, details} with HTTP 400. No state, no retries.
"""

import logging

import requests

from scrimdesk import config
from scrimdesk.errors import ConfigurationError, RemoteError

log = logging.getLogger("scrimdesk.relay")

RELAY_FAILURE_DETAILS = "Failed to call GRID API"

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


def forward_graphql(payload, graphql_url=None, timeout=None):
    """Forward one relay request to GRID and return GRID's JSON body."""
    payload = payload if isinstance(payload, dict) else {}
    api_key = payload.get("apiKey")
    if not api_key:
        raise ConfigurationError("GRID API key is required")

    url = graphql_url or config.GRID_GRAPHQL_URL
    try:
        resp = requests.post(
            url,
            json={"query": payload.get("query"), "variables": payload.get("variables") or {}},
            headers={"Content-Type": "application/json", "Authorization": f"Bearer {api_key}"},
            timeout=timeout or config.REQUEST_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        raise RemoteError(f"GRID API unreachable: {e}") from e

    try:
        data = resp.json()
    except ValueError:
        data = None

    if not resp.ok:
        message = data.get("message") if isinstance(data, dict) else None
        raise RemoteError(
            f"GRID API error: {resp.status_code} - {message or 'Unknown error'}",
            status=resp.status_code,
        )

    if data is None:
        raise RemoteError(f"GRID API returned a non-JSON body ({resp.status_code})", status=resp.status_code)

    log.debug(f"Relayed GRID query ({resp.status_code}, keys: {list(data.keys()) if isinstance(data, dict) else '?'})")
    return data


def relay_error_body(error):
    return {"error": str(error), "details": RELAY_FAILURE_DETAILS}
