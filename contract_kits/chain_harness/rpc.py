"""Minimal JSON-RPC helpers for a CometBFT node.

- Uses stdlib only (urllib); the harness needs nothing more than `/status`.
- Endpoint is the host-mapped RPC URL of a started container, e.g.
  http://localhost:49153
"""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from typing import Any


class RpcError(RuntimeError):
    pass


def get_json(endpoint: str, path: str, *, timeout_s: int = 10) -> dict[str, Any]:
    url = endpoint.rstrip("/") + path
    req = urllib.request.Request(url=url, method="GET", headers={"Accept": "application/json"})

    try:
        with urllib.request.urlopen(req, timeout=timeout_s) as resp:
            raw = resp.read().decode("utf-8")
            return json.loads(raw) if raw else {}
    except urllib.error.HTTPError as e:
        raw = e.read().decode("utf-8") if getattr(e, "fp", None) else ""
        try:
            detail = json.loads(raw) if raw else {"raw": raw}
        except json.JSONDecodeError:
            detail = {"raw": raw}
        raise RpcError(f"HTTP {e.code} calling {url}: {detail}") from e
    except urllib.error.URLError as e:
        raise RpcError(f"Network error calling {url}: {e}") from e


def node_status(endpoint: str) -> dict[str, Any]:
    """`/status` result (CometBFT wraps it in a JSON-RPC envelope)."""
    body = get_json(endpoint, "/status")
    return body.get("result", body)


def chain_id(endpoint: str) -> str:
    return str(node_status(endpoint)["node_info"]["network"])


def latest_height(endpoint: str) -> int:
    return int(node_status(endpoint)["sync_info"]["latest_block_height"])
