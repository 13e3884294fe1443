"""
Pytest configuration and shared fixtures.

- Puts the repository root on sys.path so `contract_kits`, `tools` and
  `docs_site` import without installation
- Registers the `integration` marker (tests needing a Docker daemon)
"""

import copy
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: needs a Docker daemon (and contract artifacts for deploy tests)")


VAULT_ROUTER_SCHEMA = {
    "contract_name": "bvs-vault-router",
    "contract_version": "0.0.0",
    "idl_version": "1.0.0",
    "instantiate": {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "title": "InstantiateMsg",
        "type": "object",
        "required": ["owner", "pauser"],
        "properties": {
            "owner": {"type": "string"},
            "pauser": {"type": "string"},
        },
        "additionalProperties": False,
    },
    "execute": {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "title": "ExecuteMsg",
        "oneOf": [
            {
                "type": "object",
                "required": ["set_vault"],
                "properties": {
                    "set_vault": {
                        "type": "object",
                        "required": ["vault", "whitelisted"],
                        "properties": {
                            "vault": {"type": "string"},
                            "whitelisted": {"type": "boolean"},
                        },
                    }
                },
                "additionalProperties": False,
            }
        ],
    },
    "query": {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "title": "QueryMsg",
        "oneOf": [
            {
                "type": "object",
                "required": ["list_vaults"],
                "properties": {
                    "list_vaults": {
                        "type": "object",
                        "properties": {
                            "limit": {"type": ["integer", "null"]},
                            "start_after": {"type": ["string", "null"]},
                        },
                    }
                },
                "additionalProperties": False,
            }
        ],
    },
    "migrate": None,
    "sudo": None,
    "responses": {
        "list_vaults": {
            "$schema": "http://json-schema.org/draft-07/schema#",
            "title": "VaultListResponse",
            "type": "array",
            "items": {
                "type": "object",
                "required": ["vault", "whitelisted"],
                "properties": {
                    "vault": {"type": "string"},
                    "whitelisted": {"type": "boolean"},
                },
            },
        },
        "is_whitelisted": {
            "$schema": "http://json-schema.org/draft-07/schema#",
            "title": "Boolean",
            "type": "boolean",
        },
    },
}


class FakeRenderer:
    """Deterministic stand-in for quicktype: one line per named source."""

    def __init__(self):
        self.calls = []

    def render(self, sources, language):
        names = [name for name, _ in sources]
        self.calls.append((names, language))
        lines = []
        for name, schema in sources:
            props = ", ".join(sorted((schema.get("properties") or {}).keys()))
            lines.append(f"type {name} {{{props}}}")
        return lines


@pytest.fixture
def contract_schema():
    return copy.deepcopy(VAULT_ROUTER_SCHEMA)


@pytest.fixture
def fake_renderer():
    return FakeRenderer()
