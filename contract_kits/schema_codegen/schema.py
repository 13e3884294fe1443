"""
Contract Schema model.

A contract build emits one `schema.json` per contract:

    {
      "contract_name": "bvs-vault-router",
      "contract_version": "0.0.0",
      "idl_version": "1.0.0",
      "instantiate": {...},
      "execute": {...},
      "query": {...},
      "migrate": null,
      "sudo": null,
      "responses": {"list_vaults": {...}, ...}
    }
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from contract_kits.error_taxonomy import InvalidSchema


class ContractSchema(BaseModel):
    """Top-level contract schema document."""

    model_config = ConfigDict(extra="allow")

    contract_name: Optional[str] = Field(None, description="Contract crate name, e.g. 'bvs-registry'")
    instantiate: Dict[str, Any] = Field(..., description="JSON Schema of InstantiateMsg")
    execute: Dict[str, Any] = Field(..., description="JSON Schema of ExecuteMsg")
    query: Optional[Dict[str, Any]] = Field(None, description="JSON Schema of QueryMsg")
    responses: Dict[str, Dict[str, Any]] = Field(
        default_factory=dict,
        description="Query name -> JSON Schema of its response",
    )


def parse_schema(raw: Any, *, source: str = "<schema>") -> ContractSchema:
    try:
        return ContractSchema.model_validate(raw)
    except ValidationError as e:
        raise InvalidSchema(f"Invalid contract schema in {source}", detail=str(e)) from e


def load_schema(path: Path | str) -> ContractSchema:
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise InvalidSchema(f"Schema file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise InvalidSchema(f"Schema file is not valid JSON: {path}", detail=str(e)) from e
    return parse_schema(raw, source=str(path))


def has_query(schema: ContractSchema) -> bool:
    """A query schema that enumerates no variants produces no QueryMsg type."""
    if schema.query is None:
        return False
    enum = schema.query.get("enum")
    return not (isinstance(enum, list) and len(enum) == 0)


def schema_sources(schema: ContractSchema) -> List[Tuple[str, Dict[str, Any]]]:
    """
    Named schema sources in registration order.

    Order: InstantiateMsg, ExecuteMsg, QueryMsg (if any), then responses in
    document order. Each source must itself be a valid draft-07 schema.
    """
    sources: List[Tuple[str, Dict[str, Any]]] = [
        ("InstantiateMsg", schema.instantiate),
        ("ExecuteMsg", schema.execute),
    ]
    if has_query(schema):
        sources.append(("QueryMsg", schema.query))
    for key, response in schema.responses.items():
        sources.append((key, response))

    for name, source in sources:
        try:
            Draft7Validator.check_schema(source)
        except SchemaError as e:
            raise InvalidSchema(f"{name} is not a valid JSON Schema", detail=e.message) from e
    return sources
