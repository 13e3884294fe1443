"""
Shared base for contract message mirrors.

Message enums are mirrored as objects whose variants are all optional fields;
exactly one variant is set on a well-formed message.
"""
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class ContractMsg(BaseModel):
    """Base model for contract messages (unknown keys are dropped)."""

    model_config = ConfigDict(populate_by_name=True)


def to_msg(model: BaseModel) -> Dict[str, Any]:
    """Dump a message model to the JSON dict sent on chain (unset variants omitted)."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)
