"""
Contract deployment primitives for integration tests.

deploy() uploads the bytecode published by a contract package and
instantiates it with the sender as admin. Upload and instantiate failures
come straight from the signing client (UploadError / InstantiateError);
nothing is retried.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ValidationError

from contract_kits.artifacts import ArtifactRegistry
from contract_kits.chain_harness.client import WasmdClient
from contract_kits.cosmwasm_schema import INSTANTIATE_MSGS, to_msg
from contract_kits.cosmwasm_schema.vault_cw20 import Cw20InstantiateMsg
from contract_kits.error_taxonomy import InstantiateError

logger = logging.getLogger(__name__)

InitMsg = Union[BaseModel, Dict[str, Any]]


@dataclass(frozen=True)
class Deployed:
    code_id: int
    address: str


def _init_msg_dict(contract_key: str, init_msg: InitMsg) -> Dict[str, Any]:
    """
    JSON init message to instantiate with.

    Plain dicts are checked against the mirrored InstantiateMsg (when the
    package has one) and then sent as given, keys unknown to the mirror included.
    """
    if isinstance(init_msg, BaseModel):
        return to_msg(init_msg)
    model = INSTANTIATE_MSGS.get(contract_key)
    if model is not None:
        try:
            model.model_validate(init_msg)
        except ValidationError as e:
            raise InstantiateError(
                f"Init message does not match {contract_key} InstantiateMsg", detail=str(e)
            ) from e
    return dict(init_msg)


def deploy(
    client: WasmdClient,
    sender: str,
    contract_key: str,
    init_msg: InitMsg,
    *,
    registry: Optional[ArtifactRegistry] = None,
) -> Deployed:
    """
    Upload and instantiate a SatLayer contract package.

    Args:
        client: Signing client bound to a running node
        sender: Funded key name or address in the node's test keyring
        contract_key: Package key, e.g. '@satlayer/bvs-registry'
        init_msg: InstantiateMsg as a model or plain dict

    Returns:
        Deployed(code_id, address)
    """
    msg = _init_msg_dict(contract_key, init_msg)
    registry = registry or ArtifactRegistry()
    bytecode = registry.read_wasm(contract_key)

    uploaded = client.upload(sender, bytecode)
    instantiated = client.instantiate(sender, uploaded.code_id, msg, contract_key, admin=sender)
    return Deployed(code_id=uploaded.code_id, address=instantiated.contract_address)


def deploy_cw20(
    client: WasmdClient,
    sender: str,
    init_msg: Union[Cw20InstantiateMsg, Dict[str, Any]],
    wasm_path: Union[Path, str],
) -> Deployed:
    """Deploy the reference cw20-base token from a local wasm file."""
    if not isinstance(init_msg, BaseModel):
        try:
            init_msg = Cw20InstantiateMsg.model_validate(init_msg)
        except ValidationError as e:
            raise InstantiateError("Init message does not match cw20 InstantiateMsg", detail=str(e)) from e

    bytecode = Path(wasm_path).read_bytes()
    uploaded = client.upload(sender, bytecode)
    instantiated = client.instantiate(sender, uploaded.code_id, to_msg(init_msg), init_msg.name, admin=sender)
    return Deployed(code_id=uploaded.code_id, address=instantiated.contract_address)
