"""Message mirrors for the `bvs-vault-bank` contract (native denom vault)."""
from typing import Optional

from pydantic import Field

from .base import ContractMsg


class InstantiateMsg(ContractMsg):
    denom: str = Field(..., description="Native denomination held by the vault")
    operator: str
    pauser: str
    router: str


class RecipientAmount(ContractMsg):
    amount: str = Field(..., description="Uint128 encoded as a string")
    recipient: str


class Assets(ContractMsg):
    staker: str


class Shares(ContractMsg):
    staker: str


class ConvertToAssets(ContractMsg):
    shares: str


class ConvertToShares(ContractMsg):
    assets: str


class TotalAssets(ContractMsg):
    pass


class TotalShares(ContractMsg):
    pass


class VaultInfo(ContractMsg):
    pass


class VaultInfoResponse(ContractMsg):
    asset_id: str
    contract: str
    operator: str
    pauser: str
    router: str
    slashing: bool
    total_assets: str
    total_shares: str
    version: str


class ExecuteMsg(ContractMsg):
    deposit: Optional[RecipientAmount] = None
    withdraw: Optional[RecipientAmount] = None


class QueryMsg(ContractMsg):
    shares: Optional[Shares] = None
    assets: Optional[Assets] = None
    convert_to_assets: Optional[ConvertToAssets] = None
    convert_to_shares: Optional[ConvertToShares] = None
    total_shares: Optional[TotalShares] = None
    total_assets: Optional[TotalAssets] = None
    vault_info: Optional[VaultInfo] = None
