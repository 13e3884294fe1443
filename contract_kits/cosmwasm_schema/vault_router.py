"""Message mirrors for the `bvs-vault-router` contract."""
from typing import Optional

from .base import ContractMsg


class InstantiateMsg(ContractMsg):
    owner: str
    pauser: str
    registry: str


class SetVault(ContractMsg):
    vault: str
    whitelisted: bool


class TransferOwnership(ContractMsg):
    new_owner: str


class IsValidating(ContractMsg):
    operator: str


class IsWhitelisted(ContractMsg):
    vault: str


class ListVaults(ContractMsg):
    limit: Optional[int] = None
    start_after: Optional[str] = None


class Vault(ContractMsg):
    """One entry of the `list_vaults` response."""
    vault: str
    whitelisted: bool


class ExecuteMsg(ContractMsg):
    set_vault: Optional[SetVault] = None
    transfer_ownership: Optional[TransferOwnership] = None


class QueryMsg(ContractMsg):
    is_whitelisted: Optional[IsWhitelisted] = None
    is_validating: Optional[IsValidating] = None
    list_vaults: Optional[ListVaults] = None
