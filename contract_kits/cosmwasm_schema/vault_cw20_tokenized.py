"""Message mirrors for the `bvs-vault-cw20-tokenized` contract.

Execute and query messages are split into `base` (the CW20 receipt token)
and `extended` (vault operations).
"""
from typing import List, Optional

from pydantic import Field

from .base import ContractMsg
from .vault_bank import (
    Assets,
    ConvertToAssets,
    ConvertToShares,
    RecipientAmount,
    Shares,
    TotalAssets,
    TotalShares,
    VaultInfo,
)
from .vault_bank_tokenized import Balance, QueuedWithdrawal, Send, TokenInfo, Transfer
from .vault_cw20 import Cw20Coin


class MinterResponse(ContractMsg):
    minter: str
    cap: Optional[str] = None


class ReceiptCw20InstantiateBase(ContractMsg):
    """cw20-base InstantiateMsg of the receipt token minted for shares."""
    decimals: int
    name: str
    symbol: str
    initial_balances: List[Cw20Coin] = Field(default_factory=list)
    mint: Optional[MinterResponse] = None


class InstantiateMsg(ContractMsg):
    operator: str = Field(..., description="Operator the vault is delegated to")
    pauser: str
    router: str
    staking_cw20_contract: str = Field(..., description="CW20 contract, underlying asset of the vault")
    receipt_cw20_instantiate_base: ReceiptCw20InstantiateBase


class Cw20ExecuteMsg(ContractMsg):
    transfer: Optional[Transfer] = None
    send: Optional[Send] = None


class VaultExecuteMsg(ContractMsg):
    deposit_for: Optional[RecipientAmount] = None
    withdraw_to: Optional[RecipientAmount] = None
    queue_withdrawal_to: Optional[RecipientAmount] = None
    redeem_withdrawal_to: Optional[str] = None


class ExecuteMsg(ContractMsg):
    base: Optional[Cw20ExecuteMsg] = None
    extended: Optional[VaultExecuteMsg] = None


class Cw20QueryMsg(ContractMsg):
    balance: Optional[Balance] = None
    token_info: Optional[TokenInfo] = None


class VaultQueryMsg(ContractMsg):
    shares: Optional[Shares] = None
    assets: Optional[Assets] = None
    convert_to_assets: Optional[ConvertToAssets] = None
    convert_to_shares: Optional[ConvertToShares] = None
    total_shares: Optional[TotalShares] = None
    total_assets: Optional[TotalAssets] = None
    queued_withdrawal: Optional[QueuedWithdrawal] = None
    vault_info: Optional[VaultInfo] = None


class QueryMsg(ContractMsg):
    base: Optional[Cw20QueryMsg] = None
    extended: Optional[VaultQueryMsg] = None
