"""Message mirrors for the `bvs-vault-bank-tokenized` contract.

The vault is also a CW20 receipt token: shares are minted as receipt tokens
and can be moved with the usual CW20 transfer/send messages.
"""
from typing import Optional

from .base import ContractMsg
from .vault_bank import (
    Assets,
    ConvertToAssets,
    ConvertToShares,
    InstantiateMsg,
    RecipientAmount,
    Shares,
    TotalAssets,
    TotalShares,
    VaultInfo,
    VaultInfoResponse,
)


class Transfer(ContractMsg):
    amount: str
    recipient: str


class Send(ContractMsg):
    amount: str
    contract: str
    msg: str


class Balance(ContractMsg):
    address: str


class TokenInfo(ContractMsg):
    pass


class QueuedWithdrawal(ContractMsg):
    staker: str


class BalanceResponse(ContractMsg):
    balance: str


class TokenInfoResponse(ContractMsg):
    decimals: int
    name: str
    symbol: str
    total_supply: str


class ExecuteMsg(ContractMsg):
    transfer: Optional[Transfer] = None
    send: Optional[Send] = None
    deposit_for: Optional[RecipientAmount] = None
    withdraw_to: Optional[RecipientAmount] = None
    queue_withdrawal_to: Optional[RecipientAmount] = None
    redeem_withdrawal_to: Optional[str] = None


class QueryMsg(ContractMsg):
    balance: Optional[Balance] = None
    token_info: Optional[TokenInfo] = None
    shares: Optional[Shares] = None
    assets: Optional[Assets] = None
    convert_to_assets: Optional[ConvertToAssets] = None
    convert_to_shares: Optional[ConvertToShares] = None
    total_shares: Optional[TotalShares] = None
    total_assets: Optional[TotalAssets] = None
    queued_withdrawal: Optional[QueuedWithdrawal] = None
    vault_info: Optional[VaultInfo] = None


__all__ = [
    "InstantiateMsg",
    "ExecuteMsg",
    "QueryMsg",
    "RecipientAmount",
    "Transfer",
    "Send",
    "BalanceResponse",
    "TokenInfoResponse",
    "VaultInfoResponse",
]
