"""Message mirrors for the `bvs-vault-cw20` contract.

Execute and query messages are shared with the bank vault; only the
instantiate message differs.
"""
from pydantic import Field

from .base import ContractMsg
from .vault_bank import ExecuteMsg, QueryMsg, RecipientAmount, VaultInfoResponse


class InstantiateMsg(ContractMsg):
    cw20_contract: str = Field(..., description="CW20 contract, underlying asset of the vault")
    operator: str = Field(..., description="Operator the vault is delegated to")
    pauser: str
    router: str


class Cw20Coin(ContractMsg):
    address: str
    amount: str


class Cw20InstantiateMsg(ContractMsg):
    """Instantiate message of the reference cw20-base token."""
    decimals: int
    name: str
    symbol: str
    initial_balances: list[Cw20Coin]


__all__ = [
    "InstantiateMsg",
    "ExecuteMsg",
    "QueryMsg",
    "RecipientAmount",
    "VaultInfoResponse",
    "Cw20Coin",
    "Cw20InstantiateMsg",
]
