"""Message mirrors for the `bvs-pauser` contract."""
from typing import Optional

from pydantic import Field

from .base import ContractMsg


class InstantiateMsg(ContractMsg):
    owner: str = Field(..., description="Owner allowed to pause/unpause")
    initial_paused: bool = Field(..., description="Whether contracts start paused")


class Empty(ContractMsg):
    pass


class TransferOwnership(ContractMsg):
    new_owner: str


class IsPaused(ContractMsg):
    contract: str = Field(..., alias="c", description="The contract calling this")
    method: str = Field(..., alias="m", description="The ExecuteMsg variant to check")


class CanExecute(ContractMsg):
    contract: str = Field(..., alias="c")
    sender: str = Field(..., alias="s")
    method: str = Field(..., alias="m")


class ExecuteMsg(ContractMsg):
    pause: Optional[Empty] = None
    unpause: Optional[Empty] = None
    transfer_ownership: Optional[TransferOwnership] = None


class QueryMsg(ContractMsg):
    is_paused: Optional[IsPaused] = None
    can_execute: Optional[CanExecute] = None
