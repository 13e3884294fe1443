"""Message mirrors for the `bvs-registry` contract."""
from typing import Optional

from .base import ContractMsg


class InstantiateMsg(ContractMsg):
    owner: str
    pauser: str


class DeregisterOperatorFromService(ContractMsg):
    operator: str


class DeregisterServiceFromOperator(ContractMsg):
    service: str


class Metadata(ContractMsg):
    name: Optional[str] = None
    uri: Optional[str] = None


class RegisterAsService(ContractMsg):
    metadata: Metadata


class RegisterAsOperator(ContractMsg):
    metadata: Metadata


class RegisterOperatorToService(ContractMsg):
    operator: str


class RegisterServiceToOperator(ContractMsg):
    service: str


class TransferOwnership(ContractMsg):
    new_owner: str


class Status(ContractMsg):
    operator: str
    service: str


class QueryMsg(ContractMsg):
    status: Optional[Status] = None
    is_service: Optional[str] = None
    is_operator: Optional[str] = None


class ExecuteMsg(ContractMsg):
    register_as_service: Optional[RegisterAsService] = None
    update_service_metadata: Optional[Metadata] = None
    register_as_operator: Optional[RegisterAsOperator] = None
    update_operator_metadata: Optional[Metadata] = None
    register_operator_to_service: Optional[RegisterOperatorToService] = None
    deregister_operator_from_service: Optional[DeregisterOperatorFromService] = None
    register_service_to_operator: Optional[RegisterServiceToOperator] = None
    deregister_service_from_operator: Optional[DeregisterServiceFromOperator] = None
    transfer_ownership: Optional[TransferOwnership] = None
