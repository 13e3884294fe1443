# CosmWasm Schema Mirrors
# Runtime-validated pydantic models mirroring SatLayer contract messages

from . import (
    pauser,
    registry,
    vault_bank,
    vault_bank_tokenized,
    vault_cw20,
    vault_cw20_tokenized,
    vault_router,
)
from .base import ContractMsg, to_msg

# Package key -> InstantiateMsg model, used to validate init messages on deploy
INSTANTIATE_MSGS = {
    "@satlayer/bvs-pauser": pauser.InstantiateMsg,
    "@satlayer/bvs-registry": registry.InstantiateMsg,
    "@satlayer/bvs-vault-router": vault_router.InstantiateMsg,
    "@satlayer/bvs-vault-cw20": vault_cw20.InstantiateMsg,
    "@satlayer/bvs-vault-cw20-tokenized": vault_cw20_tokenized.InstantiateMsg,
    "@satlayer/bvs-vault-bank": vault_bank.InstantiateMsg,
    "@satlayer/bvs-vault-bank-tokenized": vault_bank_tokenized.InstantiateMsg,
}

__all__ = [
    'ContractMsg',
    'to_msg',
    'INSTANTIATE_MSGS',
    'pauser',
    'registry',
    'vault_bank',
    'vault_bank_tokenized',
    'vault_cw20',
    'vault_cw20_tokenized',
    'vault_router',
]
