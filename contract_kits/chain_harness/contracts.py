"""
SatLayer core contracts on a test chain.

bootstrap() funds a fresh deployer and deploys pauser -> registry ->
vault-router. Vaults deployed afterwards (plain or tokenized, bank or cw20)
are whitelisted on the router by the deployer (router owner).
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from contract_kits.artifacts import ArtifactRegistry
from contract_kits.chain_harness.client import WasmdClient
from contract_kits.chain_harness.container import StartedCosmWasmContainer
from contract_kits.chain_harness.deployer import Deployed, deploy, deploy_cw20
from contract_kits.cosmwasm_schema import (
    pauser,
    registry,
    to_msg,
    vault_bank,
    vault_bank_tokenized,
    vault_cw20,
    vault_cw20_tokenized,
    vault_router,
)

logger = logging.getLogger(__name__)

DEPLOYER_FUNDS = "100000000ustake"
RECEIPT_DECIMALS = 8


@dataclass
class CoreContracts:
    pauser: Deployed
    registry: Deployed
    router: Deployed


class SatLayerContracts:
    def __init__(
        self,
        started: StartedCosmWasmContainer,
        deployer: str,
        state: CoreContracts,
        artifacts: ArtifactRegistry,
    ):
        self.started = started
        self.deployer = deployer
        self.state = state
        self.artifacts = artifacts

    @property
    def client(self) -> WasmdClient:
        return self.started.client

    @classmethod
    def bootstrap(
        cls,
        started: StartedCosmWasmContainer,
        artifacts: Optional[ArtifactRegistry] = None,
    ) -> "SatLayerContracts":
        artifacts = artifacts or ArtifactRegistry()
        client = started.client

        deployer = started.create_account("deployer")
        started.fund(DEPLOYER_FUNDS, deployer)

        pauser_ = deploy(
            client, deployer, "@satlayer/bvs-pauser",
            pauser.InstantiateMsg(owner=deployer, initial_paused=False),
            registry=artifacts,
        )
        registry_ = deploy(
            client, deployer, "@satlayer/bvs-registry",
            registry.InstantiateMsg(owner=deployer, pauser=pauser_.address),
            registry=artifacts,
        )
        router = deploy(
            client, deployer, "@satlayer/bvs-vault-router",
            vault_router.InstantiateMsg(owner=deployer, pauser=pauser_.address, registry=registry_.address),
            registry=artifacts,
        )
        logger.info("Bootstrapped pauser=%s registry=%s router=%s", pauser_.address, registry_.address, router.address)
        return cls(started, deployer, CoreContracts(pauser=pauser_, registry=registry_, router=router), artifacts)

    def whitelist_vault(self, vault: str) -> None:
        msg = vault_router.ExecuteMsg(set_vault=vault_router.SetVault(vault=vault, whitelisted=True))
        self.client.execute(self.deployer, self.state.router.address, to_msg(msg))

    def init_vault_bank(self, operator: str, denom: str) -> str:
        vault = deploy(
            self.client, self.deployer, "@satlayer/bvs-vault-bank",
            vault_bank.InstantiateMsg(
                denom=denom,
                operator=operator,
                pauser=self.state.pauser.address,
                router=self.state.router.address,
            ),
            registry=self.artifacts,
        )
        self.whitelist_vault(vault.address)
        return vault.address

    def init_vault_bank_tokenized(self, operator: str, denom: str) -> str:
        vault = deploy(
            self.client, self.deployer, "@satlayer/bvs-vault-bank-tokenized",
            vault_bank_tokenized.InstantiateMsg(
                denom=denom,
                operator=operator,
                pauser=self.state.pauser.address,
                router=self.state.router.address,
            ),
            registry=self.artifacts,
        )
        self.whitelist_vault(vault.address)
        return vault.address

    def init_cw20(
        self,
        init_msg: Union[vault_cw20.Cw20InstantiateMsg, Dict[str, Any]],
        wasm_path: Optional[Union[Path, str]] = None,
    ) -> str:
        if wasm_path is None:
            wasm_path = os.getenv("CW20_WASM_PATH") or self.artifacts.root / "cw20.wasm"
        return deploy_cw20(self.client, self.deployer, init_msg, wasm_path).address

    def init_vault_cw20(self, operator: str, cw20_contract: str) -> str:
        vault = deploy(
            self.client, self.deployer, "@satlayer/bvs-vault-cw20",
            vault_cw20.InstantiateMsg(
                cw20_contract=cw20_contract,
                operator=operator,
                pauser=self.state.pauser.address,
                router=self.state.router.address,
            ),
            registry=self.artifacts,
        )
        self.whitelist_vault(vault.address)
        return vault.address

    def init_vault_cw20_tokenized(
        self,
        operator: str,
        cw20_contract: str,
        receipt: Optional[vault_cw20_tokenized.ReceiptCw20InstantiateBase] = None,
    ) -> str:
        """Deploy and whitelist a cw20 vault that mints its shares as a receipt token."""
        if receipt is None:
            receipt = vault_cw20_tokenized.ReceiptCw20InstantiateBase(
                decimals=RECEIPT_DECIMALS,
                name="SatLayer Receipt",
                symbol="satRCPT",
            )
        vault = deploy(
            self.client, self.deployer, "@satlayer/bvs-vault-cw20-tokenized",
            vault_cw20_tokenized.InstantiateMsg(
                operator=operator,
                pauser=self.state.pauser.address,
                router=self.state.router.address,
                staking_cw20_contract=cw20_contract,
                receipt_cw20_instantiate_base=receipt,
            ),
            registry=self.artifacts,
        )
        self.whitelist_vault(vault.address)
        return vault.address

    def list_vaults(self) -> list:
        msg = vault_router.QueryMsg(list_vaults=vault_router.ListVaults())
        return self.client.query_smart(self.state.router.address, to_msg(msg))
