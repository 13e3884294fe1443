"""
Exec-based signing client for a wasmd node running in a container.

Every transaction is signed and broadcast by the `wasmd` binary inside the
container, using keys from the container's `test` keyring. Results are read
back with `wasmd query tx` once the transaction is included in a block.
"""
from __future__ import annotations

import hashlib
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Type

from contract_kits.error_taxonomy import (
    InstantiateError,
    ToolingError,
    TransactionTimeout,
    UploadError,
)

logger = logging.getLogger(__name__)

KEYRING_BACKEND = "test"


@dataclass(frozen=True)
class ExecResult:
    exit_code: int
    output: str
    stderr: str = ""


class ContainerExec(Protocol):
    def exec(self, cmd: List[str]) -> ExecResult:
        ...

    def put_file(self, path: str, data: bytes) -> None:
        ...


@dataclass(frozen=True)
class UploadResult:
    code_id: int
    tx_hash: str


@dataclass(frozen=True)
class InstantiateResult:
    contract_address: str
    tx_hash: str


def parse_json_output(output: str) -> Any:
    """Parse CLI JSON output, skipping any leading non-JSON noise (e.g. gas estimates)."""
    text = (output or "").strip()
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        start = text.find("{")
        if start < 0:
            raise
        return json.loads(text[start:])


def find_event_attribute(tx: Dict[str, Any], event_type: str, key: str) -> Optional[str]:
    for event in tx.get("events") or []:
        if event.get("type") != event_type:
            continue
        for attr in event.get("attributes") or []:
            if attr.get("key") == key:
                return attr.get("value")
    for log in tx.get("logs") or []:
        found = find_event_attribute(log, event_type, key)
        if found is not None:
            return found
    return None


class WasmdClient:
    """Upload, instantiate, execute and query CosmWasm contracts through `wasmd`."""

    def __init__(
        self,
        container: ContainerExec,
        *,
        chain_id: str = "wasm-1337",
        gas_prices: str = "0.002ustake",
        gas_adjustment: float = 1.3,
        tx_timeout_s: float = 5.0,
        poll_interval_s: float = 0.1,
    ):
        self.container = container
        self.chain_id = chain_id
        self.gas_prices = gas_prices
        self.gas_adjustment = gas_adjustment
        self.tx_timeout_s = tx_timeout_s
        self.poll_interval_s = poll_interval_s

    # -- transactions -------------------------------------------------------

    def tx_command(self, args: List[str], sender: str) -> List[str]:
        return [
            "wasmd", "tx", *args,
            "--from", sender,
            "--keyring-backend", KEYRING_BACKEND,
            "--chain-id", self.chain_id,
            "--gas", "auto",
            "--gas-adjustment", str(self.gas_adjustment),
            "--gas-prices", self.gas_prices,
            "-y",
            "-o", "json",
        ]

    def broadcast(
        self,
        args: List[str],
        sender: str,
        error_cls: Type[ToolingError] = ToolingError,
    ) -> Dict[str, Any]:
        """Sign, broadcast and wait for a transaction; raise `error_cls` if the chain rejects it."""
        action = " ".join(args[:2])
        result = self.container.exec(self.tx_command(args, sender))
        if result.exit_code != 0:
            raise error_cls(
                f"wasmd tx {action} failed (exit {result.exit_code})",
                detail=(result.stderr or result.output).strip() or None,
            )

        broadcast = parse_json_output(result.output)
        if int(broadcast.get("code") or 0) != 0:
            raise error_cls(f"wasmd tx {action} rejected", detail=broadcast.get("raw_log"))

        tx = self.wait_for_tx(broadcast["txhash"])
        if int(tx.get("code") or 0) != 0:
            raise error_cls(f"wasmd tx {action} failed on chain", detail=tx.get("raw_log"))
        return tx

    def upload(self, sender: str, bytecode: bytes) -> UploadResult:
        digest = hashlib.sha256(bytecode).hexdigest()
        remote_path = f"/tmp/{digest[:16]}.wasm"
        self.container.put_file(remote_path, bytecode)

        tx = self.broadcast(["wasm", "store", remote_path], sender, UploadError)
        code_id = find_event_attribute(tx, "store_code", "code_id")
        if code_id is None:
            raise UploadError("store_code event missing code_id", detail=tx.get("raw_log"))
        logger.info("Uploaded %s bytes as code_id=%s", len(bytecode), code_id)
        return UploadResult(code_id=int(code_id), tx_hash=tx["txhash"])

    def instantiate(
        self,
        sender: str,
        code_id: int,
        msg: Dict[str, Any],
        label: str,
        *,
        admin: Optional[str] = None,
    ) -> InstantiateResult:
        args = ["wasm", "instantiate", str(code_id), json.dumps(msg), "--label", label]
        args += ["--admin", admin] if admin else ["--no-admin"]

        tx = self.broadcast(args, sender, InstantiateError)
        address = find_event_attribute(tx, "instantiate", "_contract_address")
        if address is None:
            raise InstantiateError("instantiate event missing _contract_address", detail=tx.get("raw_log"))
        logger.info("Instantiated code_id=%s (%s) at %s", code_id, label, address)
        return InstantiateResult(contract_address=address, tx_hash=tx["txhash"])

    def execute(
        self,
        sender: str,
        contract: str,
        msg: Dict[str, Any],
        *,
        funds: Optional[str] = None,
    ) -> Dict[str, Any]:
        args = ["wasm", "execute", contract, json.dumps(msg)]
        if funds:
            args += ["--amount", funds]
        return self.broadcast(args, sender)

    # -- queries ------------------------------------------------------------

    def query(self, args: List[str]) -> Dict[str, Any]:
        result = self.container.exec(["wasmd", "query", *args, "-o", "json"])
        if result.exit_code != 0:
            raise ToolingError(
                f"wasmd query {' '.join(args[:2])} failed (exit {result.exit_code})",
                detail=(result.stderr or result.output).strip() or None,
            )
        return parse_json_output(result.output)

    def query_smart(self, contract: str, msg: Dict[str, Any]) -> Any:
        body = self.query(["wasm", "contract-state", "smart", contract, json.dumps(msg)])
        return body.get("data")

    def get_balance(self, address: str, denom: str) -> Dict[str, str]:
        body = self.query(["bank", "balance", address, denom])
        balance = body.get("balance") or {}
        return {"denom": balance.get("denom", denom), "amount": str(balance.get("amount", "0"))}

    def get_tx(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        """Indexed transaction, or None while it is not yet in a block."""
        result = self.container.exec(["wasmd", "query", "tx", tx_hash, "-o", "json"])
        if result.exit_code != 0:
            return None
        return parse_json_output(result.output)

    def wait_for_tx(self, tx_hash: str, timeout_s: Optional[float] = None) -> Dict[str, Any]:
        timeout_s = self.tx_timeout_s if timeout_s is None else timeout_s
        deadline = time.monotonic() + timeout_s
        while True:
            tx = self.get_tx(tx_hash)
            if tx is not None:
                return tx
            if time.monotonic() >= deadline:
                raise TransactionTimeout(f"Transaction {tx_hash} not found within timeout of {timeout_s}s")
            time.sleep(self.poll_interval_s)
