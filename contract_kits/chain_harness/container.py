"""
wasmd test container.

Boots `cosmwasm/wasmd` with its bundled single-validator setup script and
waits until the node starts indexing blocks. The `validator` key created by
that script holds the genesis funds and acts as the faucet.

Environment variables:
- WASMD_IMAGE (default: cosmwasm/wasmd:v0.55.0)
- WASMD_CHAIN_ID (default: wasm-1337)
- WASMD_START_TIMEOUT_SECONDS (default: 60)
- WASMD_TX_TIMEOUT_SECONDS (default: 5)
- WASMD_GAS_PRICES (default: 0.002ustake)
"""
from __future__ import annotations

import io
import logging
import os
import posixpath
import re
import shlex
import tarfile
import time
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import docker
from docker.errors import DockerException

from contract_kits.chain_harness import rpc
from contract_kits.chain_harness.client import (
    KEYRING_BACKEND,
    ExecResult,
    WasmdClient,
    parse_json_output,
)
from contract_kits.error_taxonomy import ToolingError

logger = logging.getLogger(__name__)

RPC_PORT = 26657
READY_LOG_MESSAGE = "indexed block events"
FAUCET_KEY = "validator"
FAUCET_PASSWORD = "1234567890"

COIN_RE = re.compile(r"^[0-9]+[a-zA-Z][a-zA-Z0-9/:._-]*(,[0-9]+[a-zA-Z][a-zA-Z0-9/:._-]*)*$")


class HarnessSettings:
    """Test-container settings with environment variable support."""

    def __init__(self):
        self.image: str = os.getenv("WASMD_IMAGE", "cosmwasm/wasmd:v0.55.0")
        self.chain_id: str = os.getenv("WASMD_CHAIN_ID", "wasm-1337")
        self.start_timeout_seconds: float = float(os.getenv("WASMD_START_TIMEOUT_SECONDS", "60"))
        self.tx_timeout_seconds: float = float(os.getenv("WASMD_TX_TIMEOUT_SECONDS", "5"))
        self.gas_prices: str = os.getenv("WASMD_GAS_PRICES", "0.002ustake")


class CosmWasmContainer:
    """Container definition; `start()` returns a running `StartedCosmWasmContainer`."""

    def __init__(
        self,
        image: Optional[str] = None,
        *,
        chain_id: Optional[str] = None,
        settings: Optional[HarnessSettings] = None,
        docker_client: Any = None,
    ):
        self.settings = settings or HarnessSettings()
        self.image = image or self.settings.image
        self.chain_id = chain_id or self.settings.chain_id
        self.environment = {"CHAIN_ID": self.chain_id}
        self.command = ["/opt/setup_and_run.sh"]
        self.exposed_ports = [RPC_PORT]
        self._docker = docker_client

    def start(self) -> "StartedCosmWasmContainer":
        try:
            client = self._docker or docker.from_env()
            container = client.containers.run(
                self.image,
                command=self.command,
                environment=self.environment,
                ports={f"{port}/tcp": None for port in self.exposed_ports},
                detach=True,
            )
        except DockerException as e:
            raise ToolingError(f"Failed to start {self.image}", detail=str(e)) from e

        started = StartedCosmWasmContainer(container, client, chain_id=self.chain_id, settings=self.settings)
        try:
            started.wait_for_log(READY_LOG_MESSAGE, self.settings.start_timeout_seconds)
        except BaseException:
            started.stop()
            raise
        logger.info("wasmd ready at %s (chain_id=%s)", started.get_rpc_endpoint(), self.chain_id)
        return started


class StartedCosmWasmContainer:
    """A running wasmd node with a faucet, a test keyring and a signing client."""

    def __init__(self, container: Any, docker_client: Any, *, chain_id: str, settings: HarnessSettings):
        self.container = container
        self.docker_client = docker_client
        self.chain_id = chain_id
        self.settings = settings
        self.client = WasmdClient(
            self,
            chain_id=chain_id,
            gas_prices=settings.gas_prices,
            tx_timeout_s=settings.tx_timeout_seconds,
        )

    def __enter__(self) -> "StartedCosmWasmContainer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    # -- lifecycle ----------------------------------------------------------

    def wait_for_log(self, message: str, timeout_s: float, poll_interval_s: float = 0.5) -> None:
        deadline = time.monotonic() + timeout_s
        while True:
            logs = self.container.logs().decode("utf-8", errors="replace")
            if message in logs:
                return
            self.container.reload()
            if self.container.status in ("exited", "dead"):
                raise ToolingError(f"Container exited before logging {message!r}", detail=logs[-2000:])
            if time.monotonic() >= deadline:
                raise ToolingError(f"Timed out after {timeout_s}s waiting for log {message!r}")
            time.sleep(poll_interval_s)

    def stop(self) -> None:
        try:
            self.container.stop(timeout=5)
        finally:
            self.container.remove(v=True, force=True)

    # -- networking ---------------------------------------------------------

    def get_host(self) -> str:
        base_url = getattr(getattr(self.docker_client, "api", None), "base_url", "") or ""
        parsed = urlparse(base_url)
        if parsed.scheme in ("tcp", "http", "https") and parsed.hostname:
            return parsed.hostname
        return "localhost"

    def get_mapped_port(self, port: int) -> int:
        self.container.reload()
        bindings = (self.container.ports or {}).get(f"{port}/tcp") or []
        if not bindings:
            raise ToolingError(f"Port {port} is not mapped to the host")
        return int(bindings[0]["HostPort"])

    def get_rpc_endpoint(self) -> str:
        return f"http://{self.get_host()}:{self.get_mapped_port(RPC_PORT)}"

    def get_height(self) -> int:
        return rpc.latest_height(self.get_rpc_endpoint())

    def get_chain_id(self) -> str:
        return rpc.chain_id(self.get_rpc_endpoint())

    # -- exec ---------------------------------------------------------------

    def exec(self, cmd: List[str]) -> ExecResult:
        result = self.container.exec_run(cmd, demux=True)
        stdout, stderr = result.output if result.output else (None, None)
        return ExecResult(
            exit_code=result.exit_code,
            output=(stdout or b"").decode("utf-8", errors="replace"),
            stderr=(stderr or b"").decode("utf-8", errors="replace"),
        )

    def put_file(self, path: str, data: bytes) -> None:
        directory, name = posixpath.split(path)
        buf = io.BytesIO()
        with tarfile.open(fileobj=buf, mode="w") as tar:
            info = tarfile.TarInfo(name=name)
            info.size = len(data)
            info.mtime = int(time.time())
            tar.addfile(info, io.BytesIO(data))
        if not self.container.put_archive(directory or "/", buf.getvalue()):
            raise ToolingError(f"Failed to copy {path} into container")

    # -- accounts -----------------------------------------------------------

    def create_account(self, name: str) -> str:
        """Create a key in the test keyring and return its address."""
        result = self.exec(["wasmd", "keys", "add", name, "--keyring-backend", KEYRING_BACKEND, "-o", "json"])
        if result.exit_code != 0:
            raise ToolingError(f"Failed to create account {name}", detail=(result.stderr or result.output).strip())
        return parse_json_output(result.output or result.stderr)["address"]

    def fund_command(self, amount: str, addresses: List[str]) -> List[str]:
        if not COIN_RE.match(amount):
            raise ValueError(f"Invalid coin amount: {amount!r}")
        if len(addresses) == 1:
            send = ["wasmd", "tx", "bank", "send", FAUCET_KEY, addresses[0], amount]
        else:
            send = ["wasmd", "tx", "bank", "multi-send", FAUCET_KEY, *addresses, amount]
        send += ["--chain-id", self.chain_id, "-y", "-o", "json"]
        script = f"echo {FAUCET_PASSWORD} | " + " ".join(shlex.quote(arg) for arg in send)
        return ["/bin/sh", "-c", script]

    def fund(self, amount: str, *addresses: str) -> Dict[str, Any]:
        """Send `amount` from the faucet to each address in one transaction."""
        if not addresses:
            raise ValueError("fund() needs at least one address")
        result = self.exec(self.fund_command(amount, list(addresses)))
        if result.exit_code != 0:
            raise ToolingError("Faucet transfer failed", detail=(result.stderr or result.output).strip())
        broadcast = parse_json_output(result.output)
        if int(broadcast.get("code") or 0) != 0:
            raise ToolingError("Faucet transfer rejected", detail=broadcast.get("raw_log"))
        return self.wait_for_tx(broadcast["txhash"])

    def wait_for_tx(self, tx_hash: str, timeout_s: Optional[float] = None) -> Dict[str, Any]:
        return self.client.wait_for_tx(tx_hash, timeout_s)
