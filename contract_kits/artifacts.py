"""
Contract artifact registry.

Contract packages are built elsewhere and published with a `dist/` folder:

    <artifacts_dir>/@satlayer/bvs-vault-router/dist/contract.wasm
    <artifacts_dir>/@satlayer/bvs-vault-router/dist/schema.json

Environment variables:
- SATLAYER_ARTIFACTS_DIR (default: node_modules)
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from contract_kits.error_taxonomy import ToolingError


SATLAYER_PACKAGES = [
    "@satlayer/bvs-pauser",
    "@satlayer/bvs-registry",
    "@satlayer/bvs-vault-router",
    "@satlayer/bvs-vault-cw20",
    "@satlayer/bvs-vault-cw20-tokenized",
    "@satlayer/bvs-vault-bank",
    "@satlayer/bvs-vault-bank-tokenized",
    "@satlayer/bvs-vault-factory",
    "@satlayer/bvs-rewards",
]


class ArtifactSettings:
    """Artifact location settings with environment variable support."""

    def __init__(self):
        self.artifacts_dir: str = os.getenv("SATLAYER_ARTIFACTS_DIR", "node_modules")


class ArtifactRegistry:
    """Resolve a package key to the files in its `dist/` folder."""

    def __init__(self, root: Optional[Path | str] = None):
        if root is None:
            root = ArtifactSettings().artifacts_dir
        self.root = Path(root)

    def package_dir(self, package: str) -> Path:
        if not package or package.startswith("/") or ".." in Path(package).parts:
            raise ToolingError(f"Invalid contract package key: {package!r}")
        return self.root / package

    def wasm_path(self, package: str) -> Path:
        return self.package_dir(package) / "dist" / "contract.wasm"

    def schema_path(self, package: str) -> Path:
        return self.package_dir(package) / "dist" / "schema.json"

    def read_wasm(self, package: str) -> bytes:
        path = self.wasm_path(package)
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise ToolingError(f"Contract bytecode not found for {package}: {path}") from e
