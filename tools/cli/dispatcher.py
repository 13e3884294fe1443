"""Launch the prebuilt CLI binary matching the host platform.

Resolution order:
1. <namespace>-<platform>-<arch>
2. on arm64 only: <namespace>-<platform>-x64 (runs under emulation, logs a warning)
3. fail with BinaryNotFound; nothing is spawned

Arguments are forwarded verbatim and the child's exit status becomes ours.

Environment variables:
- SATLAYER_CLI_NAMESPACE (default: satlayer-cli)
- SATLAYER_CLI_BIN_NAME (default: satlayer)
- SATLAYER_CLI_PACKAGES_DIR (optional: directory of unpacked platform packages)

Exit codes:
- child's exit code
- 128 + N: child killed by signal N
- 1: unsupported platform / binary not found
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from dataclasses import dataclass
from importlib import metadata
from pathlib import Path
from typing import Optional, Protocol, Sequence

from contract_kits.error_taxonomy import BinaryNotFound, ChildProcessSignal, ToolingError
from tools.cli.platforms import Arch, Platform, binary_filename, detect_platform, package_name

logger = logging.getLogger(__name__)


class DispatcherSettings:
    def __init__(self):
        self.namespace: str = os.getenv("SATLAYER_CLI_NAMESPACE", "satlayer-cli")
        self.binary_name: str = os.getenv("SATLAYER_CLI_BIN_NAME", "satlayer")
        self.packages_dir: Optional[str] = os.getenv("SATLAYER_CLI_PACKAGES_DIR") or None


class BinaryLocator(Protocol):
    def locate(self, package: str, binary: str) -> Optional[Path]:
        ...


class DirectoryLocator:
    """Platform packages unpacked under one directory: <root>/<package>/bin/<binary>."""

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def locate(self, package: str, binary: str) -> Optional[Path]:
        candidate = self.root / package / "bin" / binary
        return candidate if candidate.is_file() else None


class DistributionLocator:
    """Platform packages installed as Python distributions shipping bin/<binary>."""

    def locate(self, package: str, binary: str) -> Optional[Path]:
        try:
            dist = metadata.distribution(package)
        except metadata.PackageNotFoundError:
            return None
        for file in dist.files or []:
            if file.name == binary and file.parent.name == "bin":
                path = Path(dist.locate_file(file))
                if path.is_file():
                    return path
        return None


@dataclass(frozen=True)
class Resolution:
    package: str
    path: Path
    emulated: bool = False


def resolve_binary(
    platform: Platform,
    arch: Arch,
    locator: BinaryLocator,
    *,
    namespace: str = "satlayer-cli",
    binary: str = "satlayer",
) -> Optional[Resolution]:
    """Resolved binary, or None when no matching package is installed."""
    filename = binary_filename(binary, platform)

    exact = package_name(namespace, platform, arch)
    path = locator.locate(exact, filename)
    if path is not None:
        return Resolution(package=exact, path=path)

    # x64 binaries run on arm64 hosts under emulation; the reverse does not hold.
    if arch is Arch.ARM64:
        fallback = package_name(namespace, platform, Arch.X64)
        path = locator.locate(fallback, filename)
        if path is not None:
            return Resolution(package=fallback, path=path, emulated=True)

    return None


def default_locator(settings: DispatcherSettings) -> BinaryLocator:
    if settings.packages_dir:
        return DirectoryLocator(settings.packages_dir)
    return DistributionLocator()


def dispatch(
    argv: Sequence[str],
    *,
    settings: Optional[DispatcherSettings] = None,
    locator: Optional[BinaryLocator] = None,
    host: Optional[tuple[Platform, Arch]] = None,
    runner=None,
) -> int:
    settings = settings or DispatcherSettings()
    locator = locator or default_locator(settings)
    platform, arch = host or detect_platform()

    resolution = resolve_binary(
        platform,
        arch,
        locator,
        namespace=settings.namespace,
        binary=settings.binary_name,
    )
    if resolution is None:
        expected = package_name(settings.namespace, platform, arch)
        raise BinaryNotFound(
            f"No prebuilt binary for {platform.value}-{arch.value}: package {expected} is not installed"
        )

    if resolution.emulated:
        logger.warning(
            "No native %s binary found; falling back to %s (running under emulation)",
            f"{platform.value}-{arch.value}",
            resolution.package,
        )

    runner = runner or subprocess.run
    try:
        completed = runner([str(resolution.path), *argv])
    except OSError as e:
        raise BinaryNotFound(f"Cannot run {resolution.path}", detail=str(e)) from e
    if completed.returncode < 0:
        raise ChildProcessSignal(-completed.returncode, resolution.path.name)
    return completed.returncode


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        return dispatch(args)
    except ToolingError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return e.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
