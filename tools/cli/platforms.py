"""Platform descriptors for prebuilt CLI binaries.

Package naming convention: <namespace>-<platform>-<arch>, e.g.
satlayer-cli-linux-arm64. The set is closed: {darwin, linux, win32} x {x64, arm64}.
"""

from __future__ import annotations

import platform as _platform
import sys
from enum import Enum

from contract_kits.error_taxonomy import UnsupportedPlatform


class Platform(str, Enum):
    DARWIN = "darwin"
    LINUX = "linux"
    WIN32 = "win32"


class Arch(str, Enum):
    X64 = "x64"
    ARM64 = "arm64"


_MACHINE_ALIASES = {
    "x86_64": Arch.X64,
    "amd64": Arch.X64,
    "x64": Arch.X64,
    "arm64": Arch.ARM64,
    "aarch64": Arch.ARM64,
}


def package_name(namespace: str, platform: Platform, arch: Arch) -> str:
    return f"{namespace}-{platform.value}-{arch.value}"


def supported_packages(namespace: str) -> list[str]:
    return [package_name(namespace, p, a) for p in Platform for a in Arch]


def parse_platform(value: str) -> Platform:
    if value.startswith("linux"):
        return Platform.LINUX
    if value == "darwin":
        return Platform.DARWIN
    if value in ("win32", "cygwin"):
        return Platform.WIN32
    raise UnsupportedPlatform(f"Unsupported platform: {value}")


def parse_arch(value: str) -> Arch:
    arch = _MACHINE_ALIASES.get(value.lower())
    if arch is None:
        raise UnsupportedPlatform(f"Unsupported architecture: {value}")
    return arch


def detect_platform(
    sys_platform: str | None = None,
    machine: str | None = None,
) -> tuple[Platform, Arch]:
    return (
        parse_platform(sys_platform if sys_platform is not None else sys.platform),
        parse_arch(machine if machine is not None else _platform.machine()),
    )


def binary_filename(binary: str, platform: Platform) -> str:
    return f"{binary}.exe" if platform is Platform.WIN32 else binary
