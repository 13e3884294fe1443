"""Reproducible contract build through `docker buildx`.

Compiles the contract workspace to an optimized wasm artifact and exports the
build output to ./dist. Remote layer caching is enabled by environment:

- DOCKER_CACHE_FROM: registry address to pull cache from (ref: <addr>/<name>)
- DOCKER_CACHE_TO: registry address to push cache to (ref: <addr>/<name>, mode=max)
- DOCKER_BIN (default: docker)

Usage:
    python tools/ci/docker_build.py [--root ../..] [--name vault-router] [--dry-run]

Exit codes:
- 0: build succeeded
- N: build command exited with N (not retried)
"""

from __future__ import annotations

import argparse
import logging
import os
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Optional

repo_root = Path(__file__).resolve().parents[2]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from contract_kits.error_taxonomy import BinaryNotFound, BuildFailed, ChildProcessSignal, ToolingError

logger = logging.getLogger(__name__)

DIST_DIR = "dist"


class BuildSettings:
    def __init__(self):
        self.docker_bin: str = os.getenv("DOCKER_BIN", "docker")
        self.cache_from: Optional[str] = os.getenv("DOCKER_CACHE_FROM") or None
        self.cache_to: Optional[str] = os.getenv("DOCKER_CACHE_TO") or None


def _posix_relpath(path: Path, start: Path) -> str:
    rel = os.path.relpath(path, start)
    return Path(rel).as_posix()


def build_command(
    root: Optional[str] = None,
    name: Optional[str] = None,
    cwd: Optional[Path] = None,
    settings: Optional[BuildSettings] = None,
) -> list[str]:
    """
    Compose the buildx command.

    The build context is `root` (relative to cwd, "." by default); the
    Dockerfile receives the contract directory relative to that context as
    the CONTRACT_DIR build arg.
    """
    settings = settings or BuildSettings()
    cwd = Path(cwd or os.getcwd()).resolve()
    context_dir = (cwd / root).resolve() if root else cwd
    name = name or cwd.name

    cmd = [
        settings.docker_bin, "buildx", "build",
        "--build-arg", f"CONTRACT_DIR={_posix_relpath(cwd, context_dir)}",
        "--output", f"type=local,dest={DIST_DIR}",
    ]
    if settings.cache_from:
        cmd += ["--cache-from", f"type=registry,ref={settings.cache_from}/{name}"]
    if settings.cache_to:
        cmd += ["--cache-to", f"type=registry,ref={settings.cache_to}/{name},mode=max"]
    cmd.append(_posix_relpath(context_dir, cwd))
    return cmd


def run_build(cmd: list[str], cwd: Optional[Path] = None, runner=None) -> None:
    logger.info("Running %s", shlex.join(cmd))
    runner = runner or subprocess.run
    try:
        completed = runner(cmd, cwd=cwd)
    except OSError as e:
        raise BinaryNotFound(f"Cannot run {cmd[0]}", detail=str(e)) from e
    if completed.returncode < 0:
        raise ChildProcessSignal(-completed.returncode, shlex.join(cmd))
    if completed.returncode != 0:
        raise BuildFailed(completed.returncode, shlex.join(cmd))


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a contract with docker buildx into ./dist")
    parser.add_argument("--root", default=None, help="Build context (default: current directory)")
    parser.add_argument("--name", default=None, help="Cache/image name (default: current directory name)")
    parser.add_argument("--dry-run", action="store_true", help="Print the command without running it")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    args = parse_args(argv)
    cmd = build_command(root=args.root, name=args.name)

    if args.dry_run:
        print(shlex.join(cmd))
        return 0

    try:
        run_build(cmd)
    except ToolingError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return e.exit_code
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
