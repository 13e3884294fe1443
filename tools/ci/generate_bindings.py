"""Regenerate Go bindings for every published SatLayer contract package.

Reads <artifacts_dir>/<package>/dist/schema.json and writes
<out-dir>/<name>/schema.go, where <name> is the contract name without the
`bvs-` prefix.

Usage:
    python tools/ci/generate_bindings.py [--out-dir modules/cosmwasm-schema] [--language go] [packages...]

Exit codes:
- 0: all bindings written
- 1: first failure (remaining packages are not attempted)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

repo_root = Path(__file__).resolve().parents[2]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from contract_kits.artifacts import SATLAYER_PACKAGES, ArtifactRegistry
from contract_kits.error_taxonomy import ToolingError
from contract_kits.schema_codegen.generator import LAYOUT_PACKAGE, generate_types_from_schema


def generate_all(packages, out_dir, *, language="go", registry=None, renderer=None) -> list[Path]:
    registry = registry or ArtifactRegistry()
    written = []
    for package in packages:
        written.append(
            generate_types_from_schema(
                registry.schema_path(package),
                out_dir,
                language=language,
                layout=LAYOUT_PACKAGE,
                renderer=renderer,
            )
        )
    return written


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate bindings for SatLayer contract packages")
    parser.add_argument("packages", nargs="*", default=None, help="Package keys (default: all SatLayer packages)")
    parser.add_argument("--out-dir", "-o", default=".", help="Output root (default: current directory)")
    parser.add_argument("--language", "-l", default="go", help="Target language (default: go)")
    parser.add_argument("--artifacts-dir", default=None, help="Overrides SATLAYER_ARTIFACTS_DIR")
    return parser.parse_args(argv)


def main(argv=None, renderer=None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = parse_args(argv)
    packages = args.packages or SATLAYER_PACKAGES
    try:
        generate_all(
            packages,
            args.out_dir,
            language=args.language,
            registry=ArtifactRegistry(args.artifacts_dir),
            renderer=renderer,
        )
    except ToolingError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return e.exit_code
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
