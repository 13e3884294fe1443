"""Generate typed bindings from one contract schema.json.

Usage:
    python tools/ci/schema_gen.py <schema-path> [options]

Options:
    --out-dir, -o    Output directory (default: current directory)
    --language, -l   Target language (default: typescript)
                     Supported: go, typescript, python

Example:
    python tools/ci/schema_gen.py ./path/to/schema.json --out-dir ./types --language typescript

Exit codes:
- 0: binding written
- 1: invalid schema, renderer failure or unwritable output
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

repo_root = Path(__file__).resolve().parents[2]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from contract_kits.error_taxonomy import ToolingError
from contract_kits.schema_codegen.generator import LANGUAGES, generate_types_from_schema


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="schema-gen", description="Generate types from a contract schema file")
    parser.add_argument("schema_path", help="Path to the schema.json file")
    parser.add_argument("--out-dir", "-o", default=".", help="Output directory (default: current directory)")
    parser.add_argument(
        "--language", "-l",
        default="typescript",
        help=f"Target language (default: typescript). Supported: {', '.join(LANGUAGES)}",
    )
    return parser.parse_args(argv)


def main(argv=None, renderer=None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = parse_args(argv)
    try:
        generate_types_from_schema(args.schema_path, args.out_dir, language=args.language, renderer=renderer)
    except ToolingError as e:
        print(f"Error generating types: {e}", file=sys.stderr)
        return e.exit_code
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
