"""
Schema-to-types renderers.

The rendering itself is delegated to quicktype (https://quicktype.io), run as
an external CLI in "just types" mode. Each named source is written to its own
file so quicktype derives the top-level type name from the file name.
"""
from __future__ import annotations

import json
import logging
import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Protocol, Sequence, Tuple

from contract_kits.error_taxonomy import InvalidSchema, ToolingError

logger = logging.getLogger(__name__)

Source = Tuple[str, Dict[str, Any]]


class Renderer(Protocol):
    def render(self, sources: Sequence[Source], language: str) -> List[str]:
        ...


class QuicktypeRenderer:
    """Render JSON Schema sources with the quicktype CLI."""

    def __init__(self, executable: str | None = None, timeout_s: int = 120):
        self.executable = executable or os.getenv("QUICKTYPE_BIN", "quicktype")
        self.timeout_s = timeout_s

    def command(self, files: Sequence[Path], language: str) -> List[str]:
        return [
            self.executable,
            "--src-lang", "schema",
            "--lang", language,
            "--just-types",
            *[str(f) for f in files],
        ]

    def render(self, sources: Sequence[Source], language: str) -> List[str]:
        exe = shutil.which(self.executable)
        if exe is None:
            raise ToolingError(
                f"quicktype executable not found: {self.executable}",
                detail="Install it with `npm install -g quicktype` or set QUICKTYPE_BIN.",
            )

        with tempfile.TemporaryDirectory(prefix="schema-gen-") as tmp:
            files = []
            for name, schema in sources:
                path = Path(tmp) / f"{name}.json"
                path.write_text(json.dumps(schema, sort_keys=True), encoding="utf-8")
                files.append(path)

            cmd = self.command(files, language)
            logger.debug("Running %s", " ".join(cmd))
            try:
                result = subprocess.run(
                    cmd,
                    capture_output=True,
                    text=True,
                    timeout=self.timeout_s,
                )
            except subprocess.TimeoutExpired as e:
                raise ToolingError(f"quicktype did not finish within {self.timeout_s}s") from e
            except OSError as e:
                raise ToolingError(f"Cannot run quicktype: {self.executable}", detail=str(e)) from e

        if result.returncode != 0:
            raise InvalidSchema(
                f"quicktype rejected the schema (exit {result.returncode})",
                detail=result.stderr.strip() or None,
            )
        return result.stdout.splitlines()
