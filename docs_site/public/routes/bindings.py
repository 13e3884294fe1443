"""Generated binding endpoints.

Serves the type bindings produced by tools/ci/generate_bindings.py so the
reference pages can embed them. Read-only; paths are confined to the
bindings directory.
"""

from pathlib import Path
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from docs_site.public.routes.deps import get_settings
from docs_site.public.schemas import BindingContent, BindingFile
from docs_site.public.settings import DocsSettings

router = APIRouter(prefix="/api/bindings", tags=["bindings"])

LANGUAGE_BY_SUFFIX = {
    ".go": "go",
    ".ts": "typescript",
    ".py": "python",
}


def _resolve(root: Path, relative: str) -> Path:
    root = root.resolve()
    candidate = (root / relative).resolve()
    if root != candidate and root not in candidate.parents:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "INVALID_PATH", "message": "Path escapes the bindings directory"},
        )
    return candidate


@router.get("")
def list_bindings(settings: DocsSettings = Depends(get_settings)) -> List[BindingFile]:
    root = Path(settings.bindings_dir)
    if not root.is_dir():
        return []
    files = []
    for path in sorted(root.rglob("*")):
        language = LANGUAGE_BY_SUFFIX.get(path.suffix)
        if language is None or not path.is_file():
            continue
        files.append(
            BindingFile(
                path=path.relative_to(root).as_posix(),
                language=language,
                size_bytes=path.stat().st_size,
            )
        )
    return files


@router.get("/{binding_path:path}")
def get_binding(binding_path: str, settings: DocsSettings = Depends(get_settings)) -> BindingContent:
    path = _resolve(Path(settings.bindings_dir), binding_path)
    language = LANGUAGE_BY_SUFFIX.get(path.suffix)
    if language is None or not path.is_file():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "BINDING_NOT_FOUND", "message": f"No binding at {binding_path}"},
        )
    return BindingContent(
        path=path.relative_to(Path(settings.bindings_dir).resolve()).as_posix(),
        language=language,
        content=path.read_text(encoding="utf-8"),
    )
