"""
Page map for the docs content directory.

Follows the docs theme's conventions:
- pages are `.md`/`.mdx` files; folders become sidebar sections
- `index` pages take the route of their folder
- an optional `_meta.json` per folder orders entries and overrides titles:
    {"getting-started": "Getting Started", "faq": {"title": "FAQ"}}
  listed entries come first in listed order, the rest alphabetically
"""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Dict, List, Optional

from docs_site.public.schemas import PageMapItem

logger = logging.getLogger(__name__)

PAGE_SUFFIXES = (".mdx", ".md")
META_FILE = "_meta.json"

FRONT_MATTER_TITLE_RE = re.compile(r"^title:\s*[\"']?(.+?)[\"']?\s*$", re.MULTILINE)
HEADING_RE = re.compile(r"^#\s+(.+?)\s*$", re.MULTILINE)


def default_title(name: str) -> str:
    words = re.split(r"[-_\s]+", name)
    return " ".join(w[:1].upper() + w[1:] for w in words if w)


def load_meta(folder: Path) -> Dict[str, str]:
    path = folder / META_FILE
    if not path.is_file():
        return {}
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        logger.warning("Ignoring malformed %s", path)
        return {}
    if not isinstance(raw, dict):
        return {}

    titles: Dict[str, str] = {}
    for key, value in raw.items():
        if isinstance(value, str):
            titles[key] = value
        elif isinstance(value, dict) and isinstance(value.get("title"), str):
            titles[key] = value["title"]
        else:
            titles[key] = default_title(key)
    return titles


def _entries(folder: Path) -> Dict[str, Path]:
    entries: Dict[str, Path] = {}
    for child in folder.iterdir():
        if child.name.startswith((".", "_")):
            continue
        if child.is_dir():
            entries[child.name] = child
        elif child.suffix in PAGE_SUFFIXES:
            # .mdx wins over .md with the same stem
            if child.stem not in entries or child.suffix == ".mdx":
                entries[child.stem] = child
    return entries


def _ordered(names: List[str], meta: Dict[str, str]) -> List[str]:
    listed = [n for n in meta if n in names]
    rest = sorted((n for n in names if n not in meta), key=lambda n: (n != "index", n))
    return listed + rest


def _route(prefix: str, name: str) -> str:
    if name == "index":
        return prefix or "/"
    return f"{prefix}/{name}"


def build_page_map(content_dir: Path | str, _prefix: str = "") -> List[PageMapItem]:
    folder = Path(content_dir)
    if not folder.is_dir():
        return []

    meta = load_meta(folder)
    entries = _entries(folder)
    items: List[PageMapItem] = []
    for name in _ordered(list(entries), meta):
        path = entries[name]
        title = meta.get(name) or default_title(name)
        if path.is_dir():
            route = f"{_prefix}/{name}"
            items.append(
                PageMapItem(
                    name=name,
                    route=route,
                    title=title,
                    kind="folder",
                    children=build_page_map(path, route),
                )
            )
        else:
            items.append(PageMapItem(name=name, route=_route(_prefix, name), title=title, kind="page"))
    return items


def find_page(content_dir: Path | str, route: str) -> Optional[Path]:
    """Source file for a route, or None. Routes never escape the content dir."""
    root = Path(content_dir)
    parts = [p for p in route.strip("/").split("/") if p]
    if any(p in (".", "..") or p.startswith(("_", ".")) for p in parts):
        return None

    base = root.joinpath(*parts) if parts else root
    candidates = []
    if parts:
        candidates += [base.with_name(base.name + suffix) for suffix in PAGE_SUFFIXES]
    candidates += [base / f"index{suffix}" for suffix in PAGE_SUFFIXES]
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def page_title(path: Path, content: str) -> str:
    """Front matter `title:` first, then the first `# ` heading, then the file name."""
    if content.startswith("---"):
        end = content.find("\n---", 3)
        if end > 0:
            match = FRONT_MATTER_TITLE_RE.search(content[3:end])
            if match:
                return match.group(1)
    match = HEADING_RE.search(content)
    if match:
        return match.group(1)
    name = path.stem
    if name == "index":
        name = path.parent.name or name
    return default_title(name)
