# startup.py
# Runs before the docs app serves requests
# Makes sure the content directory exists and has a landing page

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

INDEX_PAGE = """---
title: SatLayer Docs
---

# SatLayer Docs

Build Bitcoin-secured services (BVS) on SatLayer.
"""


def prepare_content_dir(content_dir) -> Path:
    """
    Ensure the docs content directory exists.

    An empty directory gets an `index.mdx` landing page so the page map
    always has a root route. Existing content is never touched.
    """
    content_dir = Path(content_dir)
    content_dir.mkdir(parents=True, exist_ok=True)

    has_pages = any(
        p.suffix in (".md", ".mdx") for p in content_dir.rglob("*") if p.is_file()
    )
    if not has_pages:
        index = content_dir / "index.mdx"
        index.write_text(INDEX_PAGE, encoding="utf-8")
        logger.info("[STARTUP] Created landing page at %s", index)
    else:
        logger.info("[STARTUP] Using content in %s", content_dir)
    return content_dir


if __name__ == "__main__":
    from docs_site.public.settings import settings

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    prepare_content_dir(settings.content_dir)
    print("[STARTUP] Docs content initialized successfully")
