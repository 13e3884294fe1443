"""Layout, navigation and page source endpoints.

Everything the theme needs to render the site chrome:
- /api/layout: metadata, title template, banner, sidebar, edit links
- /api/page-map: navigation tree of the content directory
- /api/pages/{route}: page source plus resolved titles
"""

from pathlib import Path
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from docs_site.public.page_map import build_page_map, find_page, page_title
from docs_site.public.routes.deps import get_settings
from docs_site.public.schemas import (
    BannerConfig,
    LayoutConfig,
    PageMapItem,
    PageResponse,
    SidebarConfig,
    TitleConfig,
)
from docs_site.public.settings import DocsSettings

router = APIRouter(prefix="/api", tags=["docs"])


def title_template(settings: DocsSettings) -> str:
    return f"%s | {settings.site_title}"


@router.get("/layout")
def get_layout(settings: DocsSettings = Depends(get_settings)) -> LayoutConfig:
    return LayoutConfig(
        metadata_base=settings.site_url,
        title=TitleConfig(default=settings.site_title, template=title_template(settings)),
        banner=BannerConfig(storage_key="wip", dismissible=False, text=settings.banner_text),
        sidebar=SidebarConfig(default_menu_collapse_level=settings.default_menu_collapse_level),
        docs_repository_base=settings.docs_repository_base,
    )


@router.get("/page-map")
def get_page_map(settings: DocsSettings = Depends(get_settings)) -> List[PageMapItem]:
    return build_page_map(settings.content_dir)


@router.get("/pages/{route:path}")
def get_page(route: str, settings: DocsSettings = Depends(get_settings)) -> PageResponse:
    content_dir = Path(settings.content_dir)
    path = find_page(content_dir, route)
    if path is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "PAGE_NOT_FOUND", "message": f"No page at /{route.strip('/')}"},
        )

    content = path.read_text(encoding="utf-8")
    title = page_title(path, content)
    return PageResponse(
        route="/" + route.strip("/"),
        title=title,
        document_title=title_template(settings).replace("%s", title, 1),
        source_path=path.relative_to(content_dir).as_posix(),
        content=content,
    )
