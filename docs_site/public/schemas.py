"""
Pydantic models for docs site responses.
These mirror the layout and navigation configuration of the documentation theme.
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import datetime


class TitleConfig(BaseModel):
    default: str = Field(..., description="Title used when a page declares none")
    template: str = Field(..., description="Document title template; %s is the page title")


class BannerConfig(BaseModel):
    storage_key: str = Field("wip", description="Key remembering a dismissed banner")
    dismissible: bool = Field(False, description="Whether readers can close the banner")
    text: str


class SidebarConfig(BaseModel):
    default_menu_collapse_level: int = Field(2, ge=1, description="Folders deeper than this start collapsed")


class LayoutConfig(BaseModel):
    """Site-wide layout: metadata, banner, sidebar, edit links."""
    metadata_base: str = Field(..., description="Absolute base URL of the site")
    title: TitleConfig
    banner: BannerConfig
    sidebar: SidebarConfig
    docs_repository_base: str = Field(..., description="Base URL for 'edit this page' links")


class PageMapItem(BaseModel):
    name: str = Field(..., description="File or folder name without extension")
    route: str = Field(..., description="URL route, e.g. /getting-started/install")
    title: str
    kind: str = Field(..., description="'page' or 'folder'")
    children: List["PageMapItem"] = Field(default_factory=list)


class PageResponse(BaseModel):
    route: str
    title: str
    document_title: str = Field(..., description="Title with the site template applied")
    source_path: str = Field(..., description="Path relative to the content directory")
    content: str


class BindingFile(BaseModel):
    path: str = Field(..., description="Path relative to the bindings directory")
    language: str
    size_bytes: int


class BindingContent(BaseModel):
    path: str
    language: str
    content: str


class ErrorResponse(BaseModel):
    """Standard error response."""
    trace_id: str = Field(..., description="Unique request ID")
    status: str = Field(default="error", description="Always 'error'")
    error: Dict[str, Any] = Field(..., description="Error details with 'code', 'message', optional 'detail'")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="'ok' if healthy")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="API version")
    commit: str = Field(..., description="Git commit hash")
    timestamp: datetime = Field(..., description="Current time (ISO8601)")
    content_dir_exists: Optional[bool] = None


PageMapItem.model_rebuild()
