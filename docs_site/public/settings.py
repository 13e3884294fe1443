"""
Documentation site settings.
Externalizes config so the same app serves local previews and hosted docs.
"""
import os


class DocsSettings:
    """Docs site settings with environment variable support."""

    def __init__(self):
        self.content_dir: str = os.getenv("DOCS_CONTENT_DIR", "docs/content")
        self.bindings_dir: str = os.getenv("DOCS_BINDINGS_DIR", "modules/cosmwasm-schema")
        self.site_url: str = os.getenv("DOCS_SITE_URL", "https://build.satlayer.xyz")
        self.site_title: str = os.getenv("DOCS_SITE_TITLE", "SatLayer Docs")
        self.banner_text: str = os.getenv(
            "DOCS_BANNER_TEXT",
            "🚧 Work in progress! This site is under construction.",
        )
        self.docs_repository_base: str = os.getenv(
            "DOCS_REPOSITORY_BASE",
            "https://github.com/satlayer/satlayer-bvs/tree/main/docs",
        )
        self.default_menu_collapse_level: int = int(os.getenv("DOCS_MENU_COLLAPSE_LEVEL", "2"))
        self.api_version: str = os.getenv("API_VERSION", "1.0.0")
        self.enable_access_logging: bool = os.getenv("ENABLE_ACCESS_LOGGING", "true").lower() == "true"


settings = DocsSettings()
