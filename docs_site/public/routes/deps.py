"""Shared route dependencies."""
from docs_site.public.settings import DocsSettings, settings


def get_settings() -> DocsSettings:
    return settings
