"""
Docs site API tests.

The app runs against a temporary content tree through a settings override;
startup hooks are not triggered (TestClient is used without `with`).
"""

import json
import logging

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from docs_site.public.main import app
from docs_site.public.page_map import find_page
from docs_site.public.routes.bindings import _resolve
from docs_site.public.routes.deps import get_settings
from docs_site.public.settings import DocsSettings
from docs_site.startup import prepare_content_dir


@pytest.fixture
def content_dir(tmp_path):
    root = tmp_path / "content"
    (root / "guides").mkdir(parents=True)
    (root / "index.mdx").write_text("# Welcome\n\nHello.\n", encoding="utf-8")
    (root / "alpha.md").write_text("Alpha body\n", encoding="utf-8")
    (root / "zeta.md").write_text("# Zeta\n", encoding="utf-8")
    (root / "_hidden.md").write_text("# Hidden\n", encoding="utf-8")
    (root / "_meta.json").write_text(
        json.dumps({"guides": "Guides", "zeta": {"title": "Zeta Page"}}), encoding="utf-8"
    )
    (root / "guides" / "index.md").write_text("# Guides\n", encoding="utf-8")
    (root / "guides" / "install.mdx").write_text(
        "---\ntitle: Install the CLI\n---\n\n# Installing\n", encoding="utf-8"
    )
    return root


@pytest.fixture
def bindings_dir(tmp_path):
    root = tmp_path / "cosmwasm-schema"
    (root / "pauser").mkdir(parents=True)
    (root / "vault-router").mkdir()
    (root / "pauser" / "schema.go").write_text("package pauser\n", encoding="utf-8")
    (root / "vault-router" / "schema.ts").write_text("export interface InstantiateMsg {}\n", encoding="utf-8")
    (root / "README.md").write_text("not a binding\n", encoding="utf-8")
    return root


@pytest.fixture
def client(content_dir, bindings_dir):
    settings = DocsSettings()
    settings.content_dir = str(content_dir)
    settings.bindings_dir = str(bindings_dir)
    settings.site_title = "SatLayer Docs"
    settings.site_url = "https://build.satlayer.xyz"
    settings.default_menu_collapse_level = 2

    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_layout(client):
    body = client.get("/api/layout").json()

    assert body["metadata_base"] == "https://build.satlayer.xyz"
    assert body["title"] == {"default": "SatLayer Docs", "template": "%s | SatLayer Docs"}
    assert body["banner"]["storage_key"] == "wip"
    assert body["banner"]["dismissible"] is False
    assert body["sidebar"]["default_menu_collapse_level"] == 2


def test_page_map_orders_meta_entries_first(client):
    items = client.get("/api/page-map").json()

    assert [item["name"] for item in items] == ["guides", "zeta", "index", "alpha"]
    guides, zeta = items[0], items[1]
    assert guides["kind"] == "folder" and guides["title"] == "Guides"
    assert zeta["title"] == "Zeta Page"
    assert items[2]["route"] == "/"
    assert [(c["name"], c["route"]) for c in guides["children"]] == [
        ("index", "/guides"),
        ("install", "/guides/install"),
    ]


def test_page_uses_front_matter_title(client):
    body = client.get("/api/pages/guides/install").json()

    assert body["route"] == "/guides/install"
    assert body["title"] == "Install the CLI"
    assert body["document_title"] == "Install the CLI | SatLayer Docs"
    assert body["source_path"] == "guides/install.mdx"


def test_root_page_uses_heading_title(client):
    body = client.get("/api/pages/").json()
    assert body["title"] == "Welcome"
    assert body["source_path"] == "index.mdx"


def test_document_title_with_percent_signs(client, content_dir):
    settings = app.dependency_overrides[get_settings]()
    settings.site_title = "100% Restaked"
    (content_dir / "rates.md").write_text("---\ntitle: APY in %s and %d\n---\n", encoding="utf-8")

    response = client.get("/api/pages/rates")

    assert response.status_code == 200
    assert response.json()["document_title"] == "APY in %s and %d | 100% Restaked"


def test_missing_page_returns_error_envelope(client):
    response = client.get("/api/pages/nope", headers={"X-Request-ID": "req-123"})

    assert response.status_code == 404
    assert response.headers["X-Request-ID"] == "req-123"
    body = response.json()
    assert body["trace_id"] == "req-123"
    assert body["status"] == "error"
    assert body["error"]["code"] == "PAGE_NOT_FOUND"


def test_hidden_and_escaping_routes_are_not_pages(content_dir):
    assert find_page(content_dir, "_hidden") is None
    assert find_page(content_dir, "../content/index") is None
    assert find_page(content_dir, "guides") == content_dir / "guides" / "index.md"


def test_list_bindings(client):
    assert client.get("/api/bindings").json() == [
        {"path": "pauser/schema.go", "language": "go", "size_bytes": len("package pauser\n")},
        {"path": "vault-router/schema.ts", "language": "typescript",
         "size_bytes": len("export interface InstantiateMsg {}\n")},
    ]


def test_get_binding(client):
    body = client.get("/api/bindings/pauser/schema.go").json()
    assert body == {"path": "pauser/schema.go", "language": "go", "content": "package pauser\n"}

    response = client.get("/api/bindings/README.md")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "BINDING_NOT_FOUND"


def test_binding_paths_cannot_escape(bindings_dir):
    with pytest.raises(HTTPException) as exc:
        _resolve(bindings_dir, "../content/index.mdx")
    assert exc.value.status_code == 400


def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["service"] == "satlayer-docs"
    assert body["content_dir_exists"] is True


def test_prepare_content_dir_seeds_landing_page(tmp_path):
    content = prepare_content_dir(tmp_path / "docs" / "content")
    index = content / "index.mdx"
    assert index.read_text(encoding="utf-8").startswith("---\ntitle: SatLayer Docs\n---")


def test_prepare_content_dir_keeps_existing_pages(content_dir):
    before = (content_dir / "index.mdx").read_text(encoding="utf-8")
    prepare_content_dir(content_dir)
    assert (content_dir / "index.mdx").read_text(encoding="utf-8") == before


def test_access_log_uses_response_request_id(client, caplog):
    with caplog.at_level(logging.INFO, logger="docs_site.access"):
        response = client.get("/api/pages/missing")

    entries = [json.loads(r.getMessage()) for r in caplog.records if r.name == "docs_site.access"]
    assert entries[-1]["request_id"] == response.headers["X-Request-ID"]
    assert entries[-1]["http_status"] == 404
    assert entries[-1]["error_code"] == "NOT_FOUND"
