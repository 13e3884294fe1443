"""
Schema codegen acceptance tests.

The external renderer is replaced by the `fake_renderer` fixture (see the
root conftest.py) so these run without quicktype installed.
"""

import json
import subprocess
from pathlib import Path

import pytest

from contract_kits.error_taxonomy import InvalidSchema, OutputWriteError, ToolingError
from contract_kits.schema_codegen.generator import (
    LAYOUT_PACKAGE,
    binding_name,
    generate_types_from_schema,
    output_path,
)
from contract_kits.schema_codegen import renderer as renderer_module
from contract_kits.schema_codegen.renderer import QuicktypeRenderer
from contract_kits.schema_codegen.schema import load_schema, parse_schema, schema_sources


def _write_schema(folder: Path, schema: dict) -> Path:
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / "schema.json"
    path.write_text(json.dumps(schema), encoding="utf-8")
    return path


def test_regeneration_is_byte_identical(tmp_path, contract_schema, fake_renderer):
    """Same schema in, same bytes out."""
    schema_path = _write_schema(tmp_path / "vault-router", contract_schema)

    first = generate_types_from_schema(schema_path, tmp_path / "a", language="go", renderer=fake_renderer)
    second = generate_types_from_schema(schema_path, tmp_path / "b", language="go", renderer=fake_renderer)

    assert first.read_bytes() == second.read_bytes()


def test_sources_registered_in_fixed_order(contract_schema):
    names = [name for name, _ in schema_sources(parse_schema(contract_schema))]
    assert names == ["InstantiateMsg", "ExecuteMsg", "QueryMsg", "list_vaults", "is_whitelisted"]


def test_empty_query_enum_emits_no_query_type(tmp_path, contract_schema, fake_renderer):
    contract_schema["query"] = {"title": "QueryMsg", "type": "string", "enum": []}
    contract_schema["responses"] = {}
    schema_path = _write_schema(tmp_path / "pauser", contract_schema)

    path = generate_types_from_schema(schema_path, tmp_path / "out", language="typescript", renderer=fake_renderer)

    assert fake_renderer.calls == [(["InstantiateMsg", "ExecuteMsg"], "typescript")]
    assert "QueryMsg" not in path.read_text(encoding="utf-8")


def test_query_without_enum_is_rendered(contract_schema):
    contract_schema["query"] = {"title": "QueryMsg", "type": "object"}
    names = [name for name, _ in schema_sources(parse_schema(contract_schema))]
    assert "QueryMsg" in names


def test_missing_query_is_skipped(contract_schema):
    del contract_schema["query"]
    names = [name for name, _ in schema_sources(parse_schema(contract_schema))]
    assert "QueryMsg" not in names


def test_go_binding_has_header_and_package_clause(tmp_path, contract_schema, fake_renderer):
    schema_path = _write_schema(tmp_path / "src", contract_schema)

    path = generate_types_from_schema(
        schema_path, tmp_path / "out", language="go", layout=LAYOUT_PACKAGE, renderer=fake_renderer
    )

    assert path == tmp_path / "out" / "vault-router" / "schema.go"
    lines = path.read_text(encoding="utf-8").split("\n")
    assert lines[0] == "// This file was automatically generated from vault-router/schema.json."
    assert lines[1] == "// DO NOT MODIFY IT BY HAND."
    assert lines[2] == ""
    assert lines[3] == "package vaultrouter"
    assert lines[4] == "type InstantiateMsg {owner, pauser}"


def test_typescript_flat_layout_names_schema_file(tmp_path, contract_schema, fake_renderer):
    schema_path = _write_schema(tmp_path / "src", contract_schema)

    path = generate_types_from_schema(schema_path, tmp_path / "types", renderer=fake_renderer)

    assert path == tmp_path / "types" / "vault-router.ts"
    content = path.read_text(encoding="utf-8")
    assert content.startswith("// This file was automatically generated from schema.json.\n")
    assert "package " not in content


def test_python_binding_uses_hash_comments(tmp_path, contract_schema, fake_renderer):
    schema_path = _write_schema(tmp_path / "src", contract_schema)
    path = generate_types_from_schema(schema_path, tmp_path, language="python", renderer=fake_renderer)
    assert path.suffix == ".py"
    assert path.read_text(encoding="utf-8").startswith("# This file was automatically generated")


def test_unknown_language_falls_back_to_txt(tmp_path):
    assert output_path(tmp_path, "registry", "kotlin") == tmp_path / "registry.txt"


def test_binding_name_strips_prefix_or_uses_folder(tmp_path, contract_schema):
    assert binding_name(parse_schema(contract_schema)) == "vault-router"

    del contract_schema["contract_name"]
    schema_path = _write_schema(tmp_path / "rewards", contract_schema)
    assert binding_name(load_schema(schema_path), schema_path) == "rewards"


def test_missing_execute_is_invalid(contract_schema):
    del contract_schema["execute"]
    with pytest.raises(InvalidSchema):
        parse_schema(contract_schema)


def test_malformed_source_schema_is_invalid(contract_schema):
    contract_schema["instantiate"] = {"type": 12}
    with pytest.raises(InvalidSchema) as exc:
        schema_sources(parse_schema(contract_schema))
    assert "InstantiateMsg" in str(exc.value)


def test_malformed_json_is_invalid(tmp_path):
    path = tmp_path / "schema.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(InvalidSchema):
        load_schema(path)


def test_unwritable_output_raises_io_error(tmp_path, contract_schema, fake_renderer):
    schema_path = _write_schema(tmp_path / "src", contract_schema)
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(OutputWriteError):
        generate_types_from_schema(schema_path, blocker, renderer=fake_renderer)


def test_quicktype_command_renders_types_only():
    renderer = QuicktypeRenderer(executable="quicktype")
    cmd = renderer.command([Path("InstantiateMsg.json"), Path("ExecuteMsg.json")], "go")
    assert cmd == [
        "quicktype",
        "--src-lang", "schema",
        "--lang", "go",
        "--just-types",
        "InstantiateMsg.json",
        "ExecuteMsg.json",
    ]


def test_missing_quicktype_is_reported(contract_schema):
    renderer = QuicktypeRenderer(executable="quicktype-not-installed-here")
    with pytest.raises(ToolingError) as exc:
        renderer.render(schema_sources(parse_schema(contract_schema)), "go")
    assert "quicktype executable not found" in str(exc.value)


def test_slow_quicktype_raises_tooling_error(monkeypatch, contract_schema):
    def hang(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr(renderer_module.shutil, "which", lambda exe: "/usr/bin/quicktype")
    monkeypatch.setattr(renderer_module.subprocess, "run", hang)

    renderer = QuicktypeRenderer(executable="quicktype", timeout_s=5)
    with pytest.raises(ToolingError) as exc:
        renderer.render(schema_sources(parse_schema(contract_schema)), "go")
    assert "did not finish within 5s" in str(exc.value)
    assert isinstance(exc.value.__cause__, subprocess.TimeoutExpired)
