"""
Schema Codegen - Generator

Turn one contract schema into one generated binding file:

    // This file was automatically generated from schema.json.
    // DO NOT MODIFY IT BY HAND.

    package vaultrouter
    ...rendered types...

Output is a pure function of the schema and the renderer: no timestamps,
sources registered in a fixed order.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from contract_kits.error_taxonomy import OutputWriteError
from contract_kits.schema_codegen.renderer import QuicktypeRenderer, Renderer
from contract_kits.schema_codegen.schema import ContractSchema, load_schema, schema_sources

logger = logging.getLogger(__name__)

CONTRACT_NAME_PREFIX = "bvs-"

LAYOUT_FLAT = "flat"
LAYOUT_PACKAGE = "package"


@dataclass(frozen=True)
class LanguageSpec:
    extension: str
    comment: str
    package_clause: bool = False


LANGUAGES = {
    "go": LanguageSpec(extension="go", comment="//", package_clause=True),
    "typescript": LanguageSpec(extension="ts", comment="//"),
    "python": LanguageSpec(extension="py", comment="#"),
}
FALLBACK_LANGUAGE = LanguageSpec(extension="txt", comment="//")


def language_spec(language: str) -> LanguageSpec:
    return LANGUAGES.get(language, FALLBACK_LANGUAGE)


def binding_name(schema: ContractSchema, schema_path: Optional[Path] = None) -> str:
    """contract_name without the `bvs-` prefix; falls back to the schema's folder name."""
    name = schema.contract_name
    if not name and schema_path is not None:
        name = Path(schema_path).resolve().parent.name
    if not name:
        name = "schema"
    if name.startswith(CONTRACT_NAME_PREFIX):
        name = name[len(CONTRACT_NAME_PREFIX):]
    return name


def render_binding(
    schema: ContractSchema,
    *,
    name: str,
    source_label: str,
    language: str = "go",
    renderer: Optional[Renderer] = None,
) -> str:
    renderer = renderer or QuicktypeRenderer()
    spec = language_spec(language)

    lines = renderer.render(schema_sources(schema), language)

    content: List[str] = [
        f"{spec.comment} This file was automatically generated from {source_label}.",
        f"{spec.comment} DO NOT MODIFY IT BY HAND.",
        "",
    ]
    if spec.package_clause:
        content.append("package " + name.replace("-", ""))
    content.extend(lines)
    return "\n".join(content)


def output_path(out_dir: Path, name: str, language: str, layout: str = LAYOUT_FLAT) -> Path:
    ext = language_spec(language).extension
    if layout == LAYOUT_PACKAGE:
        return Path(out_dir) / name / f"schema.{ext}"
    return Path(out_dir) / f"{name}.{ext}"


def write_binding(path: Path, content: str) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(f"Cannot write generated binding to {path}", detail=str(e)) from e
    return path


def generate_from_schema(
    schema: ContractSchema,
    out_dir: Path | str = ".",
    *,
    language: str = "go",
    layout: str = LAYOUT_FLAT,
    schema_path: Optional[Path] = None,
    renderer: Optional[Renderer] = None,
) -> Path:
    """
    Render and write a binding for an already-loaded schema.

    Flat layout names the schema file in the header; package layout names
    `<name>/schema.json`, matching where the schema sits in a bindings tree.
    """
    name = binding_name(schema, schema_path)
    if layout == LAYOUT_PACKAGE or schema_path is None:
        source_label = f"{name}/schema.json"
    else:
        source_label = Path(schema_path).name

    content = render_binding(
        schema,
        name=name,
        source_label=source_label,
        language=language,
        renderer=renderer,
    )
    path = write_binding(output_path(Path(out_dir), name, language, layout), content)
    logger.info("Successfully generated %s", path)
    return path


def generate_types_from_schema(
    schema_path: Path | str,
    out_dir: Path | str = ".",
    *,
    language: str = "typescript",
    layout: str = LAYOUT_FLAT,
    renderer: Optional[Renderer] = None,
) -> Path:
    schema_path = Path(schema_path)
    schema = load_schema(schema_path)
    return generate_from_schema(
        schema,
        out_dir,
        language=language,
        layout=layout,
        schema_path=schema_path,
        renderer=renderer,
    )
