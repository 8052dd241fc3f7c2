"""
TypeScript module generation for built content
"""

import json
import logging
import re
from pathlib import Path
from typing import Optional

from .config import CATEGORY_REGISTRY, get_category_config
from .utils import capitalized_singular, to_var_name, write_text_if_changed

logger = logging.getLogger(__name__)

HEADER = """/**
 * Auto-generated {kind}
 * Category: {plural_title}
 *
 * DO NOT EDIT MANUALLY
 * @see scripts/build_content.py
 */
"""

_ARRAY_PATTERN = re.compile(
    r'^export const \w+(?:Metadata|Full)\b[^=\n]*=\s*(\[\]|\[.*?^\]);',
    re.DOTALL | re.MULTILINE,
)


def to_json(value) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def _schema_import(config: dict) -> str:
    return (
        f"import type {{ {config['type_name']} }} from "
        f"'@/src/lib/schemas/content/{config['schema']}.schema';"
    )


def generate_metadata_file(category: str, metadata: list) -> str:
    """Metadata module: Pick type, array, by-slug map and getter"""
    config = get_category_config(category)
    var_name = to_var_name(category)
    singular = capitalized_singular(category)
    fields = " | ".join(f"'{field}'" for field in config["metadata_fields"])

    return (
        HEADER.format(kind="metadata file", plural_title=config["plural_title"])
        + "\n"
        + _schema_import(config) + "\n\n"
        + f"export type {singular}Metadata = Pick<{config['type_name']}, {fields}>;\n\n"
        + f"export const {var_name}Metadata: {singular}Metadata[] = {to_json(metadata)};\n\n"
        + f"export const {var_name}MetadataBySlug = new Map({var_name}Metadata.map(item => [item.slug, item]));\n\n"
        + f"export function get{singular}MetadataBySlug(slug: string): {singular}Metadata | null {{\n"
        + f"  return {var_name}MetadataBySlug.get(slug) || null;\n"
        + "}\n"
    )


def generate_full_content_file(category: str, items: list) -> str:
    """Full content module: array, by-slug map, getter and item type"""
    config = get_category_config(category)
    var_name = to_var_name(category)
    singular = capitalized_singular(category)

    return (
        HEADER.format(kind="full content file", plural_title=config["plural_title"])
        + "\n"
        + _schema_import(config) + "\n\n"
        + f"export const {var_name}Full: {config['type_name']}[] = {to_json(items)};\n\n"
        + f"export const {var_name}FullBySlug = new Map({var_name}Full.map(item => [item.slug, item]));\n\n"
        + f"export function get{singular}FullBySlug(slug: string) {{\n"
        + f"  return {var_name}FullBySlug.get(slug) || null;\n"
        + "}\n\n"
        + f"export type {singular}Full = typeof {var_name}Full[number];\n"
    )


def generate_index_file(content_stats: dict) -> str:
    """``content.ts``: lazy metadata getters, by-slug getters, full loaders and stats"""
    categories = list(CATEGORY_REGISTRY.keys())
    getters, compat, by_slug, loaders = [], [], [], []

    for category in categories:
        var_name = to_var_name(category)
        name = var_name[:1].upper() + var_name[1:]
        singular = capitalized_singular(category)

        getters.append(f"export const get{name} = () => metadataLoader.get('{var_name}Metadata');")
        compat.append(f"export const {var_name} = get{name}();")
        by_slug.append(
            f"export const get{singular}BySlug = async (slug: string) => {{\n"
            f"  const {var_name}Data = await get{name}();\n"
            f"  return ({var_name}Data as any[]).find(item => item.slug === slug);\n"
            "};"
        )
        loaders.append(
            f"export async function get{singular}FullContent(slug: string) {{\n"
            f"  const module = await import('./{category}-full');\n"
            f"  return module.get{singular}FullBySlug(slug);\n"
            "}"
        )

    stats = {category: int(content_stats.get(category, 0)) for category in categories}

    return (
        "/**\n"
        " * Auto-generated content index\n"
        " *\n"
        " * Metadata is loaded on demand via metadataLoader, full content is\n"
        " * lazy-loaded for detail pages.\n"
        " *\n"
        " * DO NOT EDIT MANUALLY\n"
        " * @see scripts/build_content.py\n"
        " */\n\n"
        "import { metadataLoader } from '@/src/lib/content/lazy-content-loaders';\n"
        "import type { ContentStats } from '@/src/lib/schemas/content/content-types';\n\n"
        "// Lazy metadata getters\n"
        + "\n".join(getters) + "\n\n"
        "// Backward compatibility exports\n"
        + "\n".join(compat) + "\n\n"
        "// By-slug getters\n"
        + "\n\n".join(by_slug) + "\n\n"
        "// Full content lazy loaders\n"
        + "\n\n".join(loaders) + "\n\n"
        "// Content statistics\n"
        f"export const contentStats: ContentStats = {to_json(stats)};\n"
    )


def read_generated_array(path: Path) -> Optional[list]:
    """
    Recover the JSON array exported by a generated metadata or full module.
    Returns None when the file is missing or cannot be parsed.
    """
    path = Path(path)
    if not path.exists():
        return None
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.debug(f"Could not read {path}: {e}")
        return None

    match = _ARRAY_PATTERN.search(text)
    if not match:
        logger.debug(f"No exported array found in {path}")
        return None
    try:
        data = json.loads(match.group(1))
    except json.JSONDecodeError as e:
        logger.debug(f"Garbled array in {path}: {e}")
        return None
    return data if isinstance(data, list) else None


def metadata_path(generated_dir: Path, category: str) -> Path:
    return Path(generated_dir) / f"{category}-metadata.ts"


def full_content_path(generated_dir: Path, category: str) -> Path:
    return Path(generated_dir) / f"{category}-full.ts"


def load_all_metadata(generated_dir: Path, categories: Optional[list] = None) -> dict:
    """Category -> metadata list read back from generated modules (empty when missing)"""
    categories = categories or list(CATEGORY_REGISTRY.keys())
    return {
        category: read_generated_array(metadata_path(generated_dir, category)) or []
        for category in categories
    }


def load_all_full_content(generated_dir: Path, categories: Optional[list] = None) -> dict:
    categories = categories or list(CATEGORY_REGISTRY.keys())
    return {
        category: read_generated_array(full_content_path(generated_dir, category)) or []
        for category in categories
    }


def write_build_output(path: Path, text: str) -> bool:
    """Write a generated file when its content changed. Returns True when written."""
    written = write_text_if_changed(Path(path), text)
    if written:
        logger.debug(f"  wrote {path}")
    return written
