"""
Content file parser
Parses and validates per-item JSON content files
"""

import json
import logging
from functools import lru_cache
from typing import Optional

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError

from .config import (
    MAX_CONTENT_FILE_SIZE, MAX_TITLE_LENGTH, SCHEMA_DIR, SITE_NAME, TITLE_SEPARATOR,
    get_category_config,
)
from .utils import display_title, slug_from_filename, slug_to_title

logger = logging.getLogger(__name__)


class ContentValidationError(Exception):
    """Raised when a content file cannot be parsed or fails schema validation"""

    def __init__(self, filename: str, messages: list):
        self.filename = filename
        self.messages = list(messages)
        super().__init__(f"{filename}: {'; '.join(self.messages)}")


@lru_cache(maxsize=None)
def load_schema(name: str) -> dict:
    """Load a schema from the schemas directory"""
    with open(SCHEMA_DIR / f"{name}.schema.json", encoding="utf-8") as f:
        return json.load(f)


@lru_cache(maxsize=None)
def get_validator(schema_name: str) -> Draft7Validator:
    """Validator for the base schema combined with a category schema"""
    schema = {"allOf": [load_schema("base"), load_schema(schema_name)]}
    Draft7Validator.check_schema(schema)
    return Draft7Validator(schema)


def max_content_title_length(plural_title: str) -> int:
    """Longest title that still fits once the category and site suffix is added"""
    suffix = len(TITLE_SEPARATOR) + len(plural_title) + len(TITLE_SEPARATOR) + len(SITE_NAME)
    return MAX_TITLE_LENGTH - suffix


class ContentParser:
    """Parse content JSON files into validated records"""

    @staticmethod
    def parse(raw_text: str, filename: str, category: str, defaults: Optional[dict] = None) -> dict:
        """
        Parse raw JSON text into a content record.

        Missing slug/title/category fields are filled in from the filename and
        category before validation. Keys in ``defaults`` are set when absent.

        Raises:
            ContentValidationError: on size, JSON or schema failures
        """
        config = get_category_config(category)

        if len(raw_text.encode("utf-8")) > MAX_CONTENT_FILE_SIZE:
            raise ContentValidationError(filename, [f"File exceeds {MAX_CONTENT_FILE_SIZE} bytes"])

        try:
            data = json.loads(raw_text)
        except json.JSONDecodeError as e:
            raise ContentValidationError(filename, [f"Invalid JSON: {e}"]) from e
        except RecursionError as e:
            raise ContentValidationError(filename, ["Invalid JSON: nesting too deep"]) from e

        if not isinstance(data, dict):
            raise ContentValidationError(filename, ["Root must be a JSON object"])

        for key, value in (defaults or {}).items():
            data.setdefault(key, value)

        data = ContentParser.apply_defaults(data, filename, category)
        ContentParser.validate(data, filename, config["schema"])

        if not data.get("seoTitle"):
            limit = max_content_title_length(config["plural_title"])
            if len(data["title"]) > limit:
                logger.warning(
                    f"  ⚠ {filename}: title is {len(data['title'])} chars "
                    f"(max {limit} before suffix), add a seoTitle"
                )

        return data

    @staticmethod
    def apply_defaults(data: dict, filename: str, category: str) -> dict:
        """Fill slug, title, displayTitle and category"""
        data = dict(data)
        if not data.get("slug"):
            data["slug"] = slug_from_filename(filename)
        slug = data["slug"] if isinstance(data["slug"], str) else slug_from_filename(filename)
        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            data["title"] = slug_to_title(slug)
        if not data.get("displayTitle"):
            data["displayTitle"] = display_title(data["title"])
        if not data.get("category"):
            data["category"] = category
        return data

    @staticmethod
    def validate(data: dict, filename: str, schema_name: str):
        try:
            validator = get_validator(schema_name)
        except (OSError, SchemaError) as e:
            raise ContentValidationError(filename, [f"Schema error: {e}"]) from e

        errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
        if errors:
            messages = []
            for error in errors[:10]:
                location = "/".join(str(p) for p in error.absolute_path) or "<root>"
                messages.append(f"{location}: {error.message}")
            raise ContentValidationError(filename, messages)

    @staticmethod
    def extract_metadata(item: dict, fields: Optional[list] = None) -> dict:
        """Subset of the item in field order, skipping missing keys"""
        if fields is None:
            fields = get_category_config(item.get("category", "agents"))["metadata_fields"]
        return {field: item[field] for field in fields if field in item}
