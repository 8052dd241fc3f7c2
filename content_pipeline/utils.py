"""
Shared helpers for the content pipeline.
"""

import hashlib
import os
import re
import tempfile
from pathlib import Path

# Words kept upper-case in display titles
ACRONYMS = {
    "api", "mcp", "ai", "cli", "sql", "json", "ui", "ux", "ci", "cd", "aws",
    "gcp", "seo", "url", "pr", "db", "llm", "sdk", "css", "html", "jwt", "ssh",
}


def slugify(name: str) -> str:
    """
    Normalize a name into a URL slug: lowercase, hyphens, max 64 chars.

    Examples:
        "Code Reviewer" -> "code-reviewer"
        "GitHub_MCP" -> "github-mcp"
        "  --Weird!!Name-- " -> "weird-name"
    """
    if not name:
        return "unknown"
    name = re.sub(r'[^a-z0-9]+', '-', name.lower())
    name = re.sub(r'-+', '-', name).strip('-')
    return name[:64].rstrip('-') if name else "unknown"


def slug_from_filename(filename: str) -> str:
    """Derive a slug from a content filename (``tutorials/foo-bar.json`` -> ``foo-bar``)."""
    base = os.path.basename(filename)
    if base.endswith(".json"):
        base = base[:-5]
    return slugify(base)


def slug_to_title(slug: str) -> str:
    return " ".join(word.capitalize() for word in slug.split("-") if word)


def display_title(text: str) -> str:
    """Title-case a string, keeping known acronyms upper-case."""
    words = []
    for word in re.split(r'[\s_-]+', text.strip()):
        if not word:
            continue
        if word.lower() in ACRONYMS:
            words.append(word.upper())
        elif word.isupper() or any(c.isupper() for c in word[1:]):
            # Preserve deliberate casing like "GitHub" or "PostgreSQL"
            words.append(word)
        else:
            words.append(word[0].upper() + word[1:])
    return " ".join(words)


def to_var_name(category: str) -> str:
    """``kebab-case`` -> ``camelCase``"""
    return re.sub(r'-([a-z])', lambda m: m.group(1).upper(), category)


def singular_name(category: str) -> str:
    var_name = to_var_name(category)
    return re.sub(r's$', '', var_name).replace("Servers", "Server")


def capitalized_singular(category: str) -> str:
    name = singular_name(category)
    return name[:1].upper() + name[1:]


def short_hash(value: str) -> str:
    return hashlib.sha1(value.encode("utf-8", errors="ignore")).hexdigest()[:8]


def write_text_if_changed(path: Path, text: str) -> bool:
    """
    Write text atomically, skipping the write when the file already holds
    identical content. Returns True when the file was written.
    """
    path = Path(path)
    if path.exists():
        try:
            if path.read_text(encoding="utf-8") == text:
                return False
        except OSError:
            pass

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(temp_name, path)
    except BaseException:
        if os.path.exists(temp_name):
            os.unlink(temp_name)
        raise
    return True
