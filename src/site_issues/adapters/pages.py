"""Read site pages that carry YAML front matter."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

PAGE_SUFFIXES = (".md", ".markdown", ".html")

_FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)^---[ \t]*\r?$\n?", re.DOTALL | re.MULTILINE)


@dataclass
class Page:
    """A source page: its front-matter data and the remaining content."""

    path: Path
    data: dict[str, Any] = field(default_factory=dict)
    content: str = ""


def parse_front_matter(text: str, *, source: str = "<page>") -> tuple[dict[str, Any], str] | None:
    """Split ``text`` into front-matter data and content.

    Returns ``None`` when the text has no front matter block.
    """
    match = _FRONT_MATTER_RE.match(text)
    if match is None:
        return None
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        raise ValueError(f"Failed to parse front matter in {source}: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid front matter in {source}: must be a YAML mapping")
    return data, text[match.end():]


def load_pages(source_dir: str | Path) -> list[Page]:
    """Load every page with front matter under ``source_dir``.

    Paths with a component starting with ``_`` or ``.`` are skipped, as are
    files without front matter. Pages come back sorted by relative path.
    """
    root = Path(source_dir)
    if not root.is_dir():
        raise FileNotFoundError(f"Site source directory not found: {root}")

    pages: list[Page] = []
    for path in sorted(root.rglob("*")):
        relative = path.relative_to(root)
        if not path.is_file() or path.suffix.lower() not in PAGE_SUFFIXES:
            continue
        if any(part.startswith(("_", ".")) for part in relative.parts):
            continue
        parsed = parse_front_matter(path.read_text(encoding="utf-8"), source=str(path))
        if parsed is None:
            continue
        data, content = parsed
        pages.append(Page(path=relative, data=data, content=content))
    return pages
