"""Markdown and template rendering.

Markdown goes through mistune with GitHub-flavored plugins and heading ids;
pages are wrapped with Jinja2 templates looked up in the template root, with
the templates bundled in the package as fallback.
"""

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import mistune
import yaml
from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    TemplateError,
    select_autoescape,
)
from markupsafe import Markup
from mistune.toc import add_toc_hook

from staticdocs.errors import RenderError

logger = logging.getLogger(__name__)

FRONT_MATTER_PATTERN = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)

_SLUG_STRIP = re.compile(r"[^\w\s-]")
_SLUG_SPACES = re.compile(r"[\s_-]+")

MARKDOWN_PLUGINS = ["strikethrough", "table", "url", "task_lists", "footnotes"]


@dataclass
class TocEntry:
    """Table of contents entry."""

    level: int
    title: str
    id: str


@dataclass
class RenderedDocument:
    """Result of rendering a markdown document."""

    html: str
    title: str | None
    toc: list[TocEntry]
    front_matter: dict[str, Any] = field(default_factory=dict)


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Separate a leading YAML front matter block from the markdown body.

    Returns:
        (front matter mapping, remaining markdown)
    """
    match = FRONT_MATTER_PATTERN.match(text)
    if match is None:
        return {}, text

    try:
        data = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as e:
        raise RenderError(f"Invalid front matter: {e}") from e
    if not isinstance(data, dict):
        logger.warning("Ignoring front matter that is not a mapping")
        data = {}
    return data, text[match.end() :]


def slugify(text: str) -> str:
    slug = _SLUG_STRIP.sub("", text.lower()).strip()
    return _SLUG_SPACES.sub("-", slug).strip("-")


def unique_heading_ids() -> Callable[[dict[str, Any], int], str]:
    """Heading id factory for mistune's toc hook.

    Ids are slugs of the heading text, suffixed with a counter on repeats.
    The hook numbers headings from 0 in every document, which resets the
    counters.
    """
    seen: dict[str, int] = {}

    def heading_id(token: dict[str, Any], index: int) -> str:
        if index == 0:
            seen.clear()
        base = slugify(token.get("text", "")) or "section"
        count = seen.get(base, 0)
        seen[base] = count + 1
        return base if count == 0 else f"{base}-{count}"

    return heading_id


class MarkdownRenderer:
    """Converts markdown documents to HTML fragments."""

    def __init__(self) -> None:
        self._markdown = mistune.create_markdown(escape=True, plugins=MARKDOWN_PLUGINS)
        add_toc_hook(
            self._markdown,
            min_level=1,
            max_level=6,
            heading_id=unique_heading_ids(),
        )

    def convert(self, markdown_text: str) -> RenderedDocument:
        """Convert markdown text, front matter included, to HTML.

        Raises:
            RenderError: If the front matter is not valid YAML
        """
        front_matter, body = split_front_matter(markdown_text)
        html, state = self._markdown.parse(body)
        toc = [
            TocEntry(level=level, title=Markup(title).unescape(), id=heading_id)
            for level, heading_id, title in state.env.get("toc_items", [])
        ]

        title = front_matter.get("title")
        if not isinstance(title, str):
            title = next((entry.title for entry in toc if entry.level == 1), None)

        logger.debug(f"Converted {len(markdown_text)} characters of markdown")
        return RenderedDocument(
            html=str(html),
            title=title,
            toc=toc,
            front_matter=front_matter,
        )

    def render_file(self, source_path: Path) -> RenderedDocument:
        """Read and convert a markdown file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            RenderError: If the front matter is not valid YAML
        """
        try:
            return self.convert(source_path.read_text(encoding="utf-8"))
        except RenderError as e:
            raise RenderError(f"{source_path}: {e}") from e


class TemplateRenderer:
    """Renders named page templates ("doc", "404")."""

    def __init__(self, template_root: Path) -> None:
        self._template_root = template_root
        self._env = Environment(
            loader=ChoiceLoader(
                [
                    FileSystemLoader(template_root),
                    PackageLoader("staticdocs", "templates"),
                ]
            ),
            autoescape=select_autoescape(["html"]),
        )

    @property
    def template_root(self) -> Path:
        return self._template_root

    def render(self, name: str, context: Mapping[str, Any]) -> str:
        """Render template ``<name>.html`` with the given variables.

        Raises:
            RenderError: If the template is missing, malformed or fails to render
        """
        try:
            template = self._env.get_template(f"{name}.html")
            return template.render(**context)
        except TemplateError as e:
            raise RenderError(f"Failed to render template {name}.html: {e}") from e


def mark_safe(html: str) -> Markup:
    """Mark rendered markdown as safe for template interpolation."""
    return Markup(html)
