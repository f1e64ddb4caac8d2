"""Jinja2 template rendering for generated project files.

Templates live under ``autoforge/rendering/templates/`` grouped by category.
User supplied text (project names, raw commands) only reaches generated
source through escaping filters: ``tojson`` for JavaScript, ``pyrepr`` for
Python and HTML autoescaping for ``.html.j2`` templates.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, select_autoescape

from autoforge.domain.errors import TemplateRenderError


_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateRenderer:
    """Renders ``.j2`` templates with a project context."""

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(enabled_extensions=("html.j2",), default_for_string=False),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["slugify"] = slugify
        self.env.filters["pascal_case"] = pascal_case
        self.env.filters["snake_case"] = snake_case
        self.env.filters["pyrepr"] = repr

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"web_app/server.js.j2"``).
            context: Dictionary of variables available inside the template.

        Raises:
            TemplateRenderError: The template is missing, malformed or refers
                to a variable the context does not provide.
        """
        try:
            template = self.env.get_template(template_path)
            return template.render(**context)
        except TemplateError as exc:
            raise TemplateRenderError(f"Failed to render {template_path}: {exc}") from exc


# ---------------------------------------------------------------------------
# Name filters
# ---------------------------------------------------------------------------


def slugify(value: str) -> str:
    """Package-manager friendly name: ``"My Todo App"`` -> ``"my-todo-app"``."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    return slug or "app"


def pascal_case(value: str) -> str:
    """Identifier safe class name: ``"my todo-app"`` -> ``"MyTodoApp"``."""
    words = re.findall(r"[A-Za-z0-9]+", value)
    name = "".join(word[:1].upper() + word[1:] for word in words)
    if not name or name[0].isdigit():
        name = "Project" + name
    return name


def snake_case(value: str) -> str:
    """``"My Todo App"`` -> ``"my_todo_app"``."""
    return slugify(value).replace("-", "_")
