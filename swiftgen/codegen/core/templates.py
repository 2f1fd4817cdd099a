"""
Template engine wrapper for code generation.

Language generators keep their Jinja2 templates in a ``templates``
directory next to the generator module; this wrapper loads them and adds
the filters Swift output needs.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import (
    DictLoader,
    Environment,
    FileSystemLoader,
    Template,
    TemplateNotFound,
    select_autoescape,
)

from .naming import to_pascal_case


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


def indent_lines(value: str, prefix: str = "    ") -> str:
    """Prefix every non-blank line of ``value``."""
    return "\n".join(
        prefix + line if line.strip() else line for line in str(value).split("\n")
    )


def comment_lines(value: str, style: str = "///") -> str:
    """Turn text into a line comment block; blank lines keep a bare marker."""
    return "\n".join(
        f"{style} {line}" if line.strip() else style
        for line in str(value).split("\n")
    )


FILTERS = {
    "pascal_case": to_pascal_case,
    "indent_lines": indent_lines,
    "comment": comment_lines,
}


class TemplateEngine:
    """Jinja2 environment configured for source code output."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files. Without one
                only templates added with :meth:`add_template` are available.
        """
        self.template_dir = template_dir

        if template_dir and template_dir.exists():
            loader = FileSystemLoader(str(template_dir))
        else:
            loader = DictLoader({})

        # Generated code is never HTML, so nothing is escaped
        self._env = Environment(
            loader=loader,
            autoescape=select_autoescape(["html", "xml"], default_for_string=False),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.filters.update(FILTERS)

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a named template.

        Raises:
            TemplateError: If the template is missing or fails to render
        """
        try:
            template = self._env.get_template(template_name)
        except TemplateNotFound as e:
            raise TemplateError(f"Template not found: {template_name}") from e
        except Exception as e:
            raise TemplateError(f"Failed to load template {template_name}: {e}") from e
        return self._render(template, context, template_name)

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """Render template source given inline."""
        try:
            template = self._env.from_string(template_string)
        except Exception as e:
            raise TemplateError(f"Invalid template string: {e}") from e
        return self._render(template, context, "<string>")

    def _render(self, template: Template, context: Dict[str, Any], name: str) -> str:
        try:
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {name}: {e}") from e

    def add_template(self, name: str, content: str):
        """Register an in-memory template, replacing any file loader."""
        if not isinstance(self._env.loader, DictLoader):
            self._env.loader = DictLoader({})
        self._env.loader.mapping[name] = content

    def template_exists(self, template_name: str) -> bool:
        try:
            self._env.get_template(template_name)
        except TemplateNotFound:
            return False
        return True


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine for a directory, or an in-memory one."""
    return TemplateEngine(template_dir)
