"""
Prompt template loader and renderer for AgeCompute.

Loads prompt templates from the packaged templates directory
and supports variable substitution.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).resolve().parent / "templates"

_VARIABLE_PATTERN = re.compile(r"\{\{(\w+)\}\}")


class PromptLoader:
    """
    Prompt template loader with caching and variable substitution.

    Templates are loaded from templates/*.md files.
    Variables use Mustache-style syntax: {{variable_name}}

    Usage:
        loader = PromptLoader()
        system_prompt = loader.load("system")
        insight_prompt = loader.render("insight", birth_date="1995-01-01", ...)
    """

    def __init__(self, prompts_dir: Path | None = None):
        """
        Initialize prompt loader.

        Args:
            prompts_dir: Custom prompts directory (defaults to packaged templates)
        """
        self.prompts_dir = prompts_dir or PROMPTS_DIR
        self._cache: dict[str, str] = {}
        logger.debug("PromptLoader initialized with dir: %s", self.prompts_dir)

    def load(self, name: str) -> str:
        """
        Load prompt template by name (with caching).

        Args:
            name: Template name (without .md extension)

        Returns:
            Template content as string

        Raises:
            FileNotFoundError: If template file doesn't exist
        """
        if name in self._cache:
            return self._cache[name]

        file_path = self.prompts_dir / f"{name}.md"

        if not file_path.exists():
            raise FileNotFoundError(f"Prompt template not found: {file_path}")

        content = file_path.read_text(encoding="utf-8")
        self._cache[name] = content

        logger.debug("Loaded prompt '%s': %d chars", name, len(content))
        return content

    def render(self, name: str, **kwargs: Any) -> str:
        """
        Load template and substitute {{variable}} placeholders.

        Placeholders without a matching keyword are left as-is.

        Args:
            name: Template name
            **kwargs: Variables to substitute

        Returns:
            Rendered template
        """
        template = self.load(name)

        def replacer(match: re.Match[str]) -> str:
            var_name = match.group(1)
            if var_name in kwargs:
                return str(kwargs[var_name])
            logger.warning("Variable '%s' not provided for template '%s'", var_name, name)
            return match.group(0)

        return _VARIABLE_PATTERN.sub(replacer, template)
