"""Prompt template with ``{name}`` placeholders.

The packaged template lives next to this module as ``prompt.st``.
"""

import logging
import re
from pathlib import Path
from typing import Any, Tuple

from rag_example.core.config import Settings
from rag_example.core.errors import PromptTemplateMissing

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_PATH = Path(__file__).resolve().parent / "prompt.st"

PLACEHOLDER_REGEX = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


class PromptTemplate:
    """Immutable template text filled at request time.

    Placeholders are replaced in a single pass, so substituted values are
    never scanned for further placeholders and are inserted unescaped.
    """

    __slots__ = ("_text", "_variables")

    def __init__(self, text: str):
        self._text = text
        self._variables = tuple(dict.fromkeys(PLACEHOLDER_REGEX.findall(text)))

    @property
    def text(self) -> str:
        return self._text

    @property
    def variables(self) -> Tuple[str, ...]:
        """Placeholder names in order of first appearance."""
        return self._variables

    @classmethod
    def from_file(cls, path: str | Path) -> "PromptTemplate":
        """Reads a template from ``path``.

        Raises:
            PromptTemplateMissing: If the file cannot be read.
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            logger.critical(f"Prompt template could not be read from {path}: {e}")
            raise PromptTemplateMissing(f"Prompt template not found at {path}") from e
        template = cls(text)
        logger.info(f"Loaded prompt template from {path} (placeholders: {', '.join(template.variables)})")
        return template

    @classmethod
    def load(cls, settings: Settings) -> "PromptTemplate":
        """Loads the configured template, falling back to the packaged one."""
        return cls.from_file(settings.prompt_template_path or DEFAULT_TEMPLATE_PATH)

    def render(self, **values: Any) -> str:
        """Fills every placeholder with ``str(values[name])``.

        Raises:
            ValueError: If a placeholder has no value. Extra values are ignored.
        """
        missing = [name for name in self._variables if name not in values]
        if missing:
            raise ValueError(f"Missing values for prompt placeholders: {', '.join(missing)}")
        return PLACEHOLDER_REGEX.sub(lambda match: str(values[match.group(1)]), self._text)

    def __repr__(self) -> str:
        return f"PromptTemplate(variables={self._variables!r})"
