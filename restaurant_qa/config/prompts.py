"""Prompt template loading and rendering.

Templates are plain text files with ``{name}`` placeholders. They are treated as
configuration: the pipeline only substitutes the variables it supplies and
leaves every other brace untouched, so templates may carry literal examples such
as ``{dishName}`` for the model to imitate.
"""

import logging
from pathlib import Path
from typing import Any

from restaurant_qa.config.constants import PromptName
from restaurant_qa.exceptions import PromptNotFoundError

logger = logging.getLogger(__name__)

PROMPT_FILES: dict[PromptName, str] = {
    PromptName.NLP_TO_CYPHER: "nlpToCypher.md",
    PromptName.CHART_QUERY_GENERATOR: "chartQueryGenerator.md",
    PromptName.RESPONSE_TEMPLATE_FROM_JSON: "responseTemplateFromJson.md",
    PromptName.CONTEXT: "context.md",
}


def render_prompt(template: str, variables: dict[str, Any]) -> str:
    """Replace ``{key}`` with ``str(value)`` for each supplied variable."""
    out = template
    for key, value in variables.items():
        out = out.replace("{" + key + "}", str(value))
    return out


class PromptLibrary:
    """Reads the named prompt templates from a directory, once per name."""

    def __init__(self, prompts_dir: Path):
        self.prompts_dir = Path(prompts_dir)
        self._loaded: dict[PromptName, str] = {}

    def get(self, name: PromptName | str) -> str:
        """Return the raw text of a named template.

        Raises:
            PromptNotFoundError: If the name is unknown or the file is missing.
        """
        try:
            key = PromptName(name)
        except ValueError as e:
            raise PromptNotFoundError(f"Unknown prompt template: {name}") from e

        if key not in self._loaded:
            path = self.prompts_dir / PROMPT_FILES[key]
            if not path.is_file():
                raise PromptNotFoundError(f"Prompt file not found: {path}")
            self._loaded[key] = path.read_text(encoding="utf-8")
            logger.debug(f"Loaded prompt '{key.value}' from {path}")
        return self._loaded[key]
