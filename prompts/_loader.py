"""
Markdown prompt templates.

Each prompt is `<name>.md` in this directory, filled with str.format:
`{criteria_definition}` is a variable, `{{` and `}}` are literal braces.
"""
from pathlib import Path
from string import Formatter
from typing import Any, Dict, Optional

from loguru import logger


class PromptLoader:
    """
    Reads prompt files once and fills them in.

        loader = PromptLoader()
        prompt = loader.format("criterion_scoring", criteria_definition=..., reviews=...)
    """

    def __init__(self, prompts_dir: Optional[Path] = None):
        self.prompts_dir = Path(prompts_dir) if prompts_dir else Path(__file__).parent
        self._templates: Dict[str, str] = {}

    def get(self, prompt_name: str) -> str:
        """
        Raw template text.

        Raises:
            FileNotFoundError: No `<prompt_name>.md` in prompts_dir
        """
        if prompt_name not in self._templates:
            path = self.prompts_dir / f"{prompt_name}.md"
            if not path.is_file():
                raise FileNotFoundError(
                    f"No prompt '{prompt_name}' in {self.prompts_dir} (have: {', '.join(self.list_prompts())})"
                )
            self._templates[prompt_name] = path.read_text(encoding="utf-8")
            logger.debug(f"Loaded prompt {prompt_name}")
        return self._templates[prompt_name]

    def format(self, prompt_name: str, **variables: Any) -> str:
        """
        Template with its placeholders filled.

        Raises:
            ValueError: A placeholder has no value in `variables`
        """
        template = self.get(prompt_name)
        missing = [v for v in self.get_variables(prompt_name) if v not in variables]
        if missing:
            logger.error(f"Prompt '{prompt_name}' is missing {missing}; got {sorted(variables)}")
            raise ValueError(f"Missing variables {missing} for prompt '{prompt_name}'")
        return template.format(**variables)

    def list_prompts(self) -> list[str]:
        return sorted(p.stem for p in self.prompts_dir.glob("*.md"))

    def get_variables(self, prompt_name: str) -> list[str]:
        """Placeholder names in order of first appearance."""
        names = [
            field for _, field, _, _ in Formatter().parse(self.get(prompt_name))
            if field
        ]
        return list(dict.fromkeys(names))
