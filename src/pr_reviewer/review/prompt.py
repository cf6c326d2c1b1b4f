"""Prompt template loading."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "You are a code review assistant. Provide findings and suggestions."


def load_prompt_template(path: str | Path) -> str:
    """Read the review prompt template, falling back to a built-in instruction."""
    prompt_path = Path(path)
    if not prompt_path.is_file():
        logger.info(f"Prompt template {prompt_path} not found, using built-in prompt")
        return DEFAULT_PROMPT

    logger.info(f"Using prompt template {prompt_path}")
    return prompt_path.read_text(encoding="utf-8")
