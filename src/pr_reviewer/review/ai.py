"""AI review through an OpenAI-compatible chat-completion endpoint."""

import json
import logging
import re
from typing import Any

import httpx

from pr_reviewer.config import ModelConfig
from pr_reviewer.errors import AIUnavailableError
from pr_reviewer.models.review import AIReview

logger = logging.getLogger(__name__)

# Fixed sampling parameters
TEMPERATURE = 1.0
TOP_P = 1.0
MAX_OUTPUT_TOKENS = 1000

VERDICT_RESPONSE_FORMAT: dict[str, Any] = {
    "type": "json_schema",
    "json_schema": {
        "name": "review_verdict",
        "strict": True,
        "schema": {
            "type": "object",
            "properties": {
                "has_findings": {"type": "boolean"},
                "body": {"type": "string"},
            },
            "required": ["has_findings", "body"],
            "additionalProperties": False,
        },
    },
}

VERDICT_INSTRUCTIONS = """

Respond with a single JSON object: {"has_findings": <true|false>, "body": "<Markdown review>"}.
Set "has_findings" to true only if the author should change something before merging."""


class ModelClient:
    """Client for a chat-completion endpoint."""

    def __init__(self, config: ModelConfig) -> None:
        """Initialize the model client.

        Args:
            config: Endpoint, model and credential configuration
        """
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.endpoint,
            headers={
                "Authorization": f"Bearer {config.token}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=config.timeout_seconds,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "ModelClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        response_format: dict[str, Any] | None = None,
    ) -> str:
        """Run one chat completion and return the first text segment, trimmed.

        Args:
            system_prompt: System-level instruction
            user_prompt: User content
            response_format: Optional response_format constraint

        Returns:
            Non-empty response text

        Raises:
            AIUnavailableError: If the call fails or returns no text
        """
        body: dict[str, Any] = {
            "model": self.config.name,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": TEMPERATURE,
            "top_p": TOP_P,
            "max_tokens": MAX_OUTPUT_TOKENS,
        }
        if response_format is not None:
            body["response_format"] = response_format

        logger.debug(f"Requesting completion from {self.config.endpoint} model={self.config.name}")
        try:
            response = await self._client.post("/chat/completions", json=body)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise AIUnavailableError(f"Model request failed: {e}") from e

        text = _first_text_segment(data)
        if not text or not text.strip():
            raise AIUnavailableError("Model returned an empty response")
        return text.strip()


def _first_text_segment(data: Any) -> str | None:
    """Extract the first text segment of the first choice."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None

    if isinstance(content, str):
        return content
    # Some endpoints return a list of content parts
    if isinstance(content, list):
        for part in content:
            if isinstance(part, dict) and isinstance(part.get("text"), str):
                return part["text"]
    return None


def parse_structured_review(content: str) -> AIReview | None:
    """Parse a ``{"has_findings", "body"}`` reply; None if it is not one."""
    content = content.strip()

    # Handle markdown code blocks
    if "```json" in content:
        match = re.search(r"```json\s*([\s\S]*?)```", content)
        if match:
            content = match.group(1).strip()
    elif content.startswith("```"):
        match = re.search(r"```\s*([\s\S]*?)```", content)
        if match:
            content = match.group(1).strip()

    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        return None

    if not isinstance(data, dict):
        return None
    has_findings = data.get("has_findings")
    body = data.get("body")
    if not isinstance(has_findings, bool) or not isinstance(body, str) or not body.strip():
        return None
    return AIReview(body=body.strip(), has_findings=has_findings)


class AIReviewer:
    """Best-effort, single-attempt AI review."""

    def __init__(self, config: ModelConfig) -> None:
        self.config = config

    def _client(self) -> ModelClient:
        return ModelClient(self.config)

    async def review(self, prompt_template: str, diff: str) -> AIReview | None:
        """Request a review of ``diff``.

        Returns:
            The AI review, or None when the model is unavailable
        """
        system_prompt = prompt_template
        response_format = None
        if self.config.structured_output:
            system_prompt = prompt_template + VERDICT_INSTRUCTIONS
            response_format = VERDICT_RESPONSE_FORMAT

        try:
            async with self._client() as client:
                text = await client.complete(system_prompt, diff, response_format=response_format)
        except AIUnavailableError as e:
            logger.warning(f"AI review unavailable; using heuristic fallback: {e}")
            return None
        except Exception as e:
            logger.warning(f"AI invocation error; using heuristic fallback: {e}")
            return None

        if self.config.structured_output:
            structured = parse_structured_review(text)
            if structured is not None:
                return structured
            logger.warning("Model reply was not a structured verdict; classifying free-form text")

        return AIReview(body=text)
