"""
Chat completions client for the generative text backend.

Wraps the OpenAI SDK with the fixed contract the analysis orchestrator
needs: one request, JSON-object output, low temperature, no SDK retries.
Any OpenAI-compatible gateway works by pointing `base_url` at it.
"""

import logging
from dataclasses import dataclass

import httpx
from openai import AsyncOpenAI

from proposal_digest.config import LLMConfig

logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Standardized response from LLMClient."""

    content: str
    model: str
    input_tokens: int
    output_tokens: int

    @property
    def total_tokens(self) -> int:
        """Total tokens used."""
        return self.input_tokens + self.output_tokens


class LLMClient:
    """Single-shot JSON completion client.

    Each call opens its own AsyncOpenAI client and closes it afterwards,
    like the per-call httpx clients of the source adapters.

    Args:
        config: Backend credential, endpoint, model and sampling settings
        http_client: Optional httpx client (tests pass one backed by
            httpx.MockTransport)

    Example:
        client = LLMClient(get_settings().llm_config())
        response = await client.complete_json(
            messages=[
                {"role": "system", "content": "Respond with ONLY valid JSON."},
                {"role": "user", "content": "Summarise ..."},
            ]
        )
    """

    def __init__(self, config: LLMConfig, http_client: httpx.AsyncClient | None = None):
        self.config = config
        self.http_client = http_client

    def _open_client(self) -> AsyncOpenAI:
        return AsyncOpenAI(
            api_key=self.config.api_key,
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            max_retries=0,
            http_client=self.http_client,
        )

    async def complete_json(self, messages: list[dict[str, str]]) -> LLMResponse:
        """Request a single JSON object completion.

        Args:
            messages: System and user messages

        Returns:
            LLMResponse with the raw model text ("" when the backend
            returned no choices)

        Raises:
            openai.APIStatusError: Backend answered with a non-success status
            openai.APITimeoutError: Backend missed the configured deadline
            openai.APIConnectionError: Backend could not be reached
        """
        logger.info(f"LLM request: model={self.config.model}")

        client = self._open_client()
        try:
            response = await client.chat.completions.create(
                model=self.config.model,
                messages=messages,
                temperature=self.config.temperature,
                response_format={"type": "json_object"},
            )
        finally:
            # An injected http_client belongs to the caller
            if self.http_client is None:
                await client.close()

        content = ""
        if response.choices:
            content = response.choices[0].message.content or ""
        input_tokens = response.usage.prompt_tokens if response.usage else 0
        output_tokens = response.usage.completion_tokens if response.usage else 0

        logger.info(
            f"LLM response: model={response.model or self.config.model}, "
            f"tokens={input_tokens + output_tokens}"
        )

        return LLMResponse(
            content=content,
            model=response.model or self.config.model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )
