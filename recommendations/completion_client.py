"""
Chat completion client for an OpenAI-compatible endpoint.

This module provides:
- Retry logic with exponential backoff
- Mapping of SDK errors onto the service's exception hierarchy

The completion text is returned untouched; recovering JSON from it is the
caller's job (see recovery.recover_json).
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

from openai import (
    OpenAI,
    APIError as OpenAIAPIError,
    APIConnectionError as OpenAIConnectionError,
    AuthenticationError,
    RateLimitError,
)

from .config import RecommendationsConfig
from .exceptions import (
    CompletionError,
    CompletionAuthError,
    CompletionConnectionError,
    CompletionRateLimitError,
    CompletionResponseError,
    ConfigurationError,
)


logger = logging.getLogger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass
class CompletionResult:
    """
    One completion returned by the endpoint.

    Attributes:
        content: Raw text content of the first choice
        finish_reason: Why the model stopped ("stop", "length", ...)
        model: Model that served the request
        input_tokens: Prompt tokens used
        output_tokens: Completion tokens used
    """

    content: str
    finish_reason: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def truncated(self) -> bool:
        """True when the model stopped at its token limit."""
        return self.finish_reason == "length"

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


# =============================================================================
# CLIENT
# =============================================================================


class CompletionClient:
    """
    Chat completion client with retries.

    Usage:
        client = CompletionClient(RecommendationsConfig.from_env())
        result = client.complete(system_prompt="...", user_prompt="...")
        print(result.content)
    """

    def __init__(self, config: RecommendationsConfig, client: Optional[OpenAI] = None):
        if not config.api_key:
            raise ConfigurationError()

        self.config = config
        # Retries are handled here, so the SDK's own retry loop is disabled.
        self.client = client or OpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            max_retries=0,
        )

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: Optional[int] = None,
    ) -> CompletionResult:
        """
        Request one chat completion.

        Raises:
            CompletionAuthError: API key rejected
            CompletionConnectionError: Endpoint unreachable after retries
            CompletionRateLimitError: Rate limited after retries
            CompletionResponseError: Response carried no message
            CompletionError: Any other upstream failure
        """
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        kwargs: dict[str, Any] = {
            "model": self.config.model,
            "messages": messages,
            "max_tokens": max_tokens or self.config.max_tokens,
            "temperature": self.config.temperature,
            "response_format": {"type": "json_object"},
        }

        response = self._call_with_retry(lambda: self.client.chat.completions.create(**kwargs))
        result = self._parse_response(response)

        logger.info(
            f"Completion finished: model={result.model} finish_reason={result.finish_reason} "
            f"chars={len(result.content)} tokens={result.total_tokens}"
        )
        if result.truncated:
            logger.warning("Completion hit the token limit; output is likely truncated")
        return result

    def list_models(self) -> list[Any]:
        """Return the model objects advertised by the endpoint."""
        page = self._call_with_retry(self.client.models.list)
        return list(page.data)

    def _call_with_retry(self, call: Any) -> Any:
        """
        Run an SDK call, retrying transient failures.

        Uses exponential backoff for retries.
        """
        last_error: Optional[Exception] = None
        delay = self.config.retry_delay

        for attempt in range(self.config.max_retries):
            try:
                logger.debug(f"Completion call attempt {attempt + 1}/{self.config.max_retries}")
                return call()

            except AuthenticationError as e:
                raise CompletionAuthError(original_error=e)

            except RateLimitError as e:
                logger.warning(f"Rate limit hit, waiting {delay}s...")
                last_error = e
                time.sleep(delay)
                delay *= 2

            except OpenAIConnectionError as e:
                logger.warning(f"Connection error, retrying in {delay}s...")
                last_error = e
                time.sleep(delay)
                delay *= 2

            except OpenAIAPIError as e:
                status_code = getattr(e, "status_code", None)
                if status_code is not None and status_code >= 500:
                    logger.warning(f"Server error ({status_code}), retrying...")
                    last_error = e
                    time.sleep(delay)
                    delay *= 2
                else:
                    raise CompletionError(str(e), e, status_code)

        if isinstance(last_error, RateLimitError):
            raise CompletionRateLimitError(original_error=last_error)
        if isinstance(last_error, OpenAIConnectionError):
            raise CompletionConnectionError(original_error=last_error)
        raise CompletionError(
            "Max retries exceeded",
            last_error,
            getattr(last_error, "status_code", None),
        )

    def _parse_response(self, response: Any) -> CompletionResult:
        if not response.choices or response.choices[0].message is None:
            raise CompletionResponseError("Invalid response format from AI service")

        choice = response.choices[0]
        content = choice.message.content or ""
        if choice.finish_reason == "content_filter":
            raise CompletionResponseError("Response blocked by content filter", content)
        if not content.strip():
            raise CompletionResponseError("Empty response from AI service", content)

        usage = response.usage
        return CompletionResult(
            content=content,
            finish_reason=choice.finish_reason or "",
            model=response.model or self.config.model,
            input_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            output_tokens=getattr(usage, "completion_tokens", 0) or 0,
        )
