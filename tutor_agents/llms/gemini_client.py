from typing import Optional

from google import genai
from google.genai import errors, types
from loguru import logger
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from tutor_agents.config import Settings, settings as default_settings
from tutor_agents.core.exceptions import ModelNotAvailableError

# Connection-related exceptions that indicate client should be reset
CONNECTION_EXCEPTIONS = (ConnectionError, OSError)

# Transient failures, only retried when llm_max_attempts > 1
RETRYABLE_EXCEPTIONS = (
    errors.ServerError,
    ConnectionError,
    OSError,
)

BLOCKED_FINISH_REASONS = ("SAFETY", "RECITATION")


class GeminiClient:
    """
    Async, stateless wrapper for plain-text Gemini generation.

    One instance is shared by every responder. ``generate`` is the only
    operation the agents depend on: prompt in, generated text out.

    With the default ``llm_max_attempts=1`` a failed call is raised straight
    to the caller; larger values enable exponential-jitter retries on
    transient server and connection errors.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        api_key: Optional[str] = None,
    ) -> None:
        self.config = config or default_settings
        self._api_key = api_key or self.config.gemini_api_key
        self.model = self.config.gemini_model
        self.client = self._create_client()

    def _create_client(self) -> genai.Client:
        """Create a new Gemini client with timeout configuration.

        Raises:
            ModelNotAvailableError: If no API key is configured.
        """
        if not self._api_key:
            raise ModelNotAvailableError("GEMINI_API_KEY environment variable is required")

        return genai.Client(
            api_key=self._api_key,
            http_options={"timeout": int(self.config.llm_timeout_seconds * 1000)},
        )

    def _validate_response(self, response: types.GenerateContentResponse) -> None:
        """Validate that the response is usable.

        Raises:
            ValueError: If response has no candidates or was blocked.
        """
        if not response.candidates:
            raise ValueError("Empty response from Gemini API (no candidates)")

        candidate = response.candidates[0]
        finish_reason = getattr(candidate, "finish_reason", None)
        if finish_reason in BLOCKED_FINISH_REASONS:
            raise ValueError(
                f"Response blocked by Gemini API (finish_reason={finish_reason})"
            )

    async def _make_api_call(self, prompt: str) -> types.GenerateContentResponse:
        generate_config = types.GenerateContentConfig(
            temperature=self.config.model_temperature,
            max_output_tokens=self.config.max_output_tokens,
        )
        return await self.client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=generate_config,
        )

    async def generate(self, prompt: str) -> str:
        """
        Generate text for a single prompt.

        Raises:
            ValueError: When response is empty or blocked
            google.genai.errors.APIError: On API failures (after retries, if enabled)
        """
        max_attempts = max(1, self.config.llm_max_attempts)

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(max_attempts),
            wait=wait_exponential_jitter(initial=1, max=30),
            retry=retry_if_exception_type(RETRYABLE_EXCEPTIONS),
            reraise=True,
        ):
            with attempt:
                attempt_num = attempt.retry_state.attempt_number
                logger.debug(
                    f"LLM call | model={self.model} | "
                    f"attempt={attempt_num}/{max_attempts} | prompt_chars={len(prompt)}"
                )

                try:
                    response = await self._make_api_call(prompt)
                    self._validate_response(response)
                    return response.text or ""

                except CONNECTION_EXCEPTIONS as e:
                    # Reactive client reset on connection errors
                    logger.warning(
                        f"LLM call failed | model={self.model} | "
                        f"attempt={attempt_num} | error_type={type(e).__name__} | "
                        "recreating client"
                    )
                    self.client = self._create_client()
                    raise

                except Exception as e:
                    logger.warning(
                        f"LLM call failed | model={self.model} | "
                        f"attempt={attempt_num} | error_type={type(e).__name__}"
                    )
                    raise

        # Should be unreachable due to reraise=True, but satisfies linter
        raise RuntimeError("Max retries exceeded")
