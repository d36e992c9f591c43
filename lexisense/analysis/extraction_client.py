"""Single structured-extraction call against the configured AI provider."""

import asyncio
from pathlib import Path

from lexisense.analysis.client_base import BaseAnalysisClient
from lexisense.analysis.exceptions import ExtractionError, NotConfiguredError
from lexisense.analysis.prompt_loader import load_prompt
from lexisense.logging.logger import Log


class ExtractionClient:
    """Wraps one model invocation with a fixed instruction and low temperature.

    A ``None`` client means no credential is configured: every call fails fast
    with NotConfiguredError and no network call is attempted.
    """

    def __init__(
        self,
        *,
        client: BaseAnalysisClient | None,
        model: str,
        temperature: float = 0.1,
        timeout_seconds: float = 60.0,
        prompt_dir: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._timeout_seconds = timeout_seconds
        self._system_prompt = load_prompt("analysis_prompt.txt", prompt_dir)
        self._schema_reminder = load_prompt("schema_reminder.txt", prompt_dir)

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    async def extract(self, chunk_text: str, *, strict_reminder: bool = False) -> str:
        """Request a JSON analysis of *chunk_text* and return the raw response."""
        system_prompt = self._system_prompt
        if strict_reminder:
            system_prompt += self._schema_reminder
        Log.debug(f"Extraction request ({len(chunk_text)} chars):\n{chunk_text}")
        raw = await self._call(system_prompt, chunk_text, json_output=True)
        Log.debug(f"AI raw response:\n{raw}")
        return raw

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Free-text completion, used by the chat responder."""
        return await self._call(system_prompt, user_prompt, json_output=False)

    async def _call(self, system_prompt: str, user_prompt: str, *, json_output: bool) -> str:
        if self._client is None:
            raise NotConfiguredError("AI provider credential is not configured")
        try:
            return await asyncio.wait_for(
                self._client.create_chat_completion(
                    model=self._model,
                    temperature=self._temperature,
                    system_prompt=system_prompt,
                    user_prompt=user_prompt,
                    json_output=json_output,
                ),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise ExtractionError(
                f"AI provider call timed out after {self._timeout_seconds}s"
            ) from exc
