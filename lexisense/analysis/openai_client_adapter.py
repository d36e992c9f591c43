import httpx
import openai

from lexisense.analysis.client_base import BaseAnalysisClient
from lexisense.analysis.exceptions import EmptyResponseError, ExtractionError


class OpenAIClientAdapter(BaseAnalysisClient):
    """Analysis client adapter built on the async OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_output: bool,
    ) -> str:
        extra: dict[str, object] = {}
        if json_output:
            extra["response_format"] = {"type": "json_object"}
        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                **extra,
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ExtractionError(f"AI provider network error: {exc}") from exc
        except openai.APIStatusError as exc:
            raise ExtractionError(
                f"AI provider API error: {exc}",
                status_code=exc.status_code,
            ) from exc
        except openai.APIError as exc:
            raise ExtractionError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise EmptyResponseError("AI returned no choices")
        content = response.choices[0].message.content
        if not content or not content.strip():
            raise EmptyResponseError("AI returned empty response")
        return content
