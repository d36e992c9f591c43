from abc import ABC, abstractmethod


class BaseAnalysisClient(ABC):
    """Contract for provider-specific chat-completion clients."""

    @abstractmethod
    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_output: bool,
    ) -> str:
        """Return provider response as plain text.

        Raises:
            ExtractionError: on network or provider failure.
            EmptyResponseError: if the provider returned no content.
        """
