"""Answers ad hoc questions against the full text of one contract."""

from pathlib import Path

from lexisense.analysis.exceptions import EmptyResponseError
from lexisense.analysis.extraction_client import ExtractionClient
from lexisense.analysis.prompt_loader import load_prompt
from lexisense.logging.logger import Log

TRUNCATION_MARKER = "\n\n[... document truncated ...]"
DEFAULT_FALLBACK = "Unable to generate a response for this question."


class ChatResponder:
    """Single best-effort model call per question. No retries."""

    def __init__(
        self,
        extraction_client: ExtractionClient,
        *,
        max_chars: int = 100_000,
        fallback_message: str = DEFAULT_FALLBACK,
        prompt_dir: Path | None = None,
    ) -> None:
        self._extraction_client = extraction_client
        self._max_chars = max_chars
        self._fallback_message = fallback_message
        self._system_prompt = load_prompt("chat_prompt.txt", prompt_dir)

    async def answer(self, document_text: str, question: str) -> str:
        """Answer *question* from *document_text* only.

        Raises:
            ValueError: if the question is blank.
            NotConfiguredError, ExtractionError: propagated to the caller.
        """
        if not question.strip():
            raise ValueError("Question must not be empty")

        text = self._truncate(document_text)
        user_prompt = f"Contract:\n{text}\n\nQuestion: {question}"
        Log.debug(f"Chat question: {question}")

        try:
            answer = await self._extraction_client.complete(self._system_prompt, user_prompt)
        except EmptyResponseError:
            Log.warning("Chat model returned an empty answer; using fallback")
            return self._fallback_message

        if not answer.strip():
            Log.warning("Chat model returned an empty answer; using fallback")
            return self._fallback_message
        return answer

    def _truncate(self, text: str) -> str:
        if len(text) <= self._max_chars:
            return text
        Log.info(f"Chat context truncated from {len(text)} to {self._max_chars} chars")
        return text[: self._max_chars] + TRUNCATION_MARKER
