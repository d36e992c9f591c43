"""Example analysis client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseAnalysisClient and register the provider in ExtractionClientFactory.
"""

import json
from typing import ClassVar

from lexisense.analysis.client_base import BaseAnalysisClient


class ExampleClientAdapter(BaseAnalysisClient):
    """Example adapter that returns a fixed valid analysis JSON.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "summary": "Example analysis: no AI provider was contacted.",
        "parties": [],
        "dates": [],
        "risks": [],
    }
    DEFAULT_ANSWER: ClassVar[str] = "Not found in the document."

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_output: bool,
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt
        if json_output:
            return json.dumps(self.DEFAULT_RESPONSE)
        return self.DEFAULT_ANSWER
