from typing import ClassVar

from lexisense.analysis.client_base import BaseAnalysisClient
from lexisense.analysis.example_client_adapter import ExampleClientAdapter
from lexisense.analysis.extraction_client import ExtractionClient
from lexisense.analysis.openai_client_adapter import OpenAIClientAdapter
from lexisense.config.settings import Settings
from lexisense.logging.logger import Log


class ExtractionClientFactory:
    """Creates the configured extraction client."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    # Local endpoints accept any key; hosted ones need a real credential.
    KEYLESS_PROVIDERS: ClassVar[frozenset[str]] = frozenset({"ollama"})

    @classmethod
    def create(cls, settings: Settings) -> ExtractionClient:
        """Create an extraction client from application settings.

        A missing credential yields an unconfigured client instead of an error,
        so the host process still starts and analysis fails per document.
        """
        provider = settings.analysis_provider.lower()
        return ExtractionClient(
            client=cls._create_adapter(provider, settings),
            model=settings.openai_model_name if provider != "example" else "example",
            temperature=settings.extraction_temperature,
            timeout_seconds=settings.openai_timeout_seconds,
        )

    @classmethod
    def _create_adapter(cls, provider: str, settings: Settings) -> BaseAnalysisClient | None:
        if provider == "example":
            return ExampleClientAdapter()
        base_url = cls._resolve_base_url(provider, settings)
        api_key = settings.openai_api_key.strip()
        if not api_key:
            if provider not in cls.KEYLESS_PROVIDERS:
                Log.warning(
                    f"No API key configured for provider '{provider}'; "
                    "contract analysis and chat are disabled"
                )
                return None
            api_key = provider
        return OpenAIClientAdapter(
            api_key=api_key,
            timeout_seconds=settings.openai_timeout_seconds,
            base_url=base_url,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.openai_base_url.strip()
            if not url:
                raise ValueError(
                    "openai_base_url is required for analysis_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown analysis provider '{provider}'. Choose from: {supported}"
        )
