from typing import ClassVar

from docanalyzer.analysis.client_base import BaseAnalysisClient
from docanalyzer.analysis.example_client_adapter import ExampleClientAdapter
from docanalyzer.analysis.openai_client_adapter import OpenAIClientAdapter
from docanalyzer.analysis.orchestrator import AnalysisOrchestrator, ProgressCallback
from docanalyzer.config.settings import Settings


class AnalysisClientFactory:
    """Creates the configured AI client adapter."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseAnalysisClient:
        provider = settings.analysis_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        return OpenAIClientAdapter(
            api_key=settings.analysis_api_key,
            timeout_seconds=settings.analysis_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return settings.analysis_base_url.strip() or None
        if provider == "openai_compatible":
            url = settings.analysis_base_url.strip()
            if not url:
                raise ValueError(
                    "analysis_base_url is required for analysis_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return settings.analysis_base_url.strip() or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown analysis provider '{provider}'. Choose from: {supported}"
        )


class AnalysisOrchestratorFactory:
    """Creates an orchestrator around the configured client."""

    @classmethod
    def create(
        cls,
        settings: Settings,
        on_progress: ProgressCallback | None = None,
    ) -> AnalysisOrchestrator:
        provider = settings.analysis_provider.lower()
        return AnalysisOrchestrator(
            client=AnalysisClientFactory.create(settings),
            model="example" if provider == "example" else settings.analysis_model_name,
            temperature=settings.analysis_temperature,
            char_ceiling=settings.analysis_char_ceiling,
            on_progress=on_progress,
        )
