from typing import ClassVar

from decree30.config.settings import Settings
from decree30.correction.base import BaseCorrector
from decree30.correction.corrector import Corrector
from decree30.correction.example_client_adapter import ExampleClientAdapter
from decree30.correction.exceptions import MissingCredentialError
from decree30.correction.openai_client_adapter import OpenAIClientAdapter

MISSING_API_KEY = "API key không được định nghĩa."


class CorrectorFactory:
    """Creates the configured corrector.

    The API key is passed in explicitly so callers decide where it comes from;
    a missing key fails here, before any client is built.
    """

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    DEFAULT_MODEL_NAMES: ClassVar[dict[str, str]] = {
        "gemini": "gemini-2.5-flash",
        "openai": "gpt-4o-mini",
    }

    KEYLESS_PROVIDERS: ClassVar[frozenset[str]] = frozenset({"ollama"})

    @classmethod
    def create(cls, settings: Settings, *, api_key: str) -> BaseCorrector:
        """Create a corrector for ``settings.ai_provider``.

        Raises:
            MissingCredentialError: if the provider needs a key and none is given.
            ValueError: for an unknown provider or missing base URL.
        """
        provider = settings.ai_provider.lower()
        if provider == "example":
            return Corrector(
                client=ExampleClientAdapter(),
                model="example",
                temperature=0.0,
            )
        base_url = cls._resolve_base_url(provider, settings)
        key = api_key.strip()
        if not key:
            if provider not in cls.KEYLESS_PROVIDERS:
                raise MissingCredentialError(MISSING_API_KEY)
            key = provider
        client = OpenAIClientAdapter(
            api_key=key,
            timeout_seconds=settings.ai_timeout_seconds,
            base_url=base_url,
        )
        return Corrector(
            client=client,
            model=cls._resolve_model_name(provider, settings),
            temperature=settings.ai_temperature,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return settings.ai_base_url.strip() or None
        if provider == "openai_compatible":
            url = settings.ai_base_url.strip()
            if not url:
                raise ValueError(
                    "ai_base_url is required for ai_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return settings.ai_base_url.strip() or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown AI provider '{provider}'. Choose from: {supported}")

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        model = settings.ai_model_name.strip() or cls.DEFAULT_MODEL_NAMES.get(provider, "")
        if not model:
            raise ValueError(f"ai_model_name is required for ai_provider={provider}")
        return model
