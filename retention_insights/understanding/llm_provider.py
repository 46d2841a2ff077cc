"""LLM Provider abstraction and implementations."""

import json
from abc import ABC, abstractmethod
from typing import Any

import openai

from ..config import Config, LLMConfig
from ..exceptions import LLMProviderError


class LLMProvider(ABC):
    """Abstract base class for text-generation providers."""

    def __init__(self, config: LLMConfig):
        self.config = config

    @abstractmethod
    async def generate(self, prompt: str, system_prompt: str | None = None) -> str:
        """Generate a response from the LLM.

        Args:
            prompt: The user prompt
            system_prompt: Optional system prompt

        Returns:
            The generated text response
        """
        pass

    @abstractmethod
    async def generate_json(
        self, prompt: str, system_prompt: str | None = None
    ) -> dict[str, Any]:
        """Generate a JSON object response from the LLM.

        Args:
            prompt: The user prompt
            system_prompt: Optional system prompt

        Returns:
            Parsed JSON response as a dictionary

        Raises:
            LLMProviderError: If the call fails or the response is not a JSON object
        """
        pass


def parse_json_object(content: str | None) -> dict[str, Any]:
    """Strictly parse a JSON object from a provider response.

    Raises:
        LLMProviderError: If the content is empty, not JSON, or not an object
    """
    if not content:
        raise LLMProviderError("Empty response from LLM")

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise LLMProviderError(f"Failed to parse JSON response: {e}\nResponse: {content[:500]}")

    if not isinstance(data, dict):
        raise LLMProviderError(f"Expected a JSON object, got {type(data).__name__}")

    return data


class MockLLMProvider(LLMProvider):
    """Mock LLM provider that returns canned responses for testing.

    Responses are realistic but fixed, so the full AI path can be exercised
    without an API key.
    """

    async def generate(self, prompt: str, system_prompt: str | None = None) -> str:
        """Generate a mock response."""
        return "This is a mock LLM response for testing purposes."

    async def generate_json(
        self, prompt: str, system_prompt: str | None = None
    ) -> dict[str, Any]:
        """Generate mock JSON responses for known prompt patterns.

        Pattern matching order is important: the insight prompt embeds
        hotspot reasons, so it is checked before the explanation prompt.
        """
        prompt_lower = prompt.lower()

        if "retention hotspots" in prompt_lower and "toavoid" in prompt_lower:
            return self._mock_actionable_insight()

        if "two likely reasons" in prompt_lower:
            return self._mock_hotspot_explanation(prompt_lower)

        # Default empty response
        return {}

    def _mock_hotspot_explanation(self, prompt_lower: str) -> dict[str, Any]:
        if "there is a drop" in prompt_lower:
            return {
                "reasons": [
                    "The segment repeats a point already made in the intro",
                    "No on-screen change for an extended stretch of narration",
                ],
                "suggestion": "Cut the recap and move straight to the next demonstration",
            }
        return {
            "reasons": [
                "A concrete result is shown on screen at this moment",
                "The narration promises a payoff viewers were waiting for",
            ],
            "suggestion": "Tease this payoff in the first 30 seconds of future videos",
        }

    def _mock_actionable_insight(self) -> dict[str, Any]:
        return {
            "toAvoid": [
                "Recapping earlier points before new material",
                "Long narration without an on-screen change",
                "Holding the key result until the final minute",
            ],
            "toInclude": [
                "Concrete results shown early",
                "A visual change at least every ten seconds",
                "An explicit promise of the payoff in the intro",
            ],
            "aiRecommendation": (
                "Open with the strongest result from this video and promise the rest. "
                "Trim recap segments that precede new material."
            ),
            "estimatedImprovement": "Average view duration could rise by roughly 10%.",
        }


class OpenAILLMProvider(LLMProvider):
    """LLM provider backed by the OpenAI chat completions API.

    Uses JSON mode for structured output. Retries are disabled: a failed call
    surfaces immediately so callers can fall back.
    """

    def __init__(self, config: LLMConfig, api_key: str | None = None, client=None):
        """Initialize the OpenAI provider.

        Args:
            config: LLM configuration
            api_key: API key (default: config.api_key or OPENAI_API_KEY)
            client: Optional pre-built AsyncOpenAI client
        """
        super().__init__(config)
        if client is None:
            client = openai.AsyncOpenAI(
                api_key=api_key or config.resolve_api_key(),
                timeout=config.timeout,
                max_retries=0,
            )
        self._client = client

    def _messages(self, prompt: str, system_prompt: str | None) -> list[dict[str, str]]:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        return messages

    async def _complete(self, prompt: str, system_prompt: str | None, **kwargs) -> str | None:
        try:
            response = await self._client.chat.completions.create(
                model=self.config.model,
                messages=self._messages(prompt, system_prompt),
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
                **kwargs,
            )
        except openai.OpenAIError as e:
            raise LLMProviderError(f"OpenAI request failed: {e}") from e

        if not response.choices:
            raise LLMProviderError("No choices in OpenAI response")
        return response.choices[0].message.content

    async def generate(self, prompt: str, system_prompt: str | None = None) -> str:
        """Generate a text response.

        Raises:
            LLMProviderError: If the request fails or returns no content
        """
        content = await self._complete(prompt, system_prompt)
        if not content:
            raise LLMProviderError("Empty response from LLM")
        return content.strip()

    async def generate_json(
        self, prompt: str, system_prompt: str | None = None
    ) -> dict[str, Any]:
        """Generate a JSON object response using JSON mode.

        Raises:
            LLMProviderError: If the request fails or the content is not a JSON object
        """
        content = await self._complete(
            prompt, system_prompt, response_format={"type": "json_object"}
        )
        return parse_json_object(content)


def get_llm_provider(config: Config | None = None) -> LLMProvider | None:
    """Get the LLM provider selected by configuration.

    Returns None when text generation is disabled, either explicitly
    (provider "none") or because the OpenAI provider has no API key.
    Callers treat None as "use deterministic fallback content".

    Args:
        config: Configuration object. If None, loads default config.

    Raises:
        ValueError: If provider name is not recognized.
    """
    if config is None:
        from ..config import load_config

        config = load_config()

    provider_name = config.llm.provider.lower()

    if provider_name == "none":
        return None
    elif provider_name == "mock":
        return MockLLMProvider(config.llm)
    elif provider_name == "openai":
        api_key = config.llm.resolve_api_key()
        if not api_key:
            return None
        return OpenAILLMProvider(config.llm, api_key=api_key)
    else:
        raise ValueError(f"Unknown LLM provider: {provider_name}")
