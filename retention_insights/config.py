"""Configuration loading and management."""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field


class LLMConfig(BaseModel):
    """Text-generation service configuration."""

    provider: str = "openai"  # "openai", "mock" or "none"
    model: str = "gpt-4o"
    max_tokens: int = 1024
    temperature: float = 0.7
    timeout: float = 60.0
    api_key: str | None = None

    def resolve_api_key(self) -> str | None:
        """Return the configured API key, falling back to OPENAI_API_KEY."""
        return self.api_key or os.environ.get("OPENAI_API_KEY") or None


class Config(BaseModel):
    """Main application configuration."""

    llm: LLMConfig = Field(default_factory=LLMConfig)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "Config":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            return cls()

        return cls(**data)

    def to_yaml(self, path: Path | str) -> None:
        """Save configuration to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        # Never write secrets back to disk
        data = self.model_dump(exclude={"llm": {"api_key"}})
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)


def load_config(config_path: Path | str | None = None) -> Config:
    """Load configuration from file or use defaults."""
    if config_path is None:
        # Look for config.yaml in current directory or project root
        candidates = [Path("config.yaml"), Path(__file__).parent.parent / "config.yaml"]
        for candidate in candidates:
            if candidate.exists():
                config_path = candidate
                break

    if config_path is not None:
        return Config.from_yaml(config_path)

    return Config()
