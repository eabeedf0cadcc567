from dataclasses import dataclass, field, fields
from typing import Optional

from agent.errors import ConfigurationError

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MODEL = 'gpt-4o-mini'


@dataclass(frozen=True)
class ProxyPolicy:
    """Delegation scope and delay applied to proxy add/remove calls."""

    proxy_type: str = 'Any'
    delay: int = 0


@dataclass(frozen=True)
class AgentConfig:
    openai_api_key: str
    ws_endpoint: str
    private_key: str
    temperature: float = DEFAULT_TEMPERATURE
    custom_prompt_template: Optional[str] = None
    model_name: str = DEFAULT_MODEL
    proxy_policy: ProxyPolicy = field(default_factory=ProxyPolicy)

    REQUIRED_FIELDS = ('openai_api_key', 'ws_endpoint', 'private_key')

    def __post_init__(self):
        messages = {
            'openai_api_key': 'OpenAI API key is required',
            'ws_endpoint': 'WebSocket endpoint is required',
            'private_key': 'Private key is required',
        }
        for name in self.REQUIRED_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(name, messages[name])

        if self.temperature is None:
            object.__setattr__(self, 'temperature', DEFAULT_TEMPERATURE)

    @classmethod
    def from_settings(cls, settings) -> 'AgentConfig':
        return cls(
            openai_api_key=settings.OPENAI_API_KEY,
            ws_endpoint=settings.WS_ENDPOINT,
            private_key=settings.PRIVATE_KEY,
            temperature=settings.LLM_TEMPERATURE,
            custom_prompt_template=settings.CUSTOM_PROMPT_TEMPLATE or None,
            model_name=settings.OPENAI_MODEL,
            proxy_policy=ProxyPolicy(
                proxy_type=settings.PROXY_TYPE,
                delay=settings.PROXY_DELAY,
            ),
        )

    def __repr__(self) -> str:
        shown = ', '.join(
            f"{f.name}={'***' if f.name in ('openai_api_key', 'private_key') else repr(getattr(self, f.name))}"
            for f in fields(self)
        )
        return f"AgentConfig({shown})"
