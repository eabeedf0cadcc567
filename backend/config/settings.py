import logging
import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("⚠️ %s is not a number: %r, using %s", name, value, default)
        return default


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("⚠️ %s is not an integer: %r, using %s", name, value, default)
        return default


class Settings:
    TELEGRAM_BOT_TOKEN: str = os.getenv('TELEGRAM_BOT_TOKEN', '')

    OPENAI_API_KEY: str = os.getenv('OPENAI_API_KEY', '')
    OPENAI_MODEL: str = os.getenv('OPENAI_MODEL', 'gpt-4o-mini')
    LLM_TEMPERATURE: float = _float_env('LLM_TEMPERATURE', 0.7)
    CUSTOM_PROMPT_TEMPLATE: Optional[str] = os.getenv('CUSTOM_PROMPT_TEMPLATE')

    WS_ENDPOINT: str = os.getenv('WS_ENDPOINT', '')
    PRIVATE_KEY: str = os.getenv('PRIVATE_KEY', '')

    PROXY_TYPE: str = os.getenv('PROXY_TYPE', 'Any')
    PROXY_DELAY: int = _int_env('PROXY_DELAY', 0)

    READY_TIMEOUT_SECONDS: float = _float_env('READY_TIMEOUT_SECONDS', 60.0)

    def validate(self) -> bool:
        required_fields = [
            'TELEGRAM_BOT_TOKEN',
            'OPENAI_API_KEY',
            'WS_ENDPOINT',
            'PRIVATE_KEY',
        ]

        missing_fields = [field for field in required_fields if not (getattr(self, field) or '').strip()]

        if missing_fields:
            logger.warning("⚠️ Missing required environment variables: %s", ', '.join(missing_fields))
            return False

        return True


settings = Settings()
