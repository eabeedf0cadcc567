import unittest
from types import SimpleNamespace

from agent.errors import ConfigurationError, ErrorKind
from config.settings import settings
from models.agent_config import AgentConfig, ProxyPolicy


class AgentConfigTest(unittest.TestCase):
    def test_defaults(self) -> None:
        config = AgentConfig(openai_api_key="sk-test", ws_endpoint="ws://localhost:9944", private_key="//Alice")

        self.assertEqual(0.7, config.temperature)
        self.assertIsNone(config.custom_prompt_template)
        self.assertEqual(ProxyPolicy("Any", 0), config.proxy_policy)

    def test_zero_temperature_is_kept(self) -> None:
        config = AgentConfig(
            openai_api_key="sk-test", ws_endpoint="ws://localhost:9944", private_key="//Alice", temperature=0
        )
        self.assertEqual(0, config.temperature)

    def test_missing_required_fields(self) -> None:
        cases = {
            "openai_api_key": ("OpenAI API key is required", dict(openai_api_key="", ws_endpoint="ws://x", private_key="//Alice")),
            "ws_endpoint": ("WebSocket endpoint is required", dict(openai_api_key="sk", ws_endpoint="", private_key="//Alice")),
            "private_key": ("Private key is required", dict(openai_api_key="sk", ws_endpoint="ws://x", private_key="")),
        }
        for field, (message, kwargs) in cases.items():
            with self.subTest(field=field):
                with self.assertRaises(ConfigurationError) as ctx:
                    AgentConfig(**kwargs)
                self.assertEqual(field, ctx.exception.field)
                self.assertEqual(message, str(ctx.exception))
                self.assertEqual(ErrorKind.CONFIG, ctx.exception.kind)

    def test_whitespace_only_values_are_missing(self) -> None:
        for field in ("openai_api_key", "ws_endpoint", "private_key"):
            kwargs = dict(openai_api_key="sk-test", ws_endpoint="ws://localhost:9944", private_key="//Alice")
            kwargs[field] = "   "
            with self.subTest(field=field):
                with self.assertRaises(ConfigurationError) as ctx:
                    AgentConfig(**kwargs)
                self.assertEqual(field, ctx.exception.field)

    def test_repr_hides_secrets(self) -> None:
        config = AgentConfig(openai_api_key="sk-secret", ws_endpoint="ws://localhost:9944", private_key="//Alice")
        self.assertNotIn("sk-secret", repr(config))
        self.assertNotIn("//Alice", repr(config))
        self.assertIn("ws://localhost:9944", repr(config))

    def test_from_settings(self) -> None:
        source = SimpleNamespace(
            OPENAI_API_KEY="sk-test",
            WS_ENDPOINT="wss://westend-rpc.polkadot.io",
            PRIVATE_KEY="//Alice",
            LLM_TEMPERATURE=0.2,
            CUSTOM_PROMPT_TEMPLATE="",
            OPENAI_MODEL="gpt-4o",
            PROXY_TYPE="NonTransfer",
            PROXY_DELAY=10,
        )

        config = AgentConfig.from_settings(source)

        self.assertEqual(0.2, config.temperature)
        self.assertIsNone(config.custom_prompt_template)
        self.assertEqual("gpt-4o", config.model_name)
        self.assertEqual(ProxyPolicy("NonTransfer", 10), config.proxy_policy)


class SettingsValidateTest(unittest.TestCase):
    def setUp(self) -> None:
        self.previous = {
            name: getattr(settings, name)
            for name in ("TELEGRAM_BOT_TOKEN", "OPENAI_API_KEY", "WS_ENDPOINT", "PRIVATE_KEY")
        }

    def tearDown(self) -> None:
        for name, value in self.previous.items():
            setattr(settings, name, value)

    def test_validate_success(self) -> None:
        settings.TELEGRAM_BOT_TOKEN = "token"
        settings.OPENAI_API_KEY = "sk-test"
        settings.WS_ENDPOINT = "ws://localhost:9944"
        settings.PRIVATE_KEY = "//Alice"

        self.assertTrue(settings.validate())

    def test_validate_reports_missing(self) -> None:
        settings.TELEGRAM_BOT_TOKEN = "token"
        settings.OPENAI_API_KEY = "sk-test"
        settings.WS_ENDPOINT = "ws://localhost:9944"
        settings.PRIVATE_KEY = ""

        with self.assertLogs("config.settings", level="WARNING") as logs:
            self.assertFalse(settings.validate())

        self.assertIn("PRIVATE_KEY", logs.output[0])

    def test_validate_reports_missing_endpoint(self) -> None:
        settings.TELEGRAM_BOT_TOKEN = "token"
        settings.OPENAI_API_KEY = "sk-test"
        settings.WS_ENDPOINT = ""
        settings.PRIVATE_KEY = "//Alice"

        with self.assertLogs("config.settings", level="WARNING") as logs:
            self.assertFalse(settings.validate())

        self.assertIn("WS_ENDPOINT", logs.output[0])
