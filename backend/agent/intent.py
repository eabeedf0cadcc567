import json
import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Union

from agent.errors import MalformedIntentError
from models.chain import resolve_chain

logger = logging.getLogger(__name__)


class Action(str, Enum):
    ADD_PROXY = 'addProxy'
    CHECK_PROXY = 'checkProxy'
    REMOVE_PROXY = 'removeProxy'
    XCM_TRANSFER = 'xcmTransfer'


@dataclass(frozen=True)
class AddProxyIntent:
    proxy_address: str
    action = Action.ADD_PROXY


@dataclass(frozen=True)
class CheckProxyIntent:
    proxy_address: str
    action = Action.CHECK_PROXY


@dataclass(frozen=True)
class RemoveProxyIntent:
    proxy_address: str
    action = Action.REMOVE_PROXY


@dataclass(frozen=True)
class XcmTransferIntent:
    source_chain: str
    dest_chain: str
    amount: Decimal
    action = Action.XCM_TRANSFER


@dataclass(frozen=True)
class UnrecognizedIntent:
    """The model answered with an action tag outside the supported set."""

    action: Any


Intent = Union[
    AddProxyIntent,
    CheckProxyIntent,
    RemoveProxyIntent,
    XcmTransferIntent,
    UnrecognizedIntent,
]


def strip_code_fences(content: str) -> str:
    content_stripped = content.strip()
    if content_stripped.startswith('```json'):
        content_stripped = content_stripped[7:]
    elif content_stripped.startswith('```'):
        content_stripped = content_stripped[3:]
    if content_stripped.endswith('```'):
        content_stripped = content_stripped[:-3]
    return content_stripped.strip()


def _require_address(data: Dict[str, Any], key: str) -> str:
    if key not in data:
        raise MalformedIntentError(f"Missing field: {key}", field=key)

    value = data[key]
    if not isinstance(value, str) or not value.strip():
        raise MalformedIntentError(f"Field {key} must be a non-empty string", field=key)

    return value.strip()


def _require_chain(data: Dict[str, Any], key: str) -> str:
    if key not in data:
        raise MalformedIntentError(f"Missing field: {key}", field=key)

    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise MalformedIntentError(f"Field {key} must be a chain name or parachain id", field=key)

    identifier = str(value).strip()
    try:
        resolve_chain(identifier)
    except ValueError as e:
        raise MalformedIntentError(str(e), field=key) from e

    return identifier


def _require_amount(data: Dict[str, Any], key: str) -> Decimal:
    if key not in data:
        raise MalformedIntentError(f"Missing field: {key}", field=key)

    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, Decimal)):
        raise MalformedIntentError(f"Field {key} must be a number", field=key)

    amount = Decimal(value)
    if not amount.is_finite() or amount <= 0:
        raise MalformedIntentError(f"Field {key} must be a positive finite number", field=key)

    return amount


def parse_intent(content: str) -> Intent:
    """
    Parse the model's answer into a typed intent.

    Args:
        content: Raw text returned by the language model

    Returns:
        One intent variant; UnrecognizedIntent for unknown action tags

    Raises:
        MalformedIntentError: The answer is not JSON or lacks a required field
    """
    if not isinstance(content, str):
        raise MalformedIntentError("Model response is not text")

    try:
        # Decimal keeps 0.1 exact all the way to the unit conversion
        parsed = json.loads(
            strip_code_fences(content),
            parse_float=Decimal,
            parse_constant=Decimal,
        )
    except json.JSONDecodeError as e:
        raise MalformedIntentError(f"Model response is not valid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise MalformedIntentError("Model response is not a JSON object")

    action = parsed.get('action')

    try:
        action = Action(action)
    except ValueError:
        logger.warning("Unrecognized action: %r", action)
        return UnrecognizedIntent(action=action)

    data = parsed.get('data')
    if not isinstance(data, dict):
        raise MalformedIntentError("Missing field: data", field='data')

    logger.info(f"Recognized action: {action.value}")

    if action == Action.ADD_PROXY:
        return AddProxyIntent(proxy_address=_require_address(data, 'proxyAddress'))

    if action == Action.CHECK_PROXY:
        return CheckProxyIntent(proxy_address=_require_address(data, 'proxyAddress'))

    if action == Action.REMOVE_PROXY:
        return RemoveProxyIntent(proxy_address=_require_address(data, 'proxyAddress'))

    return XcmTransferIntent(
        source_chain=_require_chain(data, 'sourceChain'),
        dest_chain=_require_chain(data, 'destChain'),
        amount=_require_amount(data, 'amount'),
    )
