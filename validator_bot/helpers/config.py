"""Configuration management and environment variable utilities."""

import os

from urllib.parse import urlsplit, urlunsplit

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from validator_bot.helpers.constants import (
    DEFAULT_DATABASE_URL,
    DEFAULT_RPC_URL,
    PRICE_API_URL,
    WS_PATH,
)


# Load environment variables from .env file
load_dotenv()


class BotConfig(BaseModel):
    """Process-wide settings, built once at startup and passed to constructors."""

    telegram_bot_token: str = Field(..., description="Telegram Bot API token")
    rpc_url: str = Field(default=DEFAULT_RPC_URL, description="Node JSON-RPC URL")
    ws_url: str = Field(..., description="Node websocket URL")
    database_url: str = Field(
        default=DEFAULT_DATABASE_URL, description="SQLAlchemy async database URL"
    )
    price_api_url: str = Field(default=PRICE_API_URL, description="CoinGecko base URL")

    model_config = ConfigDict(frozen=True)


def get_required_env(key: str) -> str:
    """Get a required environment variable.

    Args:
        key: Environment variable name

    Returns:
        Environment variable value

    Raises:
        ValueError: If the environment variable is not set

    Example:
        ```python
        from validator_bot.helpers.config import get_required_env

        token = get_required_env("TELEGRAM_BOT_TOKEN")
        ```
    """
    value = os.getenv(key)
    if not value:
        msg = f"{key} environment variable is not set"
        raise ValueError(msg)
    return value


def get_optional_env(key: str, default: str | None = None) -> str | None:
    """Get an optional environment variable with a default value.

    Empty values count as unset.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    return os.getenv(key) or default


def derive_ws_url(rpc_url: str) -> str:
    """Build the node websocket URL from its HTTP RPC URL.

    Example:
        >>> derive_ws_url("http://localhost:8648")
        'ws://localhost:8648/ws'
        >>> derive_ws_url("https://rpc.example.com/")
        'wss://rpc.example.com/ws'
    """
    parts = urlsplit(rpc_url)
    scheme = "wss" if parts.scheme == "https" else "ws"
    path = parts.path.rstrip("/") + WS_PATH
    return urlunsplit((scheme, parts.netloc, path, "", ""))


def load_config() -> BotConfig:
    """Read the bot configuration from the environment.

    Raises:
        ValueError: If TELEGRAM_BOT_TOKEN is not set
    """
    rpc_url = get_optional_env("NIMIQ_RPC_URL") or DEFAULT_RPC_URL
    ws_url = get_optional_env("NIMIQ_WS_URL") or derive_ws_url(rpc_url)

    return BotConfig(
        telegram_bot_token=get_required_env("TELEGRAM_BOT_TOKEN"),
        rpc_url=rpc_url,
        ws_url=ws_url,
        database_url=get_optional_env("DATABASE_URL") or DEFAULT_DATABASE_URL,
        price_api_url=get_optional_env("PRICE_API_URL") or PRICE_API_URL,
    )


__all__ = [
    "BotConfig",
    "derive_ws_url",
    "get_optional_env",
    "get_required_env",
    "load_config",
]
