"""Common configuration constants used across the application."""

import sys

# Chain Constants
LUNA_PER_NIM = 1e5
"""Smallest on-chain unit (Luna) per displayed NIM"""

DEFAULT_RPC_URL = "http://localhost:8648"
"""Default Nimiq node JSON-RPC endpoint"""

WS_PATH = "/ws"
"""Path of the node's websocket endpoint, relative to the RPC URL"""

HEAD_BLOCK_SUBSCRIPTION = "subscribeForHeadBlock"
"""Websocket method used to follow new head blocks"""

# Rewards Constants
ROUNDING_EPSILON = sys.float_info.epsilon
"""Nudge added before rounding fiat amounts to avoid half-way artefacts"""

AMOUNT_DECIMALS = 2
"""Fraction digits reported for NIM and fiat amounts"""

PRICE_API_URL = "https://api.coingecko.com/api/v3"
"""Default CoinGecko API base URL"""

NIM_PRICE_ID = "nimiq-2"
"""CoinGecko coin id for NIM"""

USD = "usd"
"""CoinGecko vs_currency for US dollars"""

# Telegram Constants
TELEGRAM_API_URL = "https://api.telegram.org"
"""Telegram Bot API base URL"""

POLL_TIMEOUT = 30
"""Long-polling timeout for getUpdates in seconds"""

PARSE_MODE_HTML = "HTML"
"""Telegram parse mode used for every outgoing message"""

# Storage Constants
DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///kv.db"
"""Local subscriber store used when DATABASE_URL is not set"""

# HTTP and Network Constants
DEFAULT_TIMEOUT = 30.0
"""Default HTTP request timeout in seconds"""

POLL_HTTP_TIMEOUT = POLL_TIMEOUT + 10.0
"""HTTP timeout for long-polling requests, longer than the poll itself"""

WS_PING_INTERVAL = 20
"""Websocket keepalive ping interval in seconds"""

WS_PING_TIMEOUT = 10
"""Websocket keepalive ping timeout in seconds"""

# Reconnect Configuration
RECONNECT_BASE_DELAY = 1.0
"""Base delay for stream reconnect backoff in seconds"""

RECONNECT_MAX_DELAY = 60.0
"""Maximum delay between stream reconnects in seconds"""


__all__ = [
    "AMOUNT_DECIMALS",
    "DEFAULT_DATABASE_URL",
    "DEFAULT_RPC_URL",
    "DEFAULT_TIMEOUT",
    "HEAD_BLOCK_SUBSCRIPTION",
    "LUNA_PER_NIM",
    "NIM_PRICE_ID",
    "PARSE_MODE_HTML",
    "POLL_HTTP_TIMEOUT",
    "POLL_TIMEOUT",
    "PRICE_API_URL",
    "RECONNECT_BASE_DELAY",
    "RECONNECT_MAX_DELAY",
    "ROUNDING_EPSILON",
    "TELEGRAM_API_URL",
    "USD",
    "WS_PATH",
    "WS_PING_INTERVAL",
    "WS_PING_TIMEOUT",
]
