"""Configuration loading for Crypto Tracker.

Settings live in a TOML file at ``~/.config/cryptotracker/config.toml``
(or the path in ``CRYPTOTRACKER_CONFIG``) and are merged over built-in
defaults, so a missing file or a partial file is always usable.
"""

import copy
import os
from pathlib import Path
from typing import Any, Optional

import toml

from cryptotracker.models import BandFactors


CONFIG_ENV_VAR = "CRYPTOTRACKER_CONFIG"

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "cryptotracker"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"

DEFAULT_CONFIG: dict[str, Any] = {
    "openai": {
        "api_key": "",  # Leave empty to use OPENAI_API_KEY env var
        "model": "",  # Leave empty to use OPENAI_MODEL or the built-in default
    },
    "agent": {
        "max_turns": 8,
        "max_tokens": 800,
        "timeout_seconds": 60,
    },
    "market": {
        "base_url": "https://api.coingecko.com/api/v3",
        "api_key": "",
        "vs_currency": "usd",
        "ohlc_days": 1,
        "fallback_days": 2,
        "fallback_points": 48,
        "timeout_seconds": 0,  # 0 keeps the transport default
    },
    "symbols": {
        "BTC": "bitcoin",
        "ETH": "ethereum",
        "AVAX": "avalanche-2",
    },
    "bands": {
        "aggressive_buy": 0.997,
        "conservative_buy": 0.994,
        "take_profit": 1.004,
        "hard_stop": 0.989,
    },
    "chart": {
        "width": 640,
        "height": 260,
        "pad_x": 20,
        "pad_y": 10,
        "ticks": 4,
    },
    "server": {
        "host": "127.0.0.1",
        "port": 8000,
        "cors_origins": ["*"],
    },
}


class ConfigError(Exception):
    """Raised when the configuration file cannot be parsed."""


def get_config_path() -> Path:
    """Get the configuration file path.

    Returns:
        Path from ``CRYPTOTRACKER_CONFIG`` if set, else the default path.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[Path] = None) -> dict[str, Any]:
    """Load configuration merged over the defaults.

    Args:
        path: Optional explicit config path.

    Returns:
        Configuration dictionary.

    Raises:
        ConfigError: If the file exists but is not valid TOML.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        user_config = toml.load(config_path)
    except (toml.TomlDecodeError, OSError) as e:
        raise ConfigError(f"Could not read {config_path}: {e}") from e

    return _merge(DEFAULT_CONFIG, user_config)


def create_template_config(path: Optional[Path] = None) -> Path:
    """Write a template configuration file.

    Args:
        path: Optional explicit config path.

    Returns:
        Path of the written file.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        toml.dump(DEFAULT_CONFIG, f)

    return config_path


def get_openai_settings(config: dict[str, Any]) -> tuple[Optional[str], Optional[str]]:
    """Resolve the OpenAI API key and model.

    Environment variables win over the config file.

    Returns:
        Tuple of (api_key, model), each None when unset.
    """
    openai_config = config.get("openai", {})
    api_key = os.environ.get("OPENAI_API_KEY") or openai_config.get("api_key") or None
    model = os.environ.get("OPENAI_MODEL") or openai_config.get("model") or None
    return api_key, model


def get_band_factors(config: dict[str, Any]) -> BandFactors:
    """Build band factors from the ``[bands]`` table."""
    return BandFactors(**config.get("bands", {}))


def get_symbol_map(config: dict[str, Any]) -> dict[str, str]:
    """Get the static ticker to coin id mapping, keys uppercased."""
    return {
        str(symbol).strip().upper(): str(coin_id)
        for symbol, coin_id in config.get("symbols", {}).items()
    }


def get_chart_options(config: dict[str, Any]) -> dict[str, int]:
    """Get chart layout keyword arguments from the ``[chart]`` table."""
    chart = {**DEFAULT_CONFIG["chart"], **config.get("chart", {})}
    return {key: int(chart[key]) for key in ("width", "height", "pad_x", "pad_y", "ticks")}
