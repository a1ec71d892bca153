"""Configuration file management for tally."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from tally.domain.models import PeriodFilter, SortKey
from tally.domain.sorting import parse_sort_key
from tally.store.schema import get_db_path


@dataclass(frozen=True)
class Settings:
    """Resolved user settings."""

    store_path: Path | None = None
    currency_symbol: str = ""
    date_dayfirst: bool = False
    default_sort: SortKey = SortKey.DATE_DESC
    default_period: PeriodFilter = PeriodFilter.ALL

    @property
    def db_path(self) -> Path:
        """Store location, honoring the store_path override."""
        return self.store_path or get_db_path()


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "tally" / "config.toml"


def default_config() -> dict[str, Any]:
    """Config written by 'tally init'."""
    return {
        "currency_symbol": "",
        "date_dayfirst": False,
        "default_sort": SortKey.DATE_DESC.value,
        "default_period": PeriodFilter.ALL.value,
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)
    save_config(default_config(), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If config file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def parse_settings(config: dict[str, Any]) -> Settings:
    """Resolve a config dictionary into settings.

    Unknown sort or period names fall back to the defaults.

    Args:
        config: Configuration dictionary.

    Returns:
        Settings.
    """
    store_path = config.get("store_path")

    try:
        default_period = PeriodFilter(config.get("default_period", PeriodFilter.ALL.value))
    except ValueError:
        default_period = PeriodFilter.ALL

    return Settings(
        store_path=Path(store_path).expanduser() if store_path else None,
        currency_symbol=str(config.get("currency_symbol", "")),
        date_dayfirst=bool(config.get("date_dayfirst", False)),
        default_sort=parse_sort_key(config.get("default_sort")),
        default_period=default_period,
    )


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings, using defaults when the config file doesn't exist.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Settings.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return Settings()
    return parse_settings(config)
