"""Runtime configuration: price display and logging."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from dotenv import load_dotenv

from findroom.errors import ConfigError

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True, slots=True)
class PriceFormat:
    """How room prices are rendered for display."""

    symbol: str = ""
    symbol_after: bool = False
    decimals: int = 0
    group_separator: str = ","
    decimal_separator: str = "."

    def format(self, price: float | int | Decimal) -> str:
        quantum = Decimal(1).scaleb(-self.decimals)
        amount = Decimal(str(price)).quantize(quantum, rounding=ROUND_HALF_UP)
        sign = "-" if amount < 0 else ""
        whole, _, fraction = f"{abs(amount):f}".partition(".")
        groups = []
        while len(whole) > 3:
            groups.insert(0, whole[-3:])
            whole = whole[:-3]
        groups.insert(0, whole)
        text = self.group_separator.join(groups)
        if fraction:
            text = f"{text}{self.decimal_separator}{fraction}"
        text = sign + text
        if not self.symbol:
            return text
        return f"{text} {self.symbol}" if self.symbol_after else f"{self.symbol}{text}"


@dataclass(frozen=True, slots=True)
class AppConfig:
    price_format: PriceFormat = field(default_factory=PriceFormat)
    log_level: str = "WARNING"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {value}")
    return value


def load_config() -> AppConfig:
    """Load configuration from the environment (and a .env file if present)."""
    load_dotenv()

    log_level = os.getenv("FINDROOM_LOG_LEVEL", "WARNING").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"FINDROOM_LOG_LEVEL is not a logging level: {log_level!r}")

    price_format = PriceFormat(
        symbol=os.getenv("FINDROOM_CURRENCY_SYMBOL", ""),
        symbol_after=_env_bool("FINDROOM_SYMBOL_AFTER", False),
        decimals=_env_int("FINDROOM_PRICE_DECIMALS", 0),
        group_separator=os.getenv("FINDROOM_GROUP_SEPARATOR", ","),
        decimal_separator=os.getenv("FINDROOM_DECIMAL_SEPARATOR", "."),
    )
    return AppConfig(price_format=price_format, log_level=log_level)


def configure_logging(level: str | int = "WARNING") -> None:
    """Install a basic root handler for applications embedding findroom."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
