"""Locale and currency settings for number formatting."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LocaleConfig:
    """Number and currency conventions used when parsing and formatting amounts."""

    thousands_separator: str = "."
    decimal_separator: str = ","
    currency_symbol: str = "$"
    currency_code: str = "CLP"
    max_fraction_digits: int = 2


# Chilean pesos, es-CL grouping
DEFAULT_LOCALE = LocaleConfig()
