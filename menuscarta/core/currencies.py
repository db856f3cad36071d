"""Static currency table used for price formatting."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


class Currency(BaseModel):
    """Formatting rules for one currency."""

    code: str
    name: str
    symbol: str
    position: Literal["before", "after"]
    decimals: int
    thousands_separator: str
    decimal_separator: str

    model_config = ConfigDict(frozen=True)


class ResolvedCurrency(BaseModel):
    """Currency lookup result tagged with where the value came from."""

    currency: Currency
    source: Literal["configured", "default"]

    model_config = ConfigDict(frozen=True)

    @property
    def is_default(self) -> bool:
        return self.source == "default"


def _currency(code: str, name: str, symbol: str, decimals: int, thousands: str, decimal: str) -> Currency:
    return Currency(
        code=code,
        name=name,
        symbol=symbol,
        position="before",
        decimals=decimals,
        thousands_separator=thousands,
        decimal_separator=decimal,
    )


CURRENCIES: dict[str, Currency] = {
    "EUR": _currency("EUR", "Euro", "€", 2, ".", ","),
    "USD": _currency("USD", "Dólar Estadounidense", "$", 2, ",", "."),
    "MXN": _currency("MXN", "Peso Mexicano", "$", 2, ",", "."),
    "ARS": _currency("ARS", "Peso Argentino", "$", 2, ".", ","),
    "CLP": _currency("CLP", "Peso Chileno", "$", 0, ".", ","),
    "COP": _currency("COP", "Peso Colombiano", "$", 0, ".", ","),
    "PEN": _currency("PEN", "Sol Peruano", "S/", 2, ",", "."),
    "GBP": _currency("GBP", "Libra Esterlina", "£", 2, ",", "."),
    "BRL": _currency("BRL", "Real Brasileño", "R$", 2, ".", ","),
    "UYU": _currency("UYU", "Peso Uruguayo", "$U", 2, ".", ","),
}

# Formatting fallback for unknown codes.
DEFAULT_CURRENCY_CODE: str = "EUR"
# Currency reported for a restaurant that never configured one.
DEFAULT_RESTAURANT_CURRENCY_CODE: str = "CLP"


def get_currency(code: str | None) -> ResolvedCurrency:
    """Resolve a currency code, falling back to the default currency."""
    if code:
        currency = CURRENCIES.get(code.strip().upper())
        if currency is not None:
            return ResolvedCurrency(currency=currency, source="configured")
    return ResolvedCurrency(currency=CURRENCIES[DEFAULT_CURRENCY_CODE], source="default")


def is_known_currency(code: str) -> bool:
    return code.strip().upper() in CURRENCIES


def list_currencies() -> list[Currency]:
    return list(CURRENCIES.values())
