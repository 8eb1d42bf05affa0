"""Currency -- supported ISO 4217 registry with display symbols."""

from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar


@dataclass(frozen=True)
class CurrencyInfo:
    """Information about a single supported currency."""

    code: str
    decimal_places: int
    name: str
    symbol: str

    @property
    def rounding_tolerance(self) -> Decimal:
        """Smallest representable unit derived from decimal places."""
        return Decimal(1).scaleb(-self.decimal_places)


class CurrencyRegistry:
    """
    Registry of the currencies the payroll UI knows how to display.

    Lookups are exact and case-sensitive: ``"usd"`` is not ``"USD"``.
    Currencies configured in the backend but absent here are still usable
    through ``payroll_kernel.domain.values.Currency``; they simply have no
    built-in symbol or display name.
    """

    _CURRENCIES: ClassVar[dict[str, CurrencyInfo]] = {
        "USD": CurrencyInfo("USD", 2, "US Dollar", "$"),
        "EUR": CurrencyInfo("EUR", 2, "Euro", "€"),
        "GBP": CurrencyInfo("GBP", 2, "British Pound", "£"),
        "JPY": CurrencyInfo("JPY", 0, "Japanese Yen", "¥"),
        "INR": CurrencyInfo("INR", 2, "Indian Rupee", "₹"),
        "PHP": CurrencyInfo("PHP", 2, "Philippine Peso", "₱"),
        "AUD": CurrencyInfo("AUD", 2, "Australian Dollar", "A$"),
        "CAD": CurrencyInfo("CAD", 2, "Canadian Dollar", "C$"),
        "CNY": CurrencyInfo("CNY", 2, "Chinese Yuan", "CN¥"),
        "SGD": CurrencyInfo("SGD", 2, "Singapore Dollar", "S$"),
        "MYR": CurrencyInfo("MYR", 2, "Malaysian Ringgit", "RM"),
        "LKR": CurrencyInfo("LKR", 2, "Sri Lankan Rupee", "Rs"),
        "NZD": CurrencyInfo("NZD", 2, "New Zealand Dollar", "NZ$"),
        "CHF": CurrencyInfo("CHF", 2, "Swiss Franc", "CHF"),
        "HKD": CurrencyInfo("HKD", 2, "Hong Kong Dollar", "HK$"),
        "AED": CurrencyInfo("AED", 2, "UAE Dirham", "AED"),
    }

    # Decimal places for codes outside the registry
    DEFAULT_DECIMAL_PLACES: ClassVar[int] = 2

    @classmethod
    def is_valid(cls, code: str) -> bool:
        """Check if a code is one of the supported currencies (case-sensitive)."""
        if not code or not isinstance(code, str):
            return False
        return code in cls._CURRENCIES

    @classmethod
    def get_info(cls, code: str) -> CurrencyInfo | None:
        """Get currency information by exact code."""
        if not code or not isinstance(code, str):
            return None
        return cls._CURRENCIES.get(code)

    @classmethod
    def get_decimal_places(cls, code: str) -> int:
        info = cls.get_info(code)
        return info.decimal_places if info else cls.DEFAULT_DECIMAL_PLACES

    @classmethod
    def get_symbol(cls, code: str) -> str:
        """Display symbol, or the code itself when unknown."""
        info = cls.get_info(code)
        return info.symbol if info else code

    @classmethod
    def get_display_name(cls, code: str) -> str:
        """Human name, or the code itself when unknown."""
        info = cls.get_info(code)
        return info.name if info else code

    @classmethod
    def all_codes(cls) -> frozenset[str]:
        return frozenset(cls._CURRENCIES.keys())

    @classmethod
    def all_symbols(cls) -> tuple[str, ...]:
        """Every known symbol, longest first so ``A$`` is matched before ``$``."""
        symbols = {info.symbol for info in cls._CURRENCIES.values()}
        return tuple(sorted(symbols, key=lambda s: (-len(s), s)))
