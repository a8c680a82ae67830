from __future__ import annotations

from typing import Iterable, List, Union

from ..core.enums import Exchange


class InstrumentRegistry:
    """Normalizes instrument identifiers for market-data calls.

    Canonical format: "<EXCHANGE>:<TRADINGSYMBOL>" (e.g., "NSE:INFY").
    """

    def __init__(self, default_exchange: Exchange = Exchange.NSE) -> None:
        self.default_exchange = default_exchange

    def normalize(self, instrument: str) -> str:
        if ":" in instrument:
            exchange, s = instrument.split(":", 1)
            return f"{exchange.strip().upper()}:{s.strip()}"
        return f"{self.default_exchange.value}:{instrument.strip().upper()}"

    def normalize_many(self, instruments: Union[str, Iterable[str]]) -> List[str]:
        """Accept a list or a comma-separated string; blanks are dropped, order kept."""

        if isinstance(instruments, str):
            instruments = instruments.split(",")
        return [self.normalize(i) for i in instruments if i and i.strip()]


instrument_registry = InstrumentRegistry()
