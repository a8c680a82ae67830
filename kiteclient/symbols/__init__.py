"""Instrument identifier normalization."""

from .registry import InstrumentRegistry, instrument_registry

__all__ = ["InstrumentRegistry", "instrument_registry"]
