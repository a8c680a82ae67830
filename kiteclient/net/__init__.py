"""Networking helpers: HTTP transport and response decoding."""

from .decoder import UNSUPPORTED, ResponseDecoder
from .http import send

__all__ = ["UNSUPPORTED", "ResponseDecoder", "send"]
