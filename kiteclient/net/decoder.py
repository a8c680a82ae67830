from __future__ import annotations

import io
import json
import warnings
from typing import Any, Callable, Dict, List, Optional, Union

import pandas as pd

from ..core.errors import ParseError

JSON = "application/json"
CSV = "text/csv"


class _Unsupported:
    """Sentinel returned for content types without a decoder."""

    _instance: Optional["_Unsupported"] = None

    def __new__(cls) -> "_Unsupported":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSUPPORTED"


UNSUPPORTED = _Unsupported()


def media_type(content_type: Optional[str]) -> str:
    """``"application/json; charset=utf-8"`` -> ``"application/json"``."""

    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def decode_json(body: bytes) -> Any:
    try:
        payload = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise ParseError(f"Invalid JSON body: {e}", raw_body=body.decode("utf-8", errors="replace")) from e
    if not isinstance(payload, dict):
        raise ParseError(
            f"Expected a JSON object envelope, got {type(payload).__name__}",
            raw_body=body.decode("utf-8", errors="replace"),
        )
    return payload.get("data")


def decode_csv(body: bytes) -> List[Dict[str, str]]:
    if not body.strip():
        return []
    try:
        with warnings.catch_warnings():
            # A row longer than the header is reported as a warning; treat it as malformed
            warnings.simplefilter("error", pd.errors.ParserWarning)
            df = pd.read_csv(
                io.BytesIO(body), dtype=str, keep_default_na=False, index_col=False, encoding="utf-8"
            )
    except (pd.errors.ParserError, pd.errors.ParserWarning, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise ParseError(f"Invalid CSV body: {e}", raw_body=body.decode("utf-8", errors="replace")) from e
    return df.to_dict(orient="records")


class ResponseDecoder:
    """Decodes response bodies by their declared content type.

    Only the media type is considered; the decoder never sniffs the body.
    Content types without a registered decoder yield ``UNSUPPORTED``.
    """

    def __init__(self) -> None:
        self._decoders: Dict[str, Callable[[bytes], Any]] = {
            JSON: decode_json,
            CSV: decode_csv,
        }

    def supports(self, content_type: Optional[str]) -> bool:
        return media_type(content_type) in self._decoders

    def decode(self, content_type: Optional[str], body: bytes) -> Union[Any, _Unsupported]:
        decoder = self._decoders.get(media_type(content_type))
        if decoder is None:
            return UNSUPPORTED
        return decoder(body)
