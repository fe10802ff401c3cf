"""Parse the ``address=value,...`` additional data option."""

from __future__ import annotations

import math
import re

from ..errors import AdditionalDataFormatError
from ..groups import FetchedData

ETHEREUM_ADDRESS = re.compile(r"0x[a-fA-F0-9]{40}")


def _parse_number(text: str) -> int | float:
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        raise AdditionalDataFormatError(f"Error parsing additional data: {text!r} is not a number") from None
    if math.isnan(value):
        raise AdditionalDataFormatError(f"Error parsing additional data: {text!r} is not a number")
    return value


def parse_additional_data(additional_data: str) -> FetchedData:
    """Return ``{address: value}``; values default to 1 and empty segments are skipped.

    Any invalid segment raises ``AdditionalDataFormatError`` and nothing is returned.
    """

    data: FetchedData = {}
    for segment in additional_data.split(","):
        if segment == "":
            continue
        address, sep, value_text = segment.partition("=")
        value = _parse_number(value_text) if sep else 1
        if not ETHEREUM_ADDRESS.fullmatch(address):
            raise AdditionalDataFormatError(f"{address} is not an ethereum address")
        data[address] = value
    return data


__all__ = ["ETHEREUM_ADDRESS", "parse_additional_data"]
