from __future__ import annotations

import re
from typing import Any

from packing_optimizer.models import Dimensions

_NUMBER = re.compile(r"\d+(?:\.\d+)?")
_WEIGHT = re.compile(r"\d+(?:[.,]\d+)?")


def parse_float(value: str) -> float:
    text = value.strip()
    if not text:
        raise ValueError("empty input")
    text = text.replace(",", ".")
    return float(text)


def parse_dimensions(text: Any) -> Dimensions:
    """
    Read "L x W x H" style text ("10x20x30", "60 x 40 x 1.2 cm").

    The first three numbers are taken as length, width, height. Anything with
    fewer than three numbers gives zero dimensions.
    """
    if not text:
        return Dimensions()
    matches = _NUMBER.findall(str(text))
    if len(matches) < 3:
        return Dimensions()
    length, width, height = (parse_float(m) for m in matches[:3])
    return Dimensions(length=length, width=width, height=height)


def parse_weight(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return parse_float(value)
        except ValueError:
            pass
        # "1 kg", "25kg net": leading number wins
        match = _WEIGHT.search(value)
        return parse_float(match.group()) if match else 0.0
    return 0.0
