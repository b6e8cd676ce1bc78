"""Filename conventions → origin tag and display account name.

Statement files are expected to carry a bank prefix (``EQ_``, ``CIBC_``,
``PC_``, ``WS_``). Anything else is ``Origin.OTHER`` labeled with the file's
stem, underscores turned into spaces.
"""

from __future__ import annotations

from os import PathLike
from pathlib import PurePath

from .models import Origin

_PREFIXES: tuple[tuple[str, Origin, str], ...] = (
    ("EQ_", Origin.BANK_A, "EQ Bank"),
    ("CIBC_", Origin.BANK_B, "CIBC"),
    ("PC_", Origin.BANK_C, "PC Financial"),
    ("WS_", Origin.WALLET, "Wealthsimple"),
)


def resolve_origin(filename: str | PathLike[str]) -> tuple[Origin, str]:
    name = PurePath(filename).name
    upper = name.upper()
    for prefix, origin, label in _PREFIXES:
        if upper.startswith(prefix):
            return origin, label
    stem = name.split(".")[0]
    return Origin.OTHER, stem.replace("_", " ")


__all__ = ["resolve_origin"]
