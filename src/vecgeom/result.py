"""Shared behaviour for operation result records."""

from __future__ import annotations

from dataclasses import asdict
from enum import Enum
from typing import Any, Dict, Iterable, Tuple


def _plain(pairs: Iterable[Tuple[str, Any]]) -> Dict[str, Any]:
    return {key: (value.value if isinstance(value, Enum) else value)
            for key, value in pairs}


class Result:
    """Mixin for frozen result dataclasses.

    ``as_dict()`` renders the record as plain Python data: nested value
    types become dictionaries and classification tags become their
    string values.
    """

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self, dict_factory=_plain)


__all__ = ['Result']
