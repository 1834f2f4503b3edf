"""
Strategy tags and the raw curated-record variants.

Each dataset family in the knowledge base has its own irregular nesting,
so a record is wrapped in the variant for its family and the adapters in
`core.adapters` only ever see their own variant.  The payload is kept as
the untouched mapping (insertion order included).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Union


class Strategy(str, Enum):
    dirty_bulking = "dirty_bulking"
    keto = "keto"
    gulf_low_carb = "gulf_low_carb"
    gulf_intermittent_fasting = "gulf_intermittent_fasting"
    gulf_mediterranean = "gulf_mediterranean"
    north_african_balanced = "north_african_balanced"
    none = "none"


@dataclass(frozen=True)
class DirtyBulkRecord:
    payload: Mapping[str, Any]


@dataclass(frozen=True)
class KetoRecord:
    payload: Mapping[str, Any]


@dataclass(frozen=True)
class GulfRecord:
    payload: Mapping[str, Any]
    label: str                  # "Gulf Low Carb" | "Gulf IF"


@dataclass(frozen=True)
class MediterraneanRecord:
    payload: Mapping[str, Any]


@dataclass(frozen=True)
class BalancedRecord:
    payload: Mapping[str, Any]


RawPlanRecord = Union[
    DirtyBulkRecord, KetoRecord, GulfRecord, MediterraneanRecord, BalancedRecord
]
