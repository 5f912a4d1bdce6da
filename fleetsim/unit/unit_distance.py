"""Vertical distances of a unit: cruise altitude and operating depth."""

from __future__ import annotations

from .unit_float import UnitFloat


class Meter(UnitFloat, family_root=True):
    SYMBOL = "m"
