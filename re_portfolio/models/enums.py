"""Enumeration types for portfolio entities."""

from enum import Enum


class PropertyKind(str, Enum):
    APARTMENT = "apartment"
    HOUSE = "house"
