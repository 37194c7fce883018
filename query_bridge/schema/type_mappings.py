"""
Type mapping utilities for converting record values to schema type tags.
"""

from decimal import Decimal
from typing import Any


UNDEFINED_TAG = "undefined"


class _Undefined:
    """Marker for a field that is absent from a record."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


class TypeMapper:
    """Maps Python record values to the type tags shown to the language model."""

    # Tags for JSON-native Python types, checked in order (bool before int)
    PYTHON_TYPE_MAP = (
        (bool, "boolean"),
        (str, "string"),
        (int, "number"),
        (float, "number"),
        (Decimal, "number"),
        (list, "array"),
        (tuple, "array"),
        (set, "array"),
        (dict, "object"),
    )

    @classmethod
    def type_tag(cls, value: Any) -> str:
        """
        Get the type tag for a value.

        Args:
            value: Any record value, or UNDEFINED for a missing field

        Returns:
            One of string, number, boolean, null, array, object, undefined
        """
        if value is UNDEFINED:
            return UNDEFINED_TAG
        if value is None:
            return "null"
        for python_type, tag in cls.PYTHON_TYPE_MAP:
            if isinstance(value, python_type):
                return tag
        return "object"

    @staticmethod
    def is_mapping(value: Any) -> bool:
        """Whether a value is a nested structure that merges key by key."""
        return isinstance(value, dict)

    @staticmethod
    def is_number(value: Any) -> bool:
        """Whether a value is numeric. Booleans are not numbers here."""
        return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)
