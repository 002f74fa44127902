"""Address parsing and filtering utilities."""

import re
from typing import Iterable, List

from radiomail.core.models.message import Address

ADDRESS_DELIMITERS = re.compile(r"[\s,;]+")


class AddressResolver:
    """Turn free-text recipient input into Address values."""

    @staticmethod
    def split(text: str) -> List[str]:
        """Split on whitespace, comma and semicolon, dropping empty fields."""
        if not text:
            return []
        return [field for field in ADDRESS_DELIMITERS.split(text) if field]

    @classmethod
    def parse_many(cls, text: str) -> List[Address]:
        """Parse every address found in a line of input.

        Raises:
            InvalidAddressError: If a field is only a protocol prefix
        """
        return [Address.parse(field) for field in cls.split(text)]

    @staticmethod
    def dedupe(addresses: Iterable[Address]) -> List[Address]:
        """Remove duplicates (case-insensitively), keeping first occurrence order."""
        seen = set()
        unique = []
        for addr in addresses:
            if addr in seen:
                continue
            seen.add(addr)
            unique.append(addr)
        return unique

    @staticmethod
    def exclude(addresses: Iterable[Address], identity: str) -> List[Address]:
        """Drop every address equal to the given identity."""
        return [addr for addr in addresses if not addr.equal_string(identity)]
