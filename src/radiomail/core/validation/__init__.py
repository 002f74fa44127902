"""Domain validation utilities."""

from .address import AddressResolver

__all__ = ['AddressResolver']
