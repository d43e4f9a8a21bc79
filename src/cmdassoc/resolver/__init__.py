"""File-to-command resolution."""
from __future__ import annotations

from cmdassoc.resolver.resolver import Resolver

__all__ = ["Resolver"]
