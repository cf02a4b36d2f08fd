"""Shortcode registries.

Key components:
- Registry: protocol the processor looks handlers up through
- StaticRegistry: registry over a fixed list of definitions
- RegistryBuilder: mutable construction of a StaticRegistry
- DiscoveryRegistry: registry loading definitions from a source, cached
"""

from __future__ import annotations

from squaretag.registry.discovery import CACHE_KEY, DiscoveryRegistry
from squaretag.registry.protocol import Registry
from squaretag.registry.static import RegistryBuilder, StaticRegistry

__all__ = [
    "CACHE_KEY",
    "DiscoveryRegistry",
    "Registry",
    "RegistryBuilder",
    "StaticRegistry",
]
