# artcert/registry/__init__.py
"""
Certificate registry.

The registry maps certificate ids to world state keys and enforces the
existence rules around every write.

Example:
    state = MemoryWorldState()
    registry = AssetRegistry()
    registry.initialize(state)

    cert = registry.read(state, "8989s1gjJJHJKHJSGHJDJSAD871238S")
    registry.transfer(state, cert.id, "New Owner")
"""

from .keys import canonical_key
from .registry import AssetRegistry
from .seeds import DEFAULT_SEEDS_PATH, load_seeds, seeds_from_yaml

__all__ = [
    "AssetRegistry",
    "canonical_key",
    "load_seeds",
    "seeds_from_yaml",
    "DEFAULT_SEEDS_PATH",
]
