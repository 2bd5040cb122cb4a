# artcert - Art certificate registry on a ledger world state
#
# Keeps ownership-bearing certificates for works of art in an external,
# key-addressed world state and enforces the existence rules around
# every write.
#
# Core concepts:
# - Certificate: An art asset with provenance metadata and a current owner
# - WorldState: The key-value store the registry reads and writes
# - AssetRegistry: Create, read, update, delete, transfer and list certificates
# - Dispatcher: Routes named ledger functions to registry operations

from .certificate import Artist, Certificate, decode_certificate, encode_certificate
from .errors import (
    RegistryError,
    AssetNotFoundError,
    AssetAlreadyExistsError,
    StoreError,
    StoreReadError,
    StoreWriteError,
    SerializationError,
    DeserializationError,
    WorldStateError,
)
from .worldstate import WorldState, StateIterator, MemoryWorldState, FileWorldState
from .registry import AssetRegistry, canonical_key, load_seeds
from .dispatcher import Dispatcher, Response, register_operation, list_operations

__all__ = [
    # Model
    "Artist",
    "Certificate",
    "encode_certificate",
    "decode_certificate",
    # Errors
    "RegistryError",
    "AssetNotFoundError",
    "AssetAlreadyExistsError",
    "StoreError",
    "StoreReadError",
    "StoreWriteError",
    "SerializationError",
    "DeserializationError",
    "WorldStateError",
    # World state
    "WorldState",
    "StateIterator",
    "MemoryWorldState",
    "FileWorldState",
    # Registry
    "AssetRegistry",
    "canonical_key",
    "load_seeds",
    # Invocation
    "Dispatcher",
    "Response",
    "register_operation",
    "list_operations",
]

__version__ = "0.1.0"
