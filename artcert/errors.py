# artcert/errors.py
"""
Error taxonomy for the certificate registry.

Registry operations never recover locally: every failure below is raised
to the caller, who decides what to do with it.
"""


class WorldStateError(Exception):
    """Raised by WorldState implementations when a store call fails."""


class RegistryError(Exception):
    """Base class for errors surfaced by registry operations."""


class AssetNotFoundError(RegistryError):
    def __init__(self, asset_id: str):
        self.asset_id = asset_id
        super().__init__(f"the asset {asset_id} does not exist")


class AssetAlreadyExistsError(RegistryError):
    def __init__(self, asset_id: str):
        self.asset_id = asset_id
        super().__init__(f"the asset {asset_id} already exists")


class StoreError(RegistryError):
    """
    A world state call failed.

    The underlying WorldStateError is kept on ``cause`` and is also
    chained as ``__cause__`` by the raising code.
    """
    prefix = "world state failure:"

    def __init__(self, cause: Exception, prefix: str = None):
        self.cause = cause
        super().__init__(f"{prefix or self.prefix} {cause}")


class StoreReadError(StoreError):
    prefix = "failed to read from world state:"


class StoreWriteError(StoreError):
    prefix = "failed to put to world state."


class SerializationError(RegistryError):
    """A Certificate could not be encoded for storage."""


class DeserializationError(RegistryError):
    """Stored bytes do not decode to a Certificate."""
