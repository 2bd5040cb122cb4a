# artcert/registry/keys.py
"""
Key addressing for certificates.

Every registry operation derives the world state key of an asset through
canonical_key(). The key depends on the certificate id alone and never
on the owner, so the existence check, the read and the write for one
asset always hit the same key.
"""


def canonical_key(asset_id: str) -> str:
    """World state key for the certificate with the given id."""
    return asset_id
