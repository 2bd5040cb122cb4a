# artcert/registry/registry.py
"""
Certificate registry on top of a world state.

The registry holds no state of its own between calls. Every operation
takes the WorldState handle of the invoking transaction and runs to
completion against it:

    initialize(state)                          seed the example certificates
    create(state, id, photo_uri, ...)          issue a new certificate
    read(state, id)                            fetch a certificate
    update(state, id, photo_uri, ...)          replace every field
    delete(state, id)                          remove a certificate
    transfer(state, id, new_owner)             change the owner
    exists(state, id)                          presence check
    list_all(state)                            every certificate in scan order

Concurrent invocations are ordered by the ledger, not by the registry:
there is no locking, versioning or retry here.
"""

import dataclasses
import logging
from typing import List, Optional

from ..certificate import Artist, Certificate, decode_certificate, encode_certificate
from ..errors import (
    AssetAlreadyExistsError,
    AssetNotFoundError,
    StoreReadError,
    StoreWriteError,
    WorldStateError,
)
from ..worldstate import WorldState
from .keys import canonical_key
from .seeds import load_seeds

logger = logging.getLogger(__name__)


class AssetRegistry:
    """
    Registry of art certificates.

    Usage:
        registry = AssetRegistry()
        registry.create(state, "A", "https://...", "title", artist, "owner1", 1962)
        registry.transfer(state, "A", "owner2")
        registry.read(state, "A").owner  # "owner2"
    """

    def __init__(self, seeds: Optional[List[Certificate]] = None):
        """
        Args:
            seeds: Certificates written by initialize() (bundled seeds if None)
        """
        self.seeds = list(seeds) if seeds is not None else load_seeds()

    # -- store access -----------------------------------------------------

    def _get(self, state: WorldState, asset_id: str) -> Optional[bytes]:
        try:
            return state.get(canonical_key(asset_id))
        except WorldStateError as e:
            raise StoreReadError(e) from e

    def _put(self, state: WorldState, certificate: Certificate) -> None:
        payload = encode_certificate(certificate)
        key = canonical_key(certificate.id)
        try:
            state.put(key, payload)
        except WorldStateError as e:
            raise StoreWriteError(e) from e
        logger.debug(f"Wrote {key} ({len(payload)} bytes)")

    # -- operations -------------------------------------------------------

    def initialize(self, state: WorldState) -> List[Certificate]:
        """
        Write the seed certificates.

        Stops at the first failed write. Seeds written before it stay
        committed. Existing certificates under the same ids are overwritten.
        """
        for certificate in self.seeds:
            self._put(state, certificate)
        logger.info(f"Seeded {len(self.seeds)} certificates")
        return list(self.seeds)

    def exists(self, state: WorldState, asset_id: str) -> bool:
        """True when a certificate is stored under asset_id."""
        return self._get(state, asset_id) is not None

    def create(
        self,
        state: WorldState,
        asset_id: str,
        photo_uri: str,
        title: str,
        artist: Artist,
        owner: str,
        year_of_production: int,
    ) -> Certificate:
        """
        Issue a new certificate.

        The owner is taken as given; no identity check is made.

        Raises:
            AssetAlreadyExistsError: a certificate with this id is live
            StoreReadError: the existence check failed
            SerializationError: the certificate could not be encoded
            StoreWriteError: the write failed
        """
        if self.exists(state, asset_id):
            raise AssetAlreadyExistsError(asset_id)

        certificate = Certificate(
            id=asset_id,
            photo_uri=photo_uri,
            title=title,
            owner=owner,
            year_of_production=year_of_production,
            artist=artist,
        )
        self._put(state, certificate)
        logger.debug(f"Created certificate {asset_id} for {owner}")
        return certificate

    def read(self, state: WorldState, asset_id: str) -> Certificate:
        """
        Fetch a certificate.

        Raises:
            AssetNotFoundError: nothing is stored under asset_id
            StoreReadError: the read failed
            DeserializationError: the stored bytes are not a certificate
        """
        raw = self._get(state, asset_id)
        if raw is None:
            raise AssetNotFoundError(asset_id)
        return decode_certificate(raw)

    def update(
        self,
        state: WorldState,
        asset_id: str,
        photo_uri: str,
        title: str,
        artist: Artist,
        owner: str,
        year_of_production: int,
    ) -> Certificate:
        """
        Replace every field of an existing certificate.

        Raises:
            AssetNotFoundError: nothing is stored under asset_id
            StoreReadError, SerializationError, StoreWriteError
        """
        if not self.exists(state, asset_id):
            raise AssetNotFoundError(asset_id)

        certificate = Certificate(
            id=asset_id,
            photo_uri=photo_uri,
            title=title,
            owner=owner,
            year_of_production=year_of_production,
            artist=artist,
        )
        self._put(state, certificate)
        logger.debug(f"Updated certificate {asset_id}")
        return certificate

    def delete(self, state: WorldState, asset_id: str) -> None:
        """
        Remove a certificate.

        Raises:
            AssetNotFoundError: nothing is stored under asset_id
            StoreReadError, StoreWriteError
        """
        if not self.exists(state, asset_id):
            raise AssetNotFoundError(asset_id)

        try:
            state.delete(canonical_key(asset_id))
        except WorldStateError as e:
            raise StoreWriteError(e, prefix="failed to delete from world state.") from e
        logger.debug(f"Deleted certificate {asset_id}")

    def transfer(self, state: WorldState, asset_id: str, new_owner: str) -> Certificate:
        """
        Hand a certificate to a new owner.

        Every field other than the owner is kept as stored.

        Raises:
            AssetNotFoundError, StoreReadError, DeserializationError
            (from read), SerializationError, StoreWriteError
        """
        certificate = self.read(state, asset_id)
        transferred = dataclasses.replace(certificate, owner=new_owner)
        self._put(state, transferred)
        logger.debug(f"Transferred certificate {asset_id}: {certificate.owner} -> {new_owner}")
        return transferred

    def list_all(self, state: WorldState) -> List[Certificate]:
        """
        Every certificate in the world state, in scan order.

        A value that does not decode aborts the listing with
        DeserializationError. The scan cursor is closed on every path.

        Raises:
            StoreReadError: the scan could not be opened or advanced
            DeserializationError: a stored value is not a certificate
        """
        try:
            results = state.scan("", "")
        except WorldStateError as e:
            raise StoreReadError(e) from e

        certificates = []
        with results:
            while True:
                try:
                    entry = next(results)
                except StopIteration:
                    break
                except WorldStateError as e:
                    raise StoreReadError(e) from e
                _, value = entry
                certificates.append(decode_certificate(value))

        logger.debug(f"Listed {len(certificates)} certificates")
        return certificates
