# artcert/certificate.py
"""
Certificate data model and its storage encoding.

A Certificate is an ownership-bearing record for a piece of art. It is
stored in the world state as UTF-8 JSON. The JSON field names are part
of the storage contract: records already on the ledger were written with
them, so renaming one breaks decoding of existing data.

    Certificate             Artist
        ID                      id
        URI                     name
        title                   dateOfBirth
        owner
        appraisedValue  (year of production)
        artist
"""

import json
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict

from .errors import DeserializationError, SerializationError

DATE_OF_BIRTH_FORMAT = "%d.%m.%Y"

_ARTIST_FIELDS = ("id", "name", "dateOfBirth")
_CERTIFICATE_TEXT_FIELDS = ("ID", "URI", "title", "owner")


@dataclass(frozen=True)
class Artist:
    """
    The artist behind a certified work.

    Attributes:
        id: Artist identifier
        name: Display name
        date_of_birth: Birth date as DD.MM.YYYY
    """
    id: str
    name: str
    date_of_birth: str

    def birth_date(self) -> date:
        """Parse date_of_birth. Raises ValueError if it is not DD.MM.YYYY."""
        return datetime.strptime(self.date_of_birth, DATE_OF_BIRTH_FORMAT).date()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "dateOfBirth": self.date_of_birth,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Artist":
        return cls(
            id=data["id"],
            name=data["name"],
            date_of_birth=data["dateOfBirth"],
        )


@dataclass(frozen=True)
class Certificate:
    """
    A certificate asset.

    Attributes:
        id: Logical identifier, immutable once created
        photo_uri: Where the photo of the work can be fetched
        title: Title of the work
        owner: Current holder
        year_of_production: Year the work was produced
        artist: The artist
    """
    id: str
    photo_uri: str
    title: str
    owner: str
    year_of_production: int
    artist: Artist

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ID": self.id,
            "URI": self.photo_uri,
            "title": self.title,
            "owner": self.owner,
            "appraisedValue": self.year_of_production,
            "artist": self.artist.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Certificate":
        return cls(
            id=data["ID"],
            photo_uri=data["URI"],
            title=data["title"],
            owner=data["owner"],
            year_of_production=data["appraisedValue"],
            artist=Artist.from_dict(data["artist"]),
        )


def _is_year(value: Any) -> bool:
    # bool is an int subclass but never a valid year
    return isinstance(value, int) and not isinstance(value, bool)


def encode_certificate(certificate: Certificate) -> bytes:
    """
    Encode a Certificate for storage.

    Raises:
        SerializationError: if a field does not have its storage type
    """
    if not isinstance(certificate, Certificate):
        raise SerializationError(
            f"cannot encode {type(certificate).__name__} as a certificate"
        )
    if not isinstance(certificate.artist, Artist):
        raise SerializationError(f"certificate {certificate.id!r} has no valid artist")

    data = certificate.to_dict()
    for name in _CERTIFICATE_TEXT_FIELDS:
        if not isinstance(data[name], str):
            raise SerializationError(f"certificate field {name!r} must be a string")
    if not _is_year(data["appraisedValue"]):
        raise SerializationError("certificate field 'appraisedValue' must be an integer")
    for name in _ARTIST_FIELDS:
        if not isinstance(data["artist"][name], str):
            raise SerializationError(f"artist field {name!r} must be a string")

    try:
        return json.dumps(data, ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"failed to encode certificate: {e}") from e


def decode_certificate(raw: bytes) -> Certificate:
    """
    Decode stored bytes into a Certificate.

    Raises:
        DeserializationError: if the bytes are not a well-formed certificate
    """
    try:
        data = json.loads(raw.decode("utf-8"))
    except (AttributeError, UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
        raise DeserializationError(f"stored value is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise DeserializationError(
            f"stored value is a JSON {type(data).__name__}, not a certificate"
        )

    missing = [k for k in _CERTIFICATE_TEXT_FIELDS + ("appraisedValue", "artist") if k not in data]
    if missing:
        raise DeserializationError(f"certificate is missing fields: {', '.join(missing)}")
    for name in _CERTIFICATE_TEXT_FIELDS:
        if not isinstance(data[name], str):
            raise DeserializationError(f"certificate field {name!r} is not a string")
    if not _is_year(data["appraisedValue"]):
        raise DeserializationError("certificate field 'appraisedValue' is not an integer")

    artist = data["artist"]
    if not isinstance(artist, dict):
        raise DeserializationError("certificate field 'artist' is not an object")
    for name in _ARTIST_FIELDS:
        if not isinstance(artist.get(name), str):
            raise DeserializationError(f"artist field {name!r} is missing or not a string")

    return Certificate.from_dict(data)
