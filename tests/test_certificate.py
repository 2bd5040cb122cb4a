# tests/test_certificate.py
"""Tests for the certificate model and its storage encoding."""

import dataclasses
import json
from datetime import date

import pytest

from artcert.certificate import Artist, Certificate, decode_certificate, encode_certificate
from artcert.errors import DeserializationError, SerializationError


@pytest.fixture
def artist():
    return Artist("id-13894047849", "Tomoko Janra", "20.11.1980")


@pytest.fixture
def certificate(artist):
    return Certificate(
        id="original-cowBoy",
        photo_uri="photo_uri",
        title="title",
        owner="owner1",
        year_of_production=1962,
        artist=artist,
    )


class TestArtist:
    """Test Artist value."""

    def test_birth_date(self, artist):
        """Test parsing a DD.MM.YYYY birth date."""
        assert artist.birth_date() == date(1980, 11, 20)

    def test_birth_date_rejects_other_formats(self):
        """Test that ISO dates are not accepted as birth dates."""
        artist = Artist("a", "b", "1980-11-20")
        with pytest.raises(ValueError):
            artist.birth_date()

    def test_artist_is_immutable(self, artist):
        """Test that artist fields cannot be reassigned."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            artist.name = "someone else"


class TestEncoding:
    """Test storage encoding of certificates."""

    def test_storage_field_names(self, certificate):
        """Test the JSON field names written to the ledger."""
        data = json.loads(encode_certificate(certificate))
        assert data == {
            "ID": "original-cowBoy",
            "URI": "photo_uri",
            "title": "title",
            "owner": "owner1",
            "appraisedValue": 1962,
            "artist": {
                "id": "id-13894047849",
                "name": "Tomoko Janra",
                "dateOfBirth": "20.11.1980",
            },
        }

    def test_decode_restores_every_field(self, certificate):
        """Test decoding an encoded certificate gives it back."""
        assert decode_certificate(encode_certificate(certificate)) == certificate

    def test_decode_record_written_by_ledger(self):
        """Test decoding a record already stored on the ledger."""
        raw = (
            b'{"ID":"8989s1gjJJHJKHJSGHJDJSAD871238S","URI":"https://example.org/p.jpg",'
            b'"title":"original-splash-abstract","owner":"owner","appraisedValue":1962,'
            b'"artist":{"id":"id-13894047849","name":"Tomoko Janra","dateOfBirth":"20.11.1980"}}'
        )
        cert = decode_certificate(raw)
        assert cert.id == "8989s1gjJJHJKHJSGHJDJSAD871238S"
        assert cert.photo_uri == "https://example.org/p.jpg"
        assert cert.year_of_production == 1962
        assert cert.artist.name == "Tomoko Janra"

    def test_non_ascii_text(self, artist):
        """Test non-ASCII text survives encoding."""
        cert = Certificate("x", "uri", "Żółw", "Jürgen", 2001, artist)
        assert decode_certificate(encode_certificate(cert)).owner == "Jürgen"

    def test_encode_rejects_non_integer_year(self, certificate):
        """Test a string year is not encoded."""
        bad = dataclasses.replace(certificate, year_of_production="1962")
        with pytest.raises(SerializationError):
            encode_certificate(bad)

    def test_encode_rejects_boolean_year(self, certificate):
        """Test a boolean year is not encoded."""
        bad = dataclasses.replace(certificate, year_of_production=True)
        with pytest.raises(SerializationError):
            encode_certificate(bad)

    def test_encode_rejects_missing_artist(self, certificate):
        """Test a certificate without an artist is not encoded."""
        bad = dataclasses.replace(certificate, artist=None)
        with pytest.raises(SerializationError):
            encode_certificate(bad)

    def test_encode_rejects_non_string_owner(self, certificate):
        """Test a numeric owner is not encoded."""
        bad = dataclasses.replace(certificate, owner=42)
        with pytest.raises(SerializationError):
            encode_certificate(bad)

    def test_encode_rejects_other_objects(self):
        """Test only certificates can be encoded."""
        with pytest.raises(SerializationError):
            encode_certificate("string")


class TestDecoding:
    """Test rejection of values that are not certificates."""

    def test_json_string_literal(self):
        """Test a bare JSON string is not a certificate."""
        with pytest.raises(DeserializationError):
            decode_certificate(b'"string"')

    def test_not_json(self):
        """Test bytes that are not JSON are rejected."""
        with pytest.raises(DeserializationError):
            decode_certificate(b"\x00\xff not json")

    def test_deeply_nested(self):
        """Test deeply nested JSON is rejected."""
        with pytest.raises(DeserializationError):
            decode_certificate(b"[" * 200000 + b"]" * 200000)

    def test_missing_field(self, certificate):
        """Test a record missing a field is rejected."""
        data = certificate.to_dict()
        del data["owner"]
        with pytest.raises(DeserializationError, match="owner"):
            decode_certificate(json.dumps(data).encode())

    def test_wrong_year_type(self, certificate):
        """Test a string year in a stored record is rejected."""
        data = certificate.to_dict()
        data["appraisedValue"] = "1962"
        with pytest.raises(DeserializationError):
            decode_certificate(json.dumps(data).encode())

    def test_artist_not_object(self, certificate):
        """Test an artist that is not an object is rejected."""
        data = certificate.to_dict()
        data["artist"] = "Tomoko Janra"
        with pytest.raises(DeserializationError):
            decode_certificate(json.dumps(data).encode())

    def test_artist_missing_field(self, certificate):
        """Test an artist missing a field is rejected."""
        data = certificate.to_dict()
        del data["artist"]["dateOfBirth"]
        with pytest.raises(DeserializationError):
            decode_certificate(json.dumps(data).encode())
