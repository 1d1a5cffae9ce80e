"""
Tests for the two Firestore token documents.
"""

import pytest
from pydantic import ValidationError

from mixtape.services.token_store import (
    get_client_access_token,
    get_server_access_token,
    save_client_access_token,
    save_server_access_token,
    seed_server_refresh_token,
)


def test_missing_documents_read_as_none(fake_db):
    assert get_client_access_token() is None
    assert get_server_access_token() is None


def test_client_token_overwrites_single_document(fake_db):
    save_client_access_token("first")
    save_client_access_token("second")

    assert get_client_access_token().accessToken == "second"
    assert fake_db.writes == [("spotify", "clientAccessToken")] * 2


def test_server_token_requires_refresh_token(fake_db):
    with pytest.raises(ValidationError):
        save_server_access_token("access", "")
    assert fake_db.writes == []


def test_server_document_without_refresh_token_reads_as_none(fake_db):
    fake_db.docs[("spotify", "serverAccessToken")] = {"accessToken": "a", "refreshToken": ""}
    assert get_server_access_token() is None


def test_seed_then_read(fake_db):
    seed_server_refresh_token("seed")

    token = get_server_access_token()
    assert token.refreshToken == "seed"
    assert token.accessToken is None
    assert token.updatedAt is not None


LEGACY_UPDATED_AT = "10/19/2026, 9:00:00 AM"


def test_client_document_with_locale_updated_at(fake_db):
    fake_db.docs[("spotify", "clientAccessToken")] = {"accessToken": "old", "updatedAt": LEGACY_UPDATED_AT}

    token = get_client_access_token()
    assert token.accessToken == "old"
    assert token.updatedAt == LEGACY_UPDATED_AT


def test_server_document_with_unexpected_fields(fake_db):
    fake_db.docs[("spotify", "serverAccessToken")] = {
        "accessToken": "a",
        "refreshToken": "r",
        "updatedAt": 1760000000,
        "scope": "playlist-modify-public",
    }

    token = get_server_access_token()
    assert token.refreshToken == "r"
    assert token.updatedAt is None
