"""
Tests for the credential provider and the store factory.
"""
import base64
import json

import pytest

from maternity_records_api.app.core.credentials import (
    decode_credentials,
    encode_credentials,
    resolve_credentials,
)
from maternity_records_api.app.core.db import SQLiteDocumentStore
from maternity_records_api.app.core.exceptions import ConfigurationError
from maternity_records_api.app.core.store import build_store

SERVICE_ACCOUNT = {'type': 'service_account', 'project_id': 'netdokproject', 'client_email': 'x@y.z'}


def b64(value):
    return base64.b64encode(json.dumps(value).encode('utf-8')).decode('ascii')


class TestResolveCredentials:

    def test_base64_env_takes_precedence(self, settings, tmp_path):
        (tmp_path / 'serviceAccountKey.json').write_text(json.dumps({'type': 'from-file'}))
        settings.google_credentials_base64 = b64(SERVICE_ACCOUNT)
        assert resolve_credentials(settings) == SERVICE_ACCOUNT

    def test_local_file(self, settings, tmp_path):
        (tmp_path / 'serviceAccountKey.json').write_text(json.dumps(SERVICE_ACCOUNT))
        assert resolve_credentials(settings) == SERVICE_ACCOUNT

    def test_nothing_configured(self, settings):
        with pytest.raises(ConfigurationError, match='No Firestore credentials'):
            resolve_credentials(settings)

    def test_invalid_base64(self, settings):
        settings.google_credentials_base64 = 'not base64 at all!'
        with pytest.raises(ConfigurationError):
            resolve_credentials(settings)

    def test_base64_of_non_object(self):
        with pytest.raises(ConfigurationError):
            decode_credentials(b64(['a', 'b']))

    def test_unreadable_file(self, settings, tmp_path):
        (tmp_path / 'serviceAccountKey.json').write_text('{broken')
        with pytest.raises(ConfigurationError):
            resolve_credentials(settings)

    def test_encode_round_trips_through_decode(self, tmp_path):
        path = tmp_path / 'key.json'
        path.write_text(json.dumps(SERVICE_ACCOUNT))
        assert decode_credentials(encode_credentials(path)) == SERVICE_ACCOUNT


class TestBuildStore:

    def test_sqlite_backend(self, settings):
        store = build_store(settings)
        assert isinstance(store, SQLiteDocumentStore)
        assert store.list_documents('MidwifeNotes') == []

    def test_unknown_backend(self, settings):
        settings.store_backend = 'mongodb'
        with pytest.raises(ConfigurationError):
            build_store(settings)

    def test_firestore_backend_without_credentials(self, settings, monkeypatch):
        import firebase_admin

        def no_app(name):
            raise ValueError(name)

        monkeypatch.setattr(firebase_admin, 'get_app', no_app)
        settings.store_backend = 'firestore'
        with pytest.raises(ConfigurationError):
            build_store(settings)
