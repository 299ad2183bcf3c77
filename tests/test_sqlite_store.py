"""
Tests for the SQLite document store.
"""
import sqlite3

import pytest

from maternity_records_api.app.core.db import SQLiteDocumentStore, get_connection, get_database_path
from maternity_records_api.app.core.exceptions import StoreError


class TestAddAndGet:

    def test_add_returns_document_with_id(self, store):
        doc = store.add('MidwifeNotes', {'PersonalNumber': 'P1', 'Time': '08:00'})
        assert doc.id
        assert doc.collection == 'MidwifeNotes'
        assert store.get('MidwifeNotes', doc.id).data == {'PersonalNumber': 'P1', 'Time': '08:00'}

    def test_add_is_append_only(self, store):
        first = store.add('LabResults', {'PersonalNumber': 'P1', 'HIV': 'neg'})
        second = store.add('LabResults', {'PersonalNumber': 'P1', 'HIV': 'neg'})
        assert first.id != second.id
        assert len(store.list_documents('LabResults')) == 2

    def test_get_missing(self, store):
        assert store.get('MidwifeNotes', 'nope') is None

    def test_collections_are_separate(self, store):
        doc = store.add('MidwifeNotes', {'PersonalNumber': 'P1'})
        assert store.get('LabResults', doc.id) is None
        assert store.list_documents('LabResults') == []


class TestFind:

    def test_find_by_field(self, store):
        store.add('PatientRegistration', {'PersonalNumber': 'P1', 'FirstName': 'A'})
        store.add('PatientRegistration', {'PersonalNumber': 'P2', 'FirstName': 'B'})
        found = store.find('PatientRegistration', 'PersonalNumber', 'P2')
        assert [d.data['FirstName'] for d in found] == ['B']

    def test_find_keeps_insertion_order(self, store):
        for name in ['first', 'second', 'third']:
            store.add('MidwifeNotes', {'PersonalNumber': 'P1', 'MidwifeNote': name})
        found = store.find('MidwifeNotes', 'PersonalNumber', 'P1')
        assert [d.data['MidwifeNote'] for d in found] == ['first', 'second', 'third']

    def test_find_first(self, store):
        store.add('PatientRegistration', {'PersonalNumber': 'P1', 'FirstName': 'A'})
        store.add('PatientRegistration', {'PersonalNumber': 'P1', 'FirstName': 'B'})
        assert store.find_first('PatientRegistration', 'PersonalNumber', 'P1').data['FirstName'] == 'A'
        assert store.find_first('PatientRegistration', 'PersonalNumber', 'P9') is None

    def test_find_with_limit(self, store):
        for _ in range(3):
            store.add('MidwifeNotes', {'PersonalNumber': 'P1'})
        assert len(store.find('MidwifeNotes', 'PersonalNumber', 'P1', limit=2)) == 2


class TestUpdateAndDelete:

    def test_update_merges(self, store):
        doc = store.add('MidwifeNotes', {'PersonalNumber': 'P1', 'Time': '08:00'})
        updated = store.update('MidwifeNotes', doc.id, {'Time': '09:00', 'DayNote': 'ok'})
        assert updated.data == {'PersonalNumber': 'P1', 'Time': '09:00', 'DayNote': 'ok'}
        assert store.get('MidwifeNotes', doc.id).data == updated.data

    def test_update_missing(self, store):
        assert store.update('MidwifeNotes', 'nope', {'Time': '1'}) is None

    def test_delete(self, store):
        doc = store.add('MidwifeNotes', {'PersonalNumber': 'P1'})
        assert store.delete('MidwifeNotes', doc.id) is True
        assert store.get('MidwifeNotes', doc.id) is None
        assert store.delete('MidwifeNotes', doc.id) is False


class TestMigrations:

    def test_init_db_is_idempotent(self, store):
        store.init_db()
        conn = get_connection(store.db_path)
        try:
            versions = [row['version'] for row in conn.execute('SELECT version FROM migrations ORDER BY version')]
        finally:
            conn.close()
        assert versions == [1, 2]

    def test_driver_errors_become_store_errors(self, tmp_path):
        # No migrations applied: the documents table does not exist.
        bare = SQLiteDocumentStore(str(tmp_path / 'bare.db'))
        with pytest.raises(StoreError) as info:
            bare.add('MidwifeNotes', {'PersonalNumber': 'P1'})
        assert isinstance(info.value.__cause__, sqlite3.Error)
        with pytest.raises(StoreError):
            bare.list_documents('MidwifeNotes')

    def test_relative_database_path_is_absolute(self):
        assert get_database_path('records.db').endswith('records.db')
        assert get_database_path('records.db') != 'records.db'

    def test_absolute_database_path_unchanged(self, tmp_path):
        path = str(tmp_path / 'x.db')
        assert get_database_path(path) == path
