"""
Unit tests for generic record CRUD.
"""
import asyncio

import pytest

from maternity_records_api.app.core.exceptions import NotFoundError, UnknownServiceError
from maternity_records_api.app.services.record_service import RecordService


@pytest.fixture
def records(store, catalog):
    return RecordService(store, catalog)


def run(coro):
    return asyncio.run(coro)


class TestRecordService:

    def test_list_all_and_filtered(self, records, store):
        store.add('MidwifeNotes', {'PersonalNumber': 'P1', 'Time': '1'})
        store.add('MidwifeNotes', {'PersonalNumber': 'P2', 'Time': '2'})
        assert len(run(records.list_records('MidwifeNotes'))) == 2
        only_p2 = run(records.list_records('MidwifeNotes', 'P2'))
        assert [r.data['Time'] for r in only_p2] == ['2']

    def test_unknown_collection(self, records):
        with pytest.raises(UnknownServiceError):
            run(records.list_records('Dentistry'))

    def test_get(self, records, store):
        doc = store.add('LabResults', {'PersonalNumber': 'P1', 'HIV': 'neg'})
        record = run(records.get_record('LabResults', doc.id))
        assert record.id == doc.id
        assert record.collection == 'LabResults'
        assert record.data == {'PersonalNumber': 'P1', 'HIV': 'neg'}

    def test_get_missing(self, records):
        with pytest.raises(NotFoundError):
            run(records.get_record('LabResults', 'nope'))

    def test_update_keeps_identifier_when_blank(self, records, store):
        doc = store.add('LabResults', {'PersonalNumber': 'P1', 'HIV': 'neg'})
        record = run(records.update_record('LabResults', doc.id, {'PersonalNumber': '', 'HIV': 'pos'}))
        assert record.data == {'PersonalNumber': 'P1', 'HIV': 'pos'}

    def test_update_missing(self, records):
        with pytest.raises(NotFoundError):
            run(records.update_record('LabResults', 'nope', {'HIV': 'pos'}))

    def test_delete(self, records, store):
        doc = store.add('LabResults', {'PersonalNumber': 'P1'})
        run(records.delete_record('LabResults', doc.id))
        assert store.get('LabResults', doc.id) is None
        with pytest.raises(NotFoundError):
            run(records.delete_record('LabResults', doc.id))
