"""
Unit tests for the submission service.
"""
import asyncio

import pytest

from maternity_records_api.app.core.exceptions import (
    StoreError,
    UnknownServiceError,
    ValidationError,
)
from maternity_records_api.app.services.catalog import REGISTRATION, ServiceCatalog
from maternity_records_api.app.services.flow_service import FormFlowController, NextForm, Summary
from maternity_records_api.app.services.submission_service import (
    SubmissionService,
    resolve_personal_number,
)


class FailingStore:
    """Store double whose writes always fail."""

    def __init__(self):
        self.calls = 0

    def add(self, collection, data):
        self.calls += 1
        raise StoreError('disk full')


@pytest.fixture
def service(store, catalog, flow):
    return SubmissionService(store, catalog, flow)


def submit(service, *args, **kwargs):
    return asyncio.run(service.submit(*args, **kwargs))


class TestResolvePersonalNumber:

    def test_hidden_field_first(self):
        assert resolve_personal_number({'personalNumber': 'A', 'PersonalNumber': 'B'}, 'C') == 'A'

    def test_form_field_then_query(self):
        assert resolve_personal_number({'PersonalNumber': 'B'}, 'C') == 'B'
        assert resolve_personal_number({}, 'C') == 'C'

    def test_blank_values_skipped(self):
        assert resolve_personal_number({'personalNumber': ' ', 'PersonalNumber': ''}, 'C') == 'C'
        assert resolve_personal_number({'personalNumber': ''}, None) is None

    def test_value_returned_as_given(self):
        assert resolve_personal_number({'PersonalNumber': ' P1 '}) == ' P1 '


class TestSubmit:

    def test_registration_routes_to_first_service(self, service, store):
        doc, decision = submit(service, REGISTRATION, {'PersonalNumber': 'P123', 'FirstName': 'Anna'})
        assert decision == NextForm('MidwifeNotes', 'P123')
        assert store.get(REGISTRATION, doc.id).data == {'PersonalNumber': 'P123', 'FirstName': 'Anna'}

    def test_service_record_is_tagged(self, service, store):
        doc, decision = submit(service, 'MidwifeNotes', {'Time': '08:00'}, 'P123')
        assert decision == NextForm('LaborProgressChart', 'P123')
        assert store.get('MidwifeNotes', doc.id).data == {'Time': '08:00', 'PersonalNumber': 'P123'}

    def test_transport_field_not_stored(self, service, store):
        doc, _ = submit(service, 'MidwifeNotes', {'personalNumber': 'P123', 'Time': '08:00'})
        assert 'personalNumber' not in store.get('MidwifeNotes', doc.id).data

    def test_identifier_stored_unchanged(self, service, store):
        doc, decision = submit(service, 'MidwifeNotes', {'personalNumber': ' P1', 'Time': '08:00'})
        assert store.get('MidwifeNotes', doc.id).data['PersonalNumber'] == ' P1'
        assert decision == NextForm('LaborProgressChart', ' P1')

    def test_last_service_routes_to_summary(self, service):
        _, decision = submit(service, 'InfantHealthStatus', {'BirthWeight': '3400'}, 'P123')
        assert decision == Summary('P123')

    @pytest.mark.parametrize('service_name', [REGISTRATION, 'MidwifeNotes'])
    def test_missing_identifier_rejected_before_write(self, service, store, service_name):
        with pytest.raises(ValidationError):
            submit(service, service_name, {'Time': '08:00', 'PersonalNumber': ''})
        assert store.list_documents(service_name) == []

    def test_unknown_service_rejected(self, service, store):
        with pytest.raises(UnknownServiceError):
            submit(service, 'Dentistry', {'Tooth': '12'}, 'P123')
        assert store.list_documents('Dentistry') == []

    def test_catalog_service_outside_flow_rejected_before_write(self, store):
        catalog = ServiceCatalog({REGISTRATION: ['PersonalNumber'], 'A': [], 'Orphan': []}, ['A'])
        service = SubmissionService(store, catalog, FormFlowController(catalog))
        with pytest.raises(UnknownServiceError):
            submit(service, 'Orphan', {}, 'P1')
        assert store.list_documents('Orphan') == []

    def test_two_submissions_make_two_records(self, service, store):
        submit(service, 'LabResults', {'HIV': 'neg'}, 'P123')
        submit(service, 'LabResults', {'HIV': 'neg'}, 'P123')
        assert len(store.find('LabResults', 'PersonalNumber', 'P123')) == 2

    def test_store_failure_propagates(self, catalog, flow):
        failing = FailingStore()
        service = SubmissionService(failing, catalog, flow)
        with pytest.raises(StoreError):
            submit(service, 'MidwifeNotes', {'Time': '08:00'}, 'P123')
        assert failing.calls == 1
