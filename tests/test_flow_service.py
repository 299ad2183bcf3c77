"""
Unit tests for the form-flow controller.
"""
import pytest

from maternity_records_api.app.core.exceptions import ValidationError
from maternity_records_api.app.services.catalog import REGISTRATION, SERVICE_ORDER, ServiceCatalog
from maternity_records_api.app.services.flow_service import (
    FormFlowController,
    NextForm,
    Summary,
    UnknownService,
)


class TestAdvance:

    @pytest.mark.parametrize('index', range(len(SERVICE_ORDER) - 1))
    def test_every_service_but_last_goes_to_next(self, flow, index):
        decision = flow.advance(SERVICE_ORDER[index], 'P123')
        assert decision == NextForm(SERVICE_ORDER[index + 1], 'P123')

    def test_last_service_goes_to_summary(self, flow):
        assert flow.advance(SERVICE_ORDER[-1], 'P123') == Summary('P123')

    def test_registration_goes_to_first_service(self, flow):
        assert flow.advance(REGISTRATION, 'P123') == NextForm('MidwifeNotes', 'P123')

    def test_unknown_service_does_not_restart_flow(self, flow):
        decision = flow.advance('Dentistry', 'P123')
        assert isinstance(decision, UnknownService)
        assert decision.service == 'Dentistry'
        assert decision.location is None

    @pytest.mark.parametrize('personal_number', ['', '   ', None])
    def test_missing_personal_number(self, flow, personal_number):
        with pytest.raises(ValidationError):
            flow.advance('MidwifeNotes', personal_number)

    def test_deterministic(self, flow):
        assert flow.advance('LabResults', 'P1') == flow.advance('LabResults', 'P1')

    def test_empty_order_goes_straight_to_summary(self):
        flow = FormFlowController(ServiceCatalog({REGISTRATION: ['PersonalNumber']}, []))
        assert flow.advance(REGISTRATION, 'P1') == Summary('P1')


class TestLocations:

    def test_next_form_location(self):
        assert NextForm('LabResults', 'P123').location == '/addData/LabResults?personalNumber=P123'

    def test_summary_location(self):
        assert Summary('P123').location == '/patientSummary/P123'

    def test_identifier_is_quoted(self):
        assert NextForm('LabResults', 'a b&c').location == '/addData/LabResults?personalNumber=a+b%26c'
        assert Summary('a/b').location == '/patientSummary/a%2Fb'

    def test_outcomes(self):
        assert NextForm('A', 'P').outcome == 'next_form'
        assert Summary('P').outcome == 'summary'
        assert UnknownService('A', 'P').outcome == 'unknown_service'
