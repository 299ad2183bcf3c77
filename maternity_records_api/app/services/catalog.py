"""
Service catalog.

Every form of the workflow is a *service*: a name (which is also the
document collection its submissions are stored in) and an ordered list
of field names.  ``PatientRegistration`` is the entry point; after it
the patient is routed through ``SERVICE_ORDER``.

The catalog is built once at application start and never mutated.
"""

from __future__ import annotations

from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence, Tuple

from ..core.exceptions import UnknownServiceError

REGISTRATION = "PatientRegistration"
IDENTIFIER_FIELD = "PersonalNumber"

SERVICE_FIELDS: Mapping[str, Sequence[str]] = {
    "PatientRegistration": [
        "PersonalNumber", "FirstName", "LastName", "DateOfBirth", "Gender", "ContactNumber", "Email",
        "Address", "Allergies", "PreviousConditions", "InsuranceProvider", "InsuranceNumber",
        "EmergencyContact", "EmergencyContactNo", "BloodGroup",
    ],
    "MidwifeNotes": ["Time", "MidwifeNote", "DayNote", "Discharge", "MaternityReport"],
    "LaborProgressChart": [
        "PersonalNumber", "Name", "WomensClinic", "TimeOfLabor", "CervicalDilation", "FetalHeartRate",
        "Contractions",
    ],
    "DeliverySummary": [
        "PersonalNumber", "Name", "Facility", "DateOfBirth", "DeliveryMethod", "BirthWeight", "ApgarScore",
        "HeadCircumference", "Length",
    ],
    "LabResults": [
        "SerumFerritin", "SensitiveTSH", "FreeThyroxine", "Hepatitis", "HIV", "ImmunizationTest", "RhFactor",
        "Rubella", "SyphilisTest",
    ],
    "UltrasoundSummary": [
        "Date", "GestationalAge", "FetalHeartRate", "AmnioticFluid", "EstimatedDelivery", "BiparietalDiameter",
        "AbdominalDiameter", "FemurLength",
    ],
    "DischargeSummary": [
        "Date", "DischargeTime", "HemoglobinLevel", "BloodReceived", "RecommendedFollowUp", "WoundHealed",
    ],
    "MaternityReport": [
        "DeliveryMethod", "ApgarScore", "BirthWeight", "HeadCircumference", "Length", "NeonatalCondition",
        "Breastfeeding", "FollowUp",
    ],
    "FollowUpNotes": ["Time", "MidwifeNote", "CopySent", "BloodTest", "HemoglobinLevel", "FollowUp"],
    "PrenatalCheckup": [
        "PersonalNumber", "Name", "GestationalWeek", "LastMenstrualPeriod", "ExpectedDueDate", "BloodPressure",
        "Weight", "FetalMovements",
    ],
    "RoutineBloodTestResults": ["Hemoglobin", "Ferritin", "TSH", "FreeT4", "Hepatitis", "HIV", "Syphilis", "RhFactor"],
    "FollowUpBloodTestResults": ["Hemoglobin", "BloodTransfusion", "HemoglobinPostTransfusion", "FollowUp"],
    "Ultrasound": [
        "AmnioticFluid", "FetalHeartRate", "BiparietalDiameter", "AbdominalDiameter", "FemurLength",
        "EstimatedDeliveryDate",
    ],
    "PregnancyOverview": [
        "GestationalWeek", "ExpectedDeliveryDate", "BloodPressure", "Weight", "FetalActivity", "Complications",
        "Hemoglobin",
    ],
    "DeliveryInformation": [
        "ChildsBirthDate", "BirthWeight", "HeadCircumference", "Length", "ApgarScore", "DeliveryMethod",
        "DeliveryComplications",
    ],
    "PostpartumHealthCheck": [
        "BloodPressure", "Hemoglobin", "BloodTransfusion", "PostTransfusionHemoglobin", "WoundHealed", "FollowUp",
    ],
    "MaternalHealthSummary": ["Weight", "BloodPressure", "Hemoglobin", "FetalMovements", "Complications"],
    "InfantHealthStatus": ["BirthWeight", "HeadCircumference", "ApgarScore", "BirthStatus", "Breastfeeding", "FollowUp"],
}

SERVICE_ORDER: Sequence[str] = (
    "MidwifeNotes", "LaborProgressChart", "DeliverySummary", "LabResults", "UltrasoundSummary",
    "DischargeSummary", "MaternityReport", "FollowUpNotes", "PrenatalCheckup", "RoutineBloodTestResults",
    "FollowUpBloodTestResults", "Ultrasound", "PregnancyOverview", "DeliveryInformation",
    "PostpartumHealthCheck", "MaternalHealthSummary", "InfantHealthStatus",
)


class ServiceCatalog:
    """Immutable table of service definitions plus the traversal order.

    Parameters
    ----------
    fields : Mapping[str, Sequence[str]]
        Service name to ordered field names.  Must contain the
        registration entry point.
    order : Iterable[str]
        Traversal order after registration.  Every name must be in
        ``fields``; the registration entry point may not appear.
    """

    def __init__(self, fields: Mapping[str, Sequence[str]], order: Iterable[str]) -> None:
        order = tuple(order)
        if REGISTRATION not in fields:
            raise ValueError(f"Catalog must define {REGISTRATION}")
        unknown = [name for name in order if name not in fields]
        if unknown:
            raise ValueError(f"Service order references unknown services: {', '.join(unknown)}")
        if REGISTRATION in order:
            raise ValueError(f"{REGISTRATION} is the entry point and cannot be part of the service order")
        if len(set(order)) != len(order):
            raise ValueError("Service order contains duplicates")
        self._fields = MappingProxyType({name: tuple(names) for name, names in fields.items()})
        self._order = order

    def __contains__(self, service_name: object) -> bool:
        return service_name in self._fields

    def names(self) -> Tuple[str, ...]:
        """All service names, registration first, then in definition order."""
        return (REGISTRATION,) + tuple(name for name in self._fields if name != REGISTRATION)

    def fields_for(self, service_name: str) -> Tuple[str, ...]:
        try:
            return self._fields[service_name]
        except KeyError:
            raise UnknownServiceError(service_name) from None

    def traversal_order(self) -> Tuple[str, ...]:
        return self._order

    def position(self, service_name: str) -> int:
        """Index of ``service_name`` in the traversal order, or ``-1``."""
        try:
            return self._order.index(service_name)
        except ValueError:
            return -1


@lru_cache(maxsize=None)
def default_catalog() -> ServiceCatalog:
    """Return the catalog of the maternity care workflow."""
    return ServiceCatalog(SERVICE_FIELDS, SERVICE_ORDER)
