"""The steps of the treatment workflow, one handler per step."""

from __future__ import annotations

import re
import time
from typing import Callable

from onestep.models import (
    BankCard,
    Bill,
    Document,
    HospitalClinicDoctor,
    Patient,
    Request,
    RequestStatus,
    Supporter,
    TreatmentError,
)
from onestep.services import (
    HCDService,
    PatientService,
    SupporterService,
    TreatmentPackageService,
)

PERCENTAGE = 25
"""Share of a package's estimated cost paid up front, in percent."""

_SIGNUP_FIELDS = 5
_LOGIN_FIELDS = 3
_CARD_SEPARATORS = re.compile(r"[\s,]+")


def _fields(text: str, count: int) -> list[str]:
    """Whitespace separated words of ``text``, padded with empty strings."""
    words = text.split()
    words.extend([""] * (count - len(words)))
    return words[:count]


def _parse_bank_card(text: str) -> BankCard:
    parts = [part for part in _CARD_SEPARATORS.split(text.strip()) if part]
    if len(parts) < 2:
        raise TreatmentError("bank card needs a number and a CVV")
    return BankCard.parse(parts[0], parts[1])


def _check_owned(patient: Patient, request: Request) -> None:
    if not patient.owns_request(request):
        raise TreatmentError("request not found!")


class SignupHandler:
    """Registers new patients."""

    def __init__(self, patient_service: PatientService) -> None:
        self.patient_service = patient_service

    def signup(self, data: str, document: str, bank_card: str) -> Patient:
        """Register a patient from ``data``: a leading word, then name,
        password, e-mail and phone number, separated by whitespace."""
        _, name, password, email, phone_number = _fields(data, _SIGNUP_FIELDS)
        if self.patient_service.exists(email, phone_number):
            raise TreatmentError("login! you have alredy signed up")
        patient = Patient(
            name=name,
            password=password,
            email=email,
            phone_number=phone_number,
            document=Document.parse(document),
            bank_card=_parse_bank_card(bank_card),
        )
        patient.status = True
        self.patient_service.add(patient)
        return patient


class LoginHandler:
    """Logs registered patients in."""

    def __init__(self, patient_service: PatientService) -> None:
        self.patient_service = patient_service

    def login(self, data: str) -> Patient:
        """Log in from ``data``: password, e-mail and phone number."""
        password, email, phone_number = _fields(data, _LOGIN_FIELDS)
        if not self.patient_service.exists(email, phone_number):
            raise TreatmentError("signup first!")
        patient = self.patient_service.find(password, email)
        patient.status = True
        if not patient.has_document():
            raise TreatmentError("document not available please enter document.")
        if not patient.has_bank_card():
            raise TreatmentError(
                "bank card not available please enter the bank card info."
            )
        return patient


class ChoosePackageHandler:
    """Reserves a treatment package for a patient."""

    def __init__(
        self,
        package_service: TreatmentPackageService,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.package_service = package_service
        self.clock = clock

    def choose(self, patient: Patient, package_id: int) -> Request:
        """Reserve the package, file a request and bill the patient for it."""
        if not self.package_service.is_valid(package_id):
            raise TreatmentError("invalid package!")
        package = self.package_service.reserve(package_id)
        request = Request(time=int(self.clock()), package=package, patient=patient)
        patient.add_request(request)
        patient.bill = Bill(debt=package.estimated_cost, paid=0, description=package.name)
        return request


class PayMoneyHandler:
    """Takes the up-front payment for a request."""

    def pay(self, request: Request, patient: Patient, percentage: int = PERCENTAGE) -> int:
        """Pay ``percentage`` of the package cost; return the amount paid."""
        _check_owned(patient, request)
        if request.status is not RequestStatus.NOT_CONFIRMED:
            raise TreatmentError("already paid!")
        if patient.bill is None:
            raise TreatmentError("no bill to pay!")
        amount = request.package.calculate_payment(percentage)
        patient.bill.pay(amount)
        request.status = RequestStatus.CONFIRMED
        return amount


class ChooseSupporterHandler:
    """Assigns a supporter to a paid request."""

    def __init__(self, supporter_service: SupporterService) -> None:
        self.supporter_service = supporter_service

    def choose(self, request: Request, patient: Patient) -> Supporter:
        """Give the patient the first free supporter and mark them busy."""
        _check_owned(patient, request)
        if request.status is not RequestStatus.CONFIRMED:
            raise TreatmentError("not paid yet!")
        supporter = self.supporter_service.next_available()
        supporter.status = "busy"
        patient.supporter = supporter
        request.status = RequestStatus.SUPPORTER_ASSIGNED
        return supporter


class SendInfoHandler:
    """Passes a patient's information on to care providers and the supporter."""

    def __init__(self, hcd_service: HCDService) -> None:
        self.hcd_service = hcd_service

    def send(
        self, supporter: Supporter, patient: Patient, request: Request
    ) -> list[HospitalClinicDoctor]:
        """Send the patient to every available provider; return those reached."""
        _check_owned(patient, request)
        if request.status is not RequestStatus.SUPPORTER_ASSIGNED:
            raise TreatmentError("no supporter assigned yet!")
        reached = self.hcd_service.assign(patient)
        supporter.announce_patient(patient)
        return reached