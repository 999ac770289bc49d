"""Domain objects: patients, documents, bills, packages, requests and staff."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Optional

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

SUPPORTER_BUSY = "busy"
DOCTOR_AVAILABLE = "available"


class TreatmentError(Exception):
    """Raised when a step of the treatment workflow cannot be carried out."""


class RequestStatus(str, enum.Enum):
    """Lifecycle of a treatment request."""

    NOT_CONFIRMED = "not confirmed"
    CONFIRMED = "confirmed"
    SUPPORTER_ASSIGNED = "sup assigned"


def _parse_int(text: str) -> int:
    """Read a leading integer the way a C++ ``stoi`` call does."""
    match = _LEADING_INT.match(text)
    if match is None:
        raise TreatmentError(f"not a number: {text!r}")
    value = int(match.group(1))
    if not _INT_MIN <= value <= _INT_MAX:
        raise TreatmentError(f"number out of range: {text!r}")
    return value


def _percent_of(amount: int, percentage: int) -> int:
    """Integer percentage of ``amount``, truncated toward zero."""
    product = amount * percentage
    quotient = abs(product) // 100
    return quotient if product >= 0 else -quotient


@dataclass(frozen=True)
class BankCard:
    """A patient's bank card."""

    card_number: int
    cvv: int

    @classmethod
    def parse(cls, card_number: str, cvv: str) -> "BankCard":
        """Build a card from the text of its number and CVV."""
        return cls(_parse_int(card_number), _parse_int(cvv))


@dataclass
class Bill:
    """What a patient owes and has paid for a package."""

    debt: int
    paid: int = 0
    description: str = ""

    def pay(self, amount: int) -> None:
        """Record a payment: it is added to what was paid and taken off the debt."""
        self.paid += amount
        self.debt -= amount


@dataclass
class Document:
    """A patient's medical document."""

    kind_of_disease: str = ""
    disease_background: str = ""
    status: str = "not evaluated"
    age: Optional[int] = None

    @classmethod
    def parse(cls, text: str) -> "Document":
        """Read ``kind,background`` from comma separated text."""
        if not text:
            return cls()
        fields = text.split(",")
        background = fields[1] if len(fields) > 1 else ""
        return cls(kind_of_disease=fields[0], disease_background=background)


@dataclass(eq=False)
class TreatmentPackage:
    """A treatment package a patient may reserve."""

    id: int
    name: str
    estimated_cost: int
    capacity: int
    time: Optional[int] = None

    def reduce_capacity(self) -> None:
        """Take one place from the package."""
        self.capacity -= 1

    def calculate_payment(self, percentage: int) -> int:
        """The given percentage of the estimated cost, in whole units."""
        return _percent_of(self.estimated_cost, percentage)


@dataclass(eq=False)
class Request:
    """A patient's request for a treatment package."""

    time: int
    package: TreatmentPackage
    status: RequestStatus = RequestStatus.NOT_CONFIRMED
    patient: Optional["Patient"] = None


@dataclass(eq=False)
class Supporter:
    """A person who accompanies patients through treatment."""

    name: str = ""
    rank: int = 0
    email: str = ""
    phone_number: str = ""
    status: str = ""
    patients: list["Patient"] = field(default_factory=list)

    @property
    def is_busy(self) -> bool:
        return self.status == SUPPORTER_BUSY

    def announce_patient(self, patient: "Patient") -> None:
        """Put a patient in this supporter's care."""
        self.patients.append(patient)


@dataclass(eq=False)
class HospitalClinicDoctor:
    """A hospital, clinic or doctor that receives patient information."""

    name: str
    password: str
    email: str
    hos_cil_name: str
    status: str = DOCTOR_AVAILABLE
    patients: list["Patient"] = field(default_factory=list)

    def is_available(self) -> bool:
        return self.status == DOCTOR_AVAILABLE

    def send_info(self, patient: "Patient") -> None:
        """Receive a patient's information."""
        self.patients.append(patient)


@dataclass(eq=False)
class Patient:
    """A registered patient."""

    name: str
    password: str
    email: str
    phone_number: str
    document: Optional[Document] = None
    bank_card: Optional[BankCard] = None
    status: bool = True
    bill: Optional[Bill] = None
    supporter: Optional[Supporter] = None
    requests: list[Request] = field(default_factory=list)

    def matches_contact(self, email: str, phone_number: str) -> bool:
        return self.email == email and self.phone_number == phone_number

    def matches_credentials(self, password: str, email: str) -> bool:
        return self.password == password and self.email == email

    def has_bank_card(self) -> bool:
        return self.bank_card is not None

    def has_document(self) -> bool:
        return self.document is not None

    def add_request(self, request: Request) -> None:
        self.requests.append(request)

    def owns_request(self, request: Request) -> bool:
        """Whether this very request was made by the patient."""
        return any(r is request for r in self.requests)