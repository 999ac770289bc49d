import pytest

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
    TreatmentPackage,
)


def make_patient(**kwargs):
    password = "password"
    defaults = dict(
        name="alice",
        password=password,
        email="alice@example.com",
        phone_number="555-0100",
    )
    defaults.update(kwargs)
    return Patient(**defaults)


def make_package(**kwargs):
    defaults = dict(id=1, name="kidney", estimated_cost=1000, capacity=2)
    defaults.update(kwargs)
    return TreatmentPackage(**defaults)


def test_bank_card_parse_reads_numbers():
    card = BankCard.parse("1234", "987")
    assert card.card_number == 1234
    assert card.cvv == 987


def test_bank_card_parse_ignores_trailing_text():
    card = BankCard.parse("  42abc", "7 ")
    assert (card.card_number, card.cvv) == (42, 7)


@pytest.mark.parametrize("bad", ["", "abc", "99999999999"])
def test_bank_card_parse_rejects_bad_number(bad):
    with pytest.raises(TreatmentError):
        BankCard.parse(bad, "1")


def test_bill_pay_moves_amount_from_debt_to_paid():
    bill = Bill(debt=1000, paid=0, description="kidney")
    bill.pay(250)
    assert bill.paid == 250
    assert bill.debt == 750
    assert bill.paid + bill.debt == 1000


def test_document_parse_two_fields():
    doc = Document.parse("diabetes,since childhood")
    assert doc.kind_of_disease == "diabetes"
    assert doc.disease_background == "since childhood"
    assert doc.status == "not evaluated"


def test_document_parse_extra_fields_dropped():
    doc = Document.parse("flu,mild,ignored")
    assert (doc.kind_of_disease, doc.disease_background) == ("flu", "mild")


def test_document_parse_single_field_and_empty():
    assert Document.parse("flu").disease_background == ""
    empty = Document.parse("")
    assert (empty.kind_of_disease, empty.disease_background) == ("", "")


def test_package_reduce_capacity():
    package = make_package(capacity=2)
    package.reduce_capacity()
    assert package.capacity == 1


def test_package_calculate_payment_bounds():
    package = make_package(estimated_cost=1000)
    assert package.calculate_payment(100) == 1000
    assert package.calculate_payment(0) == 0


def test_package_calculate_payment_truncates():
    package = make_package(estimated_cost=99)
    assert package.calculate_payment(25) == 24


def test_request_starts_not_confirmed():
    request = Request(time=0, package=make_package())
    assert request.status is RequestStatus.NOT_CONFIRMED
    assert request.status == "not confirmed"
    assert RequestStatus.SUPPORTER_ASSIGNED == "sup assigned"


def test_supporter_announce_patient_and_busy():
    supporter = Supporter()
    patient = make_patient()
    supporter.announce_patient(patient)
    assert supporter.patients == [patient]
    assert not supporter.is_busy
    supporter.status = "busy"
    assert supporter.is_busy


def test_doctor_availability_and_send_info():
    password = "password"
    doctor = HospitalClinicDoctor("bob", password, "bob@example.com", "central")
    assert doctor.is_available()
    patient = make_patient()
    doctor.send_info(patient)
    assert doctor.patients == [patient]
    doctor.status = "busy"
    assert not doctor.is_available()


def test_patient_matching():
    patient = make_patient()
    assert patient.matches_contact("alice@example.com", "555-0100")
    assert not patient.matches_contact("alice@example.com", "555-0199")
    assert patient.matches_credentials("password", "alice@example.com")
    assert not patient.matches_credentials("secret", "alice@example.com")


def test_patient_document_and_card_presence():
    bare = make_patient()
    assert not bare.has_document()
    assert not bare.has_bank_card()
    full = make_patient(document=Document.parse("a,b"), bank_card=BankCard(1, 2))
    assert full.has_document()
    assert full.has_bank_card()


def test_patient_owns_request_by_identity():
    patient = make_patient()
    package = make_package()
    mine = Request(time=0, package=package)
    other = Request(time=0, package=package)
    patient.add_request(mine)
    assert patient.owns_request(mine)
    assert not patient.owns_request(other)