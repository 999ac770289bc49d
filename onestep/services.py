"""Registries of patients, packages, supporters and care providers."""

from __future__ import annotations

from dataclasses import dataclass, field

from onestep.models import (
    HospitalClinicDoctor,
    Patient,
    Supporter,
    TreatmentError,
    TreatmentPackage,
)


@dataclass
class PatientService:
    """The registered patients."""

    patients: list[Patient] = field(default_factory=list)

    def add(self, patient: Patient) -> None:
        self.patients.append(patient)

    def exists(self, email: str, phone_number: str) -> bool:
        return any(p.matches_contact(email, phone_number) for p in self.patients)

    def find(self, password: str, email: str) -> Patient:
        """The patient with these credentials."""
        for patient in self.patients:
            if patient.matches_credentials(password, email):
                return patient
        raise TreatmentError("password not correct!")


@dataclass
class TreatmentPackageService:
    """The treatment packages on offer."""

    packages: list[TreatmentPackage] = field(default_factory=list)

    def add(self, package: TreatmentPackage) -> None:
        self.packages.append(package)

    def is_valid(self, package_id: int) -> bool:
        return any(p.id == package_id for p in self.packages)

    def reserve(self, package_id: int) -> TreatmentPackage:
        """Take a place in the first package with this id."""
        for package in self.packages:
            if package.id == package_id:
                if not package.capacity:
                    raise TreatmentError("no capacity!")
                package.reduce_capacity()
                return package
        raise TreatmentError("invalid package!")


@dataclass
class SupporterService:
    """The supporters who can accompany patients."""

    supporters: list[Supporter] = field(default_factory=list)

    def add(self, supporter: Supporter) -> None:
        self.supporters.append(supporter)

    def next_available(self) -> Supporter:
        """The first supporter who is not busy."""
        for supporter in self.supporters:
            if not supporter.is_busy:
                return supporter
        raise TreatmentError("all supporters busy!")


@dataclass
class HCDService:
    """The hospitals, clinics and doctors that take patients."""

    hcds: list[HospitalClinicDoctor] = field(default_factory=list)

    def add(self, hcd: HospitalClinicDoctor) -> None:
        self.hcds.append(hcd)

    def assign(self, patient: Patient) -> list[HospitalClinicDoctor]:
        """Send the patient to every available provider; return those reached."""
        reached = [hcd for hcd in self.hcds if hcd.is_available()]
        for hcd in reached:
            hcd.send_info(patient)
        return reached