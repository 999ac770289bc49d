# onestep

A small treatment-booking workflow. Patients sign up and log in. They choose a
treatment package, pay a deposit and get a supporter assigned. Their
information is then passed on to the available hospitals, clinics and doctors.
The workflow can be used as a library or served over HTTP.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Library use

The package has four modules:

- `onestep.models`: `Patient`, `Document`, `BankCard`, `Bill`,
  `TreatmentPackage`, `Request` (with its `RequestStatus`), `Supporter` and
  `HospitalClinicDoctor`. It also holds `TreatmentError`, which is raised when
  a step fails.
- `onestep.services`: in-memory registries `PatientService`,
  `TreatmentPackageService`, `SupporterService` and `HCDService`.
- `onestep.handlers`: one handler per step of the workflow, and `PERCENTAGE`
  (25), the default share of the cost that is paid up front.
- `onestep.app`: the `OneStepToTreatment` web application and its `main`
  command.

A whole walk through the workflow:

```python
from onestep.handlers import (
    ChoosePackageHandler, ChooseSupporterHandler, PayMoneyHandler,
    SendInfoHandler, SignupHandler,
)
from onestep.models import HospitalClinicDoctor, Supporter, TreatmentPackage
from onestep.services import (
    HCDService, PatientService, SupporterService, TreatmentPackageService,
)

patients = PatientService()
packages = TreatmentPackageService(
    [TreatmentPackage(id=1, name="kidney", estimated_cost=1000, capacity=2)]
)
supporters = SupporterService([Supporter(name="Sam")])
password = "password"
providers = HCDService([
    HospitalClinicDoctor(name="Dr A", password=password,
                         email="clinic@example.com", hos_cil_name="City Clinic")
])

# The first word of the sign-up data is skipped; then name, password,
# e-mail and phone number follow.
patient = SignupHandler(patients).signup(
    "signup Ana password ana@example.com 12", "kidney,none", "1 111"
)
request = ChoosePackageHandler(packages).choose(patient, 1)
PayMoneyHandler().pay(request, patient)      # returns 250
patient.bill.paid, patient.bill.debt         # (250, 750)
supporter = ChooseSupporterHandler(supporters).choose(request, patient)
SendInfoHandler(providers).send(supporter, patient, request)  # providers reached
```

The steps behave as follows:

1. `SignupHandler.signup(data, document, bank_card)` reads the personal data,
   a document (`"kind,background"`) and a bank card (its number and CVV,
   separated by a space or a comma). It registers the patient with the
   `PatientService` and returns the patient. It raises if a patient with the
   same e-mail and phone number is already registered.
2. `LoginHandler.login(data)` takes `"password email phone_number"` and
   returns the registered patient.
3. `ChoosePackageHandler.choose(patient, package_id)` reserves a place in the
   package. It files a `Request` stamped with the handler's clock
   (`time.time` by default) and gives the patient a `Bill` for the estimated
   cost.
4. `PayMoneyHandler.pay(request, patient, percentage=PERCENTAGE)` pays that
   percentage of the cost, rounded toward zero. It confirms the request and
   returns the amount.
5. `ChooseSupporterHandler.choose(request, patient)` gives the patient the
   first supporter who is not busy and marks that supporter busy.
6. `SendInfoHandler.send(supporter, patient, request)` sends the patient to
   every available `HospitalClinicDoctor` and to the supporter. It returns the
   providers it reached.

Each step raises `TreatmentError` when it cannot go on. Some examples:

- an unknown package, or a package with no places left;
- a request that does not belong to the patient;
- paying twice, or choosing a supporter before paying;
- every supporter being busy;
- a wrong password.

## Running the site

```
onestep [--port PORT] [--root DIR]
```

This serves `OneStepToTreatment` on the given port (5000 by default) until it
is interrupted. `OneStepToTreatment.routes()` lists every path. To run one GET
without a server, call `OneStepToTreatment.handle(path, query)`; it returns a
`Response`.

The action routes read their values from query parameters:

- `/signup`: `name`, `password`, `email`, `phone_number`, `card_number` and
  `cvv`, plus the optional `kind_of_disease` and `disease_background`.
- `/login`: `password`, `email` and `phone_number`.
- `/package`: `package_id`.
- `/paymoney`, `/supporter` and `/sendInfo`: no parameters. They act on the
  patient, request and supporter of the current visit.

A step that succeeds answers with a 303 redirect to the next page. A failed
step answers 400 with the error message, and an unknown path answers 404.

## What it does not do

- The HTML pages, stylesheet and images behind the page routes (`/`,
  `/show_signup` and the others) are not part of the package. The site looks
  for them under `DIR/html/...` and answers 404 when a file is missing.
- All data is held in memory and is lost when the process stops.
- The `onestep` command starts with no treatment packages, supporters or
  providers, and there is no route that adds them. To offer packages, build
  `OneStepToTreatment` in Python with filled services.
- The site keeps a single current visit that all clients share.
- There is no real payment. A bank card is only parsed and stored.