"""The web application that walks a patient through treatment."""

from __future__ import annotations

import argparse
import sys
import threading
from dataclasses import dataclass
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Callable, Mapping, Optional, Union
from urllib.parse import parse_qsl, urlsplit

from onestep.handlers import (
    PERCENTAGE,
    ChoosePackageHandler,
    ChooseSupporterHandler,
    LoginHandler,
    PayMoneyHandler,
    SendInfoHandler,
    SignupHandler,
)
from onestep.models import Patient, Request, Supporter, TreatmentError
from onestep.services import (
    HCDService,
    PatientService,
    SupporterService,
    TreatmentPackageService,
)

DEFAULT_PORT = 5000

_CONTENT_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".avif": "image/avif",
}
_TEXT = "text/plain; charset=utf-8"

_STATIC_ROUTES = {
    "/": "html/main.html",
    "/main_css": "html/css/main.css",
    "/icon": "html/images/icon.png",
    "/main_background": "html/images/mainpage.jpg",
    "/background": "html/images/main2.avif",
    "/show_signup": "html/signup.html",
    "/show_login": "html/login.html",
    "/show_package": "html/package.html",
    "/midwifery": "html/images/midwifery.jpg",
    "/orthopedics": "html/images/orthopedics.jpeg",
    "/General": "html/images/General surgery.jpg",
    "/ENT": "html/images/ENT.jpg",
    "/diabet": "html/images/diabet.jpg",
    "/kidney": "html/images/kidney.jpg",
    "/show_paymoney": "html/payMoney.html",
    "/payMoneyBackground": "html/images/moneyBackground.jpg",
    "/Thank_show": "html/thanks.html",
    "/thankyou": "html/images/thankyou.jpg",
}


@dataclass(frozen=True)
class StaticFile:
    """A file served as it is."""

    path: str

    @property
    def content_type(self) -> str:
        return _CONTENT_TYPES.get(Path(self.path).suffix.lower(), "application/octet-stream")


@dataclass(frozen=True)
class Response:
    """What the application answers to one request."""

    status: HTTPStatus
    body: bytes = b""
    content_type: str = _TEXT
    location: Optional[str] = None


Action = Callable[[Mapping[str, str]], Response]
Route = Union[StaticFile, Action]


def _redirect(location: str) -> Response:
    return Response(HTTPStatus.SEE_OTHER, location=location)


def _require(query: Mapping[str, str], key: str) -> str:
    value = query.get(key, "").strip()
    if not value:
        raise TreatmentError(f"missing {key}")
    if len(value.split()) != 1:
        raise TreatmentError(f"{key} must not contain spaces")
    return value


class OneStepToTreatment:
    """Holds the services, the handlers and the state of the current visit."""

    def __init__(
        self,
        patient_service: Optional[PatientService] = None,
        package_service: Optional[TreatmentPackageService] = None,
        supporter_service: Optional[SupporterService] = None,
        hcd_service: Optional[HCDService] = None,
        root: Union[str, Path] = ".",
    ) -> None:
        self.patient_service = patient_service or PatientService()
        self.package_service = package_service or TreatmentPackageService()
        self.supporter_service = supporter_service or SupporterService()
        self.hcd_service = hcd_service or HCDService()
        self.root = Path(root)

        self.signup_handler = SignupHandler(self.patient_service)
        self.login_handler = LoginHandler(self.patient_service)
        self.choose_package_handler = ChoosePackageHandler(self.package_service)
        self.pay_money_handler = PayMoneyHandler()
        self.choose_supporter_handler = ChooseSupporterHandler(self.supporter_service)
        self.send_info_handler = SendInfoHandler(self.hcd_service)

        self.patient: Optional[Patient] = None
        self.request: Optional[Request] = None
        self.supporter: Optional[Supporter] = None
        self._lock = threading.Lock()

    def routes(self) -> dict[str, Route]:
        """Every path the application answers, mapped to what serves it."""
        table: dict[str, Route] = {
            path: StaticFile(file) for path, file in _STATIC_ROUTES.items()
        }
        table.update(
            {
                "/signup": self._signup,
                "/login": self._login,
                "/package": self._package,
                "/paymoney": self._pay_money,
                "/supporter": self._choose_supporter,
                "/sendInfo": self._send_info,
            }
        )
        return table

    def handle(self, path: str, query: Mapping[str, str]) -> Response:
        """Answer a GET of ``path`` with the given query parameters."""
        route = self.routes().get(path)
        if route is None:
            return Response(HTTPStatus.NOT_FOUND, f"no page at {path}".encode())
        if isinstance(route, StaticFile):
            try:
                body = (self.root / route.path).read_bytes()
            except OSError:
                return Response(HTTPStatus.NOT_FOUND, f"missing file {route.path}".encode())
            return Response(HTTPStatus.OK, body, route.content_type)
        with self._lock:
            try:
                return route(query)
            except TreatmentError as error:
                return Response(HTTPStatus.BAD_REQUEST, str(error).encode())

    def run(self, port: int = DEFAULT_PORT) -> None:
        """Serve the application over HTTP until interrupted."""
        app = self

        class _RequestHandler(BaseHTTPRequestHandler):
            def do_GET(self) -> None:
                url = urlsplit(self.path)
                response = app.handle(url.path, dict(parse_qsl(url.query)))
                self.send_response(response.status)
                if response.location is not None:
                    self.send_header("Location", response.location)
                self.send_header("Content-Type", response.content_type)
                self.send_header("Content-Length", str(len(response.body)))
                self.end_headers()
                self.wfile.write(response.body)

        with ThreadingHTTPServer(("", port), _RequestHandler) as server:
            server.serve_forever()

    def _current_patient(self) -> Patient:
        if self.patient is None:
            raise TreatmentError("login first!")
        return self.patient

    def _current_request(self) -> Request:
        if self.request is None:
            raise TreatmentError("choose a package first!")
        return self.request

    def _current_supporter(self) -> Supporter:
        if self.supporter is None:
            raise TreatmentError("no supporter assigned!")
        return self.supporter

    def _signup(self, query: Mapping[str, str]) -> Response:
        data = " ".join(
            [
                "signup",
                _require(query, "name"),
                _require(query, "password"),
                _require(query, "email"),
                _require(query, "phone_number"),
            ]
        )
        document = f"{query.get('kind_of_disease', '')},{query.get('disease_background', '')}"
        bank_card = f"{_require(query, 'card_number')} {_require(query, 'cvv')}"
        self.signup_handler.signup(data, document, bank_card)
        return _redirect("/show_login")

    def _login(self, query: Mapping[str, str]) -> Response:
        data = " ".join(
            [
                _require(query, "password"),
                _require(query, "email"),
                _require(query, "phone_number"),
            ]
        )
        self.patient = self.login_handler.login(data)
        self.request = None
        self.supporter = None
        return _redirect("/show_package")

    def _package(self, query: Mapping[str, str]) -> Response:
        patient = self._current_patient()
        raw_id = _require(query, "package_id")
        try:
            package_id = int(raw_id)
        except ValueError:
            raise TreatmentError(f"invalid package id: {raw_id}") from None
        self.request = self.choose_package_handler.choose(patient, package_id)
        return _redirect("/show_paymoney")

    def _pay_money(self, query: Mapping[str, str]) -> Response:
        patient = self._current_patient()
        self.pay_money_handler.pay(self._current_request(), patient, PERCENTAGE)
        return _redirect("/supporter")

    def _choose_supporter(self, query: Mapping[str, str]) -> Response:
        patient = self._current_patient()
        self.supporter = self.choose_supporter_handler.choose(self._current_request(), patient)
        return _redirect("/sendInfo")

    def _send_info(self, query: Mapping[str, str]) -> Response:
        patient = self._current_patient()
        self.send_info_handler.send(self._current_supporter(), patient, self._current_request())
        return _redirect("/Thank_show")


def main(argv: Optional[list[str]] = None) -> int:
    """Start the web application."""
    parser = argparse.ArgumentParser(description="Serve the treatment booking site.")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--root", default=".", help="directory holding the html folder")
    args = parser.parse_args(argv)
    app = OneStepToTreatment(root=args.root)
    try:
        app.run(args.port)
    except OSError as error:
        print(error, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass
    return 0