from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol

import httpx
from bs4 import Tag

from . import dom
from .host import BrowserHost


logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

REQUIRED_FIELDS = "input[required], textarea[required]"
SUCCESS_REVERT_MS = 3000
ERROR_CLEAR_MS = 5000
SIMULATED_DELAY_MS = 1000

MSG_REQUIRED = "This field is required"
MSG_EMAIL = "Please enter a valid email address"
MSG_SUBMIT_FAILED = "Something went wrong. Please try again."


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_RE.match(value))


def field_error(value: str, kind: str) -> Optional[str]:
    """Return the validation message for a field value, or None if valid."""
    value = value.strip()
    if not value:
        return MSG_REQUIRED
    if kind == "email" and not is_valid_email(value):
        return MSG_EMAIL
    return None


def field_error_element(field: Tag) -> Optional[Tag]:
    """The inline error shown for `field`: the element directly after it."""
    sibling = field.find_next_sibling()
    if sibling is not None and dom.has_class(sibling, "field-error"):
        return sibling
    return None


def form_data(form: Tag) -> Dict[str, str]:
    data: Dict[str, str] = {}
    for el in form.select("input[name], textarea[name], select[name]"):
        if dom.field_type(el) in ("submit", "button"):
            continue
        data[el["name"]] = dom.field_value(el)
    return data


def reset_form(form: Tag) -> None:
    for el in form.select("input, textarea"):
        if dom.field_type(el) in ("submit", "button", "checkbox", "radio", "hidden"):
            continue
        dom.set_field_value(el, "")


@dataclass
class SubmissionResult:
    ok: bool
    error: Optional[str] = None


Done = Callable[[SubmissionResult], None]


class FormSubmitter(Protocol):
    """Delivers form data and reports the outcome through `done` on the host loop."""

    def submit(self, host: BrowserHost, form_id: str, data: Dict[str, str], done: Done) -> None: ...


class SimulatedSubmitter:
    """Stand-in for a backend: succeeds after a fixed delay."""

    def __init__(self, delay_ms: float = SIMULATED_DELAY_MS) -> None:
        self.delay_ms = delay_ms
        self.submissions: List[Dict[str, str]] = []

    def submit(self, host: BrowserHost, form_id: str, data: Dict[str, str], done: Done) -> None:
        self.submissions.append(dict(data))
        host.set_timeout(lambda: done(SubmissionResult(ok=True)), self.delay_ms)


class HttpFormSubmitter:
    """
    Posts form data as JSON to a backend endpoint.

    Notes
    - Any 2xx response is success; other statuses and transport errors are
      reported as failures, never raised.
    - The outcome is delivered on the next host tick.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._endpoint = endpoint
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpFormSubmitter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def post(self, form_id: str, data: Dict[str, str]) -> SubmissionResult:
        try:
            resp = self._client.post(self._endpoint, json={"form": form_id, "data": data})
        except httpx.HTTPError as exc:
            logger.warning("Form submission failed: %s", exc)
            return SubmissionResult(ok=False, error=str(exc))
        if resp.is_success:
            return SubmissionResult(ok=True)
        return SubmissionResult(ok=False, error=f"HTTP {resp.status_code}")

    def submit(self, host: BrowserHost, form_id: str, data: Dict[str, str], done: Done) -> None:
        result = self.post(form_id, data)
        host.set_timeout(lambda: done(result), 0)


class FormHandler:
    """
    Client-side validation and submission for every form on the page.

    - Required fields validate on blur and clear their error on input.
    - Submit is intercepted; valid forms go to the submitter, with loading,
      success and failure states shown on the submit button.
    """

    def __init__(
        self,
        host: BrowserHost,
        submitter: FormSubmitter,
        *,
        on_success: Optional[Callable[[Tag], None]] = None,
    ) -> None:
        self._host = host
        self._submitter = submitter
        self._on_success = on_success

    def setup(self) -> None:
        for form in self._host.document.select("form"):
            self._host.add_event_listener(form, "submit", self.handle_submit)
            for field in form.select(REQUIRED_FIELDS):
                self._host.add_event_listener(field, "blur", lambda e, f=field: self.validate_field(f))
                self._host.add_event_listener(field, "input", lambda e, f=field: self.clear_field_error(f))

    # --------------- Validation ---------------
    def validate_field(self, field: Tag) -> bool:
        message = field_error(dom.field_value(field), dom.field_type(field))
        if message is None:
            self.clear_field_error(field)
            return True
        self.show_field_error(field, message)
        return False

    def validate_form(self, form: Tag) -> bool:
        results = [self.validate_field(f) for f in form.select(REQUIRED_FIELDS)]
        return all(results)

    def show_field_error(self, field: Tag, message: str) -> None:
        self.clear_field_error(field)
        dom.add_class(field, "border-red-500")
        error = dom.create_element(
            self._host.document, "div", text=message, class_="text-red-500 text-sm mt-1 field-error"
        )
        field.insert_after(error)

    def clear_field_error(self, field: Tag) -> None:
        dom.remove_class(field, "border-red-500")
        error = field_error_element(field)
        if error is not None:
            error.decompose()

    # --------------- Submission ---------------
    def handle_submit(self, event) -> None:
        event.prevent_default()
        form = event.current_target
        if self.validate_form(form):
            self.submit_form(form)

    def submit_form(self, form: Tag) -> None:
        form_id = form.get("id") or "unknown"
        self.show_loading(form)
        self._submitter.submit(self._host, form_id, form_data(form), lambda r: self._finish(form, r))

    def _finish(self, form: Tag, result: SubmissionResult) -> None:
        if result.ok:
            self.show_success(form)
            if self._on_success:
                self._on_success(form)
        else:
            self.show_error(form, MSG_SUBMIT_FAILED)

    def show_loading(self, form: Tag) -> None:
        button = form.select_one('button[type="submit"]')
        if button is not None:
            button["disabled"] = ""
            dom.set_html(button, '<i class="marine-spinner w-4 h-4 mr-2"></i>Submitting...')

    def show_success(self, form: Tag) -> None:
        button = form.select_one('button[type="submit"]')
        if button is not None:
            button.attrs.pop("disabled", None)
            dom.set_html(button, '<i class="fas fa-check mr-2"></i>Thank you!')
            dom.replace_class(button, "btn-marine-primary", "success-marine")
        reset_form(form)

        def revert() -> None:
            if button is not None:
                dom.set_text(button, "Submit")
                dom.replace_class(button, "success-marine", "btn-marine-primary")

        self._host.set_timeout(revert, SUCCESS_REVERT_MS)

    def show_error(self, form: Tag, message: str) -> None:
        button = form.select_one('button[type="submit"]')
        if button is not None:
            button.attrs.pop("disabled", None)
            dom.set_text(button, "Submit")

        existing = form.select_one(".form-error")
        if existing is not None:
            existing.decompose()
        error = dom.create_element(
            self._host.document, "div", text=message, class_="error-marine form-error mt-4 text-center"
        )
        form.append(error)
        self._host.set_timeout(lambda: error.extract(), ERROR_CLEAR_MS)
