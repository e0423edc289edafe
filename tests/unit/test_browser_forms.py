from __future__ import annotations

from typing import List

import httpx
import pytest

from browser import dom
from browser.forms import (
    MSG_EMAIL,
    MSG_REQUIRED,
    FormHandler,
    HttpFormSubmitter,
    SimulatedSubmitter,
    SubmissionResult,
    field_error,
    field_error_element,
    form_data,
    is_valid_email,
)
from browser.host import BrowserHost


FORM_PAGE = """
<html><body>
<form id="waitlist">
  <div class="field"><input id="name" name="name" type="text" required></div>
  <div class="field"><input id="email" name="email" type="email" required></div>
  <div class="field"><textarea id="msg" name="message"></textarea></div>
  <button type="submit" class="btn-marine-primary px-4">Submit</button>
</form>
</body></html>
"""


def _setup(submitter=None):
    host = BrowserHost(FORM_PAGE)
    submitter = submitter or SimulatedSubmitter()
    submitted: List[str] = []
    handler = FormHandler(host, submitter, on_success=lambda f: submitted.append(f["id"]))
    handler.setup()
    return host, handler, submitter, submitted


def _errors(host: BrowserHost, field_id: str):
    return host.document.find(id=field_id).parent.select(".field-error")


def test_email_shape():
    assert is_valid_email("captain@waves.io")
    assert not is_valid_email("captain@waves")
    assert not is_valid_email("cap tain@waves.io")
    assert field_error("   ", "text") == MSG_REQUIRED
    assert field_error("nope", "email") == MSG_EMAIL
    assert field_error("ok", "text") is None


def test_blur_on_empty_required_field_shows_one_error_and_input_clears_it():
    host, _, _, _ = _setup()
    name = host.document.find(id="name")

    host.dispatch(name, "blur")
    host.dispatch(name, "blur")

    errors = _errors(host, "name")
    assert len(errors) == 1
    assert dom.text(errors[0]) == MSG_REQUIRED
    assert dom.has_class(name, "border-red-500")

    dom.set_field_value(name, "Ahab")
    host.dispatch(name, "input")

    assert _errors(host, "name") == []
    assert not dom.has_class(name, "border-red-500")


def test_blur_with_invalid_email():
    host, _, _, _ = _setup()
    email = host.document.find(id="email")
    dom.set_field_value(email, "not-an-email")
    host.dispatch(email, "blur")
    errors = _errors(host, "email")
    assert [dom.text(e) for e in errors] == [MSG_EMAIL]


def test_invalid_submit_is_blocked():
    host, _, submitter, submitted = _setup()
    form = host.document.find(id="waitlist")

    event = host.dispatch(form, "submit")

    assert event.default_prevented
    assert submitter.submissions == []
    assert len(host.document.select(".field-error")) == 2
    host.advance(5000)
    assert submitted == []


def test_valid_submit_shows_loading_success_and_reverts():
    host, _, submitter, submitted = _setup()
    form = host.document.find(id="waitlist")
    dom.set_field_value(host.document.find(id="name"), "Ishmael")
    dom.set_field_value(host.document.find(id="email"), "ishmael@pequod.io")
    button = form.select_one('button[type="submit"]')

    host.dispatch(form, "submit")

    assert submitter.submissions == [{"name": "Ishmael", "email": "ishmael@pequod.io", "message": ""}]
    assert button.has_attr("disabled")
    assert "Submitting..." in dom.text(button)

    host.advance(1000)
    assert not button.has_attr("disabled")
    assert "Thank you!" in dom.text(button)
    assert dom.has_class(button, "success-marine")
    assert not dom.has_class(button, "btn-marine-primary")
    assert dom.field_value(host.document.find(id="email")) == ""
    assert submitted == ["waitlist"]

    host.advance(3000)
    assert dom.text(button) == "Submit"
    assert dom.has_class(button, "btn-marine-primary")


class _FailingSubmitter:
    def submit(self, host, form_id, data, done):
        host.set_timeout(lambda: done(SubmissionResult(ok=False, error="offline")), 10)


def test_failed_submit_shows_temporary_form_error():
    host, _, _, submitted = _setup(_FailingSubmitter())
    form = host.document.find(id="waitlist")
    dom.set_field_value(host.document.find(id="name"), "Queequeg")
    dom.set_field_value(host.document.find(id="email"), "q@pequod.io")

    host.dispatch(form, "submit")
    host.advance(10)

    errors = form.select(".form-error")
    assert len(errors) == 1
    assert dom.text(form.select_one('button[type="submit"]')) == "Submit"
    assert submitted == []

    host.advance(5000)
    assert form.select(".form-error") == []


def test_form_data_skips_buttons():
    host = BrowserHost(FORM_PAGE)
    form = host.document.find(id="waitlist")
    dom.set_field_value(host.document.find(id="msg"), "Ahoy")
    assert form_data(form) == {"name": "", "email": "", "message": "Ahoy"}


# --------------- HTTP submitter ---------------
def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_http_submitter_success_posts_json():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = request.read()
        return httpx.Response(201, json={"ok": True})

    submitter = HttpFormSubmitter("https://api.waves.test/forms", client=_client(handler))
    result = submitter.post("waitlist", {"email": "a@b.co"})

    assert result == SubmissionResult(ok=True)
    assert seen["url"] == "https://api.waves.test/forms"
    assert b'"form":"waitlist"' in seen["body"].replace(b" ", b"")


def test_http_submitter_reports_http_errors():
    submitter = HttpFormSubmitter("https://api.waves.test/forms", client=_client(lambda r: httpx.Response(503)))
    assert submitter.post("waitlist", {}) == SubmissionResult(ok=False, error="HTTP 503")


def test_http_submitter_reports_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    submitter = HttpFormSubmitter("https://api.waves.test/forms", client=_client(handler))
    result = submitter.post("waitlist", {})
    assert result.ok is False
    assert "refused" in (result.error or "")


def test_http_submitter_delivers_outcome_on_host_loop():
    host, _, _, submitted = _setup(
        HttpFormSubmitter("https://api.waves.test/forms", client=_client(lambda r: httpx.Response(200)))
    )
    form = host.document.find(id="waitlist")
    dom.set_field_value(host.document.find(id="name"), "Starbuck")
    dom.set_field_value(host.document.find(id="email"), "s@pequod.io")

    host.dispatch(form, "submit")
    assert submitted == []
    host.advance(0)
    assert submitted == ["waitlist"]


@pytest.mark.parametrize("value", ["", "   "])
def test_whitespace_only_is_required_error(value: str):
    assert field_error(value, "email") == MSG_REQUIRED


SHARED_PARENT_FORM = """
<html><body>
<form id="quick"><input id="a" name="a" required><input id="b" name="b" type="email" required><button type="submit">Go</button></form>
</body></html>
"""


def test_sibling_fields_keep_their_own_errors():
    host = BrowserHost(SHARED_PARENT_FORM)
    FormHandler(host, SimulatedSubmitter()).setup()
    a = host.document.find(id="a")
    b = host.document.find(id="b")

    host.dispatch(a, "blur")
    host.dispatch(b, "blur")

    assert [dom.text(e) for e in host.document.select(".field-error")] == [MSG_REQUIRED, MSG_REQUIRED]
    assert dom.text(field_error_element(a)) == MSG_REQUIRED
    assert dom.text(field_error_element(b)) == MSG_REQUIRED

    dom.set_field_value(a, "Ahab")
    host.dispatch(a, "input")

    assert field_error_element(a) is None
    assert not dom.has_class(a, "border-red-500")
    assert dom.text(field_error_element(b)) == MSG_REQUIRED
    assert dom.has_class(b, "border-red-500")


def test_submit_shows_an_error_for_every_invalid_sibling():
    host = BrowserHost(SHARED_PARENT_FORM)
    FormHandler(host, SimulatedSubmitter()).setup()
    dom.set_field_value(host.document.find(id="b"), "not-an-email")

    host.dispatch(host.document.find(id="quick"), "submit")

    assert [dom.text(e) for e in host.document.select(".field-error")] == [MSG_REQUIRED, MSG_EMAIL]
