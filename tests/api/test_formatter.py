# This file tests the default envelope formatter.
# It exists to pin status labels, message resolution, and field rules.
# Business codes longer than three digits must map onto their transport status.

from __future__ import annotations

import pytest

from api_response.api.formatter import Formatter
from api_response.api.localization import MessageCatalog
from tests.api.support import build_test_config


def _formatter(**config_overrides: object) -> Formatter:
    catalog = MessageCatalog(
        messages={"en": {200101: "Widget saved."}, "fr": {200101: "Widget enregistré."}},
    )
    return Formatter(config=build_test_config(**config_overrides), catalog=catalog)


@pytest.mark.parametrize(
    ("code", "expected"),
    [(200, 200), (404, 404), (200101, 200), (422001, 422), (5001, 500)],
)
def test_status_code_maps_business_codes(code: int, expected: int) -> None:
    assert _formatter().status_code(code) == expected


@pytest.mark.parametrize("code", [0, -1, 42, 9999])
def test_status_code_falls_back_for_invalid_codes(code: int) -> None:
    formatter = _formatter()

    assert formatter.status_code(code) == 200
    assert formatter.status_code(code, fallback=500) == 500


@pytest.mark.parametrize(
    ("code", "expected"),
    [(200, "success"), (302, "success"), (404, "fail"), (422001, "fail"), (503, "error")],
)
def test_format_status_labels(code: int, expected: str) -> None:
    assert _formatter().format_status(code) == expected


def test_empty_message_uses_catalog_then_reason_phrase() -> None:
    formatter = _formatter()

    assert formatter.format_message(200101, "") == "Widget saved."
    assert formatter.format_message(404, "") == "Not Found"
    assert formatter.format_message(299, "") == ""
    assert formatter.format_message(404, "Custom.") == "Custom."


def test_catalog_lookup_follows_configured_locale() -> None:
    assert _formatter(locale="fr").format_message(200101, "") == "Widget enregistré."
    assert _formatter(locale="de").format_message(200101, "") == "Widget saved."


def test_failure_envelope_always_carries_errors() -> None:
    envelope = _formatter().data(None, "Broken.", 500, failed=True)

    assert envelope == {
        "status": "error",
        "code": 500,
        "message": "Broken.",
        "data": None,
        "errors": {},
    }


def test_field_rules_rename_and_hide_keys() -> None:
    formatter = _formatter(fields={"status": {"show": False}, "data": {"alias": "result"}})

    envelope = formatter.data({"id": 1}, "Ok.", 200)

    assert envelope == {"code": 200, "message": "Ok.", "result": {"id": 1}}


def test_none_payload_without_failure_flag_is_a_success() -> None:
    envelope = _formatter().data(None, "Nothing yet.", 200)

    assert envelope == {"status": "success", "code": 200, "message": "Nothing yet.", "data": None}
