# tests/test_form_codec.py

from urllib.parse import parse_qsl

import pytest

from hac_session.form_codec import percent_encode

DELIMITERS = ":#[]@!$&'()*+,;="


def test_pairs_joined_in_mapping_order():
    assert percent_encode({"b": "2", "a": "1"}) == "b=2&a=1"


def test_delimiters_always_escaped():
    body = percent_encode({"ctl00$plnMain$ddlReportCardRuns": DELIMITERS})
    key, value = body.split("=", 1)

    for char in DELIMITERS:
        assert char not in key
        assert char not in value
    assert key == "ctl00%24plnMain%24ddlReportCardRuns"


def test_slash_question_mark_and_unreserved_pass_through():
    assert percent_encode({"path": "/a/b?c-d._~"}) == "path=/a/b?c-d._~"


def test_space_is_percent_twenty():
    assert percent_encode({"hdnDroppedCourse": " dropped "}) == "hdnDroppedCourse=%20dropped%20"


@pytest.mark.parametrize(
    "fields",
    [
        {"__VIEWSTATE": "/wEPDwUKMTY3NjE2ODQ4Ng9kFgJmD2QWAgID==", "__EVENTARGUMENT": ""},
        {"LogOnDetails.Password": "p@ss word!&=+", "Database": "10"},
        {"hdnJsAlert": "Averages cannot be displayed when Report Card Run is set to (All Runs)."},
        {"name": "Zoë Ñúñez", "grade": "100%"},
    ],
)
def test_decoding_recovers_fields(fields):
    body = percent_encode(fields)

    assert dict(parse_qsl(body, keep_blank_values=True)) == fields


def test_values_converted_to_strings():
    assert percent_encode({"credits": 0.5, "flag": True}) == "credits=0.5&flag=True"


def test_unencodable_text_returns_none():
    assert percent_encode({"bad": "\ud800"}) is None
