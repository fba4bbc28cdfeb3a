import pytest

from xweb.status import StatusCode

KNOWN = [code for code in StatusCode if code is not StatusCode.UNKNOWN]


@pytest.mark.parametrize("code", KNOWN)
def test_reason_round_trip(code):
    assert StatusCode.from_reason(code.reason()) is code


@pytest.mark.parametrize("code", KNOWN)
def test_numeric_round_trip(code):
    assert StatusCode.from_code(int(code)) is code


def test_not_found():
    assert StatusCode.from_code(404) is StatusCode.NOT_FOUND
    assert StatusCode.NOT_FOUND.reason() == "Not Found"


def test_ok_reason():
    assert StatusCode.OK.reason() == "OK"


@pytest.mark.parametrize("code", [100, 203, 418, 503, 0])
def test_unrecognised_numbers(code):
    assert StatusCode.from_code(code) is StatusCode.UNKNOWN


def test_unrecognised_reason():
    assert StatusCode.from_reason("I'm a teapot") is StatusCode.UNKNOWN


def test_unknown_reason_phrase():
    assert StatusCode.UNKNOWN.reason() == "Unknown"
    assert int(StatusCode.UNKNOWN) == -1