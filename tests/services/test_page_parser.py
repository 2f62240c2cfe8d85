import pytest

from pagewalk.exceptions import MalformedPageError
from pagewalk.services.page_parser import PageParser


def test_parse_maps_wire_fields():
    page = PageParser().parse({"results": [{"id": 1}, {"id": 2}], "more": True, "_next": "/s?page=2"})
    assert page.results == ({"id": 1}, {"id": 2})
    assert page.has_more is True
    assert page.next_cursor == "/s?page=2"


def test_parse_ignores_next_on_final_page():
    page = PageParser().parse({"results": [], "more": False, "_next": "/s?page=9"})
    assert page.has_more is False
    assert page.next_cursor is None


def test_parse_keeps_unknown_fields_out_of_page():
    page = PageParser().parse({"results": [1], "more": False, "total": 1})
    assert page.results == (1,)


@pytest.mark.parametrize(
    "payload, reason",
    [
        ({"more": False}, "missing 'results'"),
        ({"results": [1]}, "missing 'more'"),
        ({"results": "nope", "more": False}, "'results' must be a list"),
        ({"results": [], "more": "yes"}, "'more' must be a boolean"),
        ({"results": [], "more": True}, "'_next' is missing"),
        ({"results": [], "more": True, "_next": ""}, "'_next' is missing"),
        ({"results": [], "more": True, "_next": 2}, "'_next' is missing"),
        ([1, 2, 3], "expected a JSON object"),
        (None, "expected a JSON object"),
    ],
)
def test_parse_rejects_broken_payloads(payload, reason):
    with pytest.raises(MalformedPageError) as excinfo:
        PageParser().parse(payload, "https://api.example.com/s")
    assert reason in str(excinfo.value)
    assert excinfo.value.address == "https://api.example.com/s"
