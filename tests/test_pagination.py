from core.services.pagination import PageAccumulator, next_page_locator, resolve_locator

from conftest import ENDPOINT, json_response


def _locator(payload, next_link=None):
    return next_page_locator(payload, json_response(payload, next_link=next_link))


class TestNextPageLocator:
    def test_cursor_has_more(self):
        payload = {"meta": {"has_more": True}, "links": {"next": "https://x/next"}}
        assert _locator(payload) == "https://x/next"

    def test_cursor_exhausted_ignores_next_link(self):
        payload = {"meta": {"has_more": False}, "links": {"next": "https://x/next"}}
        assert _locator(payload) is None

    def test_offset_next_page(self):
        assert _locator({"next_page": "https://x/tags?page=2"}) == "https://x/tags?page=2"
        assert _locator({"next_page": None}) is None

    def test_incremental_export(self):
        assert _locator({"after_url": "https://x/after", "end_of_stream": False}) == "https://x/after"
        assert _locator({"after_url": "https://x/after", "end_of_stream": True}) is None

    def test_link_header(self):
        assert _locator({"tags": []}, next_link="https://x/tags?page=3") == "https://x/tags?page=3"

    def test_body_locator_wins_over_link_header(self):
        payload = {"next_page": "https://x/tags?page=2"}
        assert _locator(payload, next_link="https://x/other") == "https://x/tags?page=2"

    def test_array_body_uses_link_header(self):
        assert _locator([{"id": 1}], next_link="https://x/things?page=2") == "https://x/things?page=2"

    def test_array_body_without_link_header(self):
        assert _locator([{"id": 1}]) is None

    def test_blank_link_header_is_ignored(self):
        assert _locator({"tags": []}, next_link="  ") is None

    def test_no_locator(self):
        assert _locator({"tags": [{"id": 1}]}) is None


def test_resolve_locator():
    assert resolve_locator("https://other/abs", ENDPOINT) == "https://other/abs"
    assert resolve_locator("tags?page=2", ENDPOINT) == f"{ENDPOINT}/tags?page=2"


def test_accumulator_tracks_cursor():
    state = PageAccumulator()
    state.add_page("next")
    assert not state.exhausted
    assert state.cursor == "next"
    state.add_page(None)
    assert state.exhausted
    assert state.pages == 2
    assert not hasattr(state, "items")
