"""Unit tests for cursor pagination of Resend list endpoints."""

import pytest

from resend_node.base import ListOptions, TransportError, ValidationError
from resend_node.pagination import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    MAX_PAGES,
    CursorMode,
    CursorState,
    advance,
    fetch_collection,
    resolve_page_size,
)

URL = "https://api.resend.test/emails"
API_KEY = "re_test_key_12345"


def sent_params(transport):
    """Query parameters of every get_json call, in order."""
    return [call.kwargs["params"] for call in transport.get_json.call_args_list]


class TestCursorState:
    """The cursor direction latch, independent of the fetch loop."""

    def test_initial_without_cursor(self):
        state = CursorState.initial(ListOptions())
        assert state.mode is None
        assert state.to_query(100) == {"limit": 100}

    def test_initial_from_before(self):
        state = CursorState.initial(ListOptions(before="c1"))
        assert state == CursorState(CursorMode.BEFORE, "c1")
        assert state.to_query(100) == {"limit": 100, "before": "c1"}

    def test_initial_from_after(self):
        state = CursorState.initial(ListOptions(after="c1"))
        assert state.to_query(20) == {"limit": 20, "after": "c1"}

    def test_unset_latches_to_after(self):
        state = advance(CursorState(), "e_2")
        assert state == CursorState(CursorMode.AFTER, "e_2")

    def test_before_stays_before(self):
        state = advance(CursorState(CursorMode.BEFORE, "c1"), "e_2")
        assert state.mode is CursorMode.BEFORE
        assert state.to_query(100) == {"limit": 100, "before": "e_2"}

    def test_after_never_reverts(self):
        state = CursorState(CursorMode.AFTER, "e_1")
        for last_id in ["e_2", "e_3", "e_4"]:
            state = advance(state, last_id)
            assert state.mode is CursorMode.AFTER
            assert "before" not in state.to_query(100)

    def test_state_is_immutable(self):
        state = CursorState(CursorMode.AFTER, "e_1")
        with pytest.raises(AttributeError):
            state.cursor = "e_2"


class TestResolvePageSize:

    def test_return_all_uses_provider_maximum(self):
        assert resolve_page_size(True, 5) == MAX_PAGE_SIZE

    def test_positive_limit(self):
        assert resolve_page_size(False, 5) == 5

    @pytest.mark.parametrize("limit", [None, 0, -3])
    def test_default_when_limit_missing_or_not_positive(self, limit):
        assert resolve_page_size(False, limit) == DEFAULT_PAGE_SIZE


class TestBoundedFetch:

    @pytest.mark.asyncio
    async def test_after_and_before_rejected_before_any_request(self, mock_transport):
        with pytest.raises(ValidationError, match="either") as exc_info:
            await fetch_collection(
                mock_transport, URL, ListOptions(after="a", before="b"), API_KEY,
                return_all=False, item_index=4,
            )

        assert exc_info.value.item_index == 4
        mock_transport.get_json.assert_not_called()

    @pytest.mark.asyncio
    async def test_truncates_to_limit_with_single_request(self, mock_transport, make_page):
        mock_transport.get_json.return_value = make_page(
            [f"e_{i}" for i in range(20)], has_more=True
        )

        response = await fetch_collection(
            mock_transport, URL, ListOptions(), API_KEY, return_all=False, limit=5
        )

        assert [item["id"] for item in response.data] == ["e_0", "e_1", "e_2", "e_3", "e_4"]
        assert response.has_more is True
        assert mock_transport.get_json.call_count == 1
        assert sent_params(mock_transport) == [{"limit": 5}]

    @pytest.mark.asyncio
    async def test_default_page_size_without_limit(self, mock_transport, make_page):
        mock_transport.get_json.return_value = make_page(["e_1"])

        await fetch_collection(mock_transport, URL, ListOptions(), API_KEY, return_all=False)

        assert sent_params(mock_transport) == [{"limit": DEFAULT_PAGE_SIZE}]

    @pytest.mark.asyncio
    async def test_cursor_passed_through(self, mock_transport, make_page):
        mock_transport.get_json.return_value = make_page(["e_1"])

        await fetch_collection(
            mock_transport, URL, ListOptions(before="e_9"), API_KEY, return_all=False, limit=10
        )

        mock_transport.get_json.assert_awaited_once_with(
            URL, API_KEY, params={"limit": 10, "before": "e_9"}
        )

    @pytest.mark.asyncio
    async def test_response_without_data_returned_unchanged(self, mock_transport):
        mock_transport.get_json.return_value = {"object": "email", "id": "e_1"}

        response = await fetch_collection(
            mock_transport, URL, ListOptions(), API_KEY, return_all=False, limit=5
        )

        assert response.to_dict() == {"object": "email", "id": "e_1"}


class TestExhaustiveFetch:

    @pytest.mark.asyncio
    async def test_accumulates_pages_in_order(self, mock_transport, make_page):
        mock_transport.get_json.side_effect = [
            make_page(["e_1", "e_2"], has_more=True),
            make_page(["e_3", "e_4"], has_more=True),
            make_page(["e_5", "e_6"], has_more=False, request_id="req_3"),
        ]

        response = await fetch_collection(
            mock_transport, URL, ListOptions(), API_KEY, return_all=True, limit=1
        )

        assert [item["id"] for item in response.data] == [
            "e_1", "e_2", "e_3", "e_4", "e_5", "e_6",
        ]
        assert response.has_more is False
        assert mock_transport.get_json.call_count == 3
        assert sent_params(mock_transport) == [
            {"limit": 100},
            {"limit": 100, "after": "e_2"},
            {"limit": 100, "after": "e_4"},
        ]
        # Extra fields come from the last raw page
        assert response.to_dict()["request_id"] == "req_3"

    @pytest.mark.asyncio
    async def test_before_cursor_keeps_paging_backwards(self, mock_transport, make_page):
        mock_transport.get_json.side_effect = [
            make_page(["b_1", "b_2"], has_more=True),
            make_page(["b_3"], has_more=True),
            make_page(["b_4"], has_more=False),
        ]

        await fetch_collection(
            mock_transport, URL, ListOptions(before="c1"), API_KEY, return_all=True
        )

        assert sent_params(mock_transport) == [
            {"limit": 100, "before": "c1"},
            {"limit": 100, "before": "b_2"},
            {"limit": 100, "before": "b_3"},
        ]

    @pytest.mark.asyncio
    async def test_after_cursor_never_switches_to_before(self, mock_transport, make_page):
        mock_transport.get_json.side_effect = [
            make_page(["a_1"], has_more=True),
            make_page(["a_2"], has_more=True),
            make_page(["a_3"], has_more=False),
        ]

        await fetch_collection(
            mock_transport, URL, ListOptions(after="c1"), API_KEY, return_all=True
        )

        params = sent_params(mock_transport)
        assert [p.get("after") for p in params] == ["c1", "a_1", "a_2"]
        assert all("before" not in p for p in params)

    @pytest.mark.asyncio
    async def test_stops_at_page_cap(self, mock_transport, make_page):
        mock_transport.get_json.side_effect = [
            make_page([f"e_{i}"], has_more=True) for i in range(MAX_PAGES + 5)
        ]

        response = await fetch_collection(
            mock_transport, URL, ListOptions(), API_KEY, return_all=True
        )

        assert mock_transport.get_json.call_count == MAX_PAGES
        assert len(response.data) == MAX_PAGES
        assert response.has_more is False

    @pytest.mark.asyncio
    async def test_custom_page_cap(self, mock_transport, make_page):
        mock_transport.get_json.return_value = make_page(["e_1"], has_more=True)

        await fetch_collection(
            mock_transport, URL, ListOptions(), API_KEY, return_all=True, max_pages=3
        )

        assert mock_transport.get_json.call_count == 3

    @pytest.mark.asyncio
    async def test_missing_id_on_last_item_stops_after_page(self, mock_transport, make_page):
        mock_transport.get_json.side_effect = [
            make_page(["e_1"], has_more=True),
            {"object": "list", "data": [{"id": "e_2"}, {"name": "no id"}], "has_more": True},
            make_page(["e_3"]),
        ]

        response = await fetch_collection(
            mock_transport, URL, ListOptions(), API_KEY, return_all=True
        )

        assert mock_transport.get_json.call_count == 2
        assert response.data == [
            {"id": "e_1", "name": "Item e_1"},
            {"id": "e_2"},
            {"name": "no id"},
        ]
        assert response.has_more is False

    @pytest.mark.asyncio
    async def test_empty_page_stops(self, mock_transport, make_page):
        mock_transport.get_json.side_effect = [
            make_page(["e_1"], has_more=True),
            make_page([], has_more=True),
        ]

        response = await fetch_collection(
            mock_transport, URL, ListOptions(), API_KEY, return_all=True
        )

        assert mock_transport.get_json.call_count == 2
        assert [item["id"] for item in response.data] == ["e_1"]

    @pytest.mark.asyncio
    async def test_synthesizes_envelope_when_last_page_has_no_data(self, mock_transport, make_page):
        mock_transport.get_json.side_effect = [
            make_page(["e_1"], has_more=True),
            {"object": "list", "data": "unexpected", "has_more": True},
        ]

        response = await fetch_collection(
            mock_transport, URL, ListOptions(), API_KEY, return_all=True
        )

        assert response.to_dict() == {
            "object": "list",
            "data": [{"id": "e_1", "name": "Item e_1"}],
            "has_more": False,
        }

    @pytest.mark.asyncio
    async def test_non_object_body_yields_empty_envelope(self, mock_transport):
        mock_transport.get_json.return_value = None

        response = await fetch_collection(
            mock_transport, URL, ListOptions(), API_KEY, return_all=True
        )

        assert response.to_dict() == {"object": "list", "data": [], "has_more": False}

    @pytest.mark.asyncio
    async def test_transport_error_aborts_without_partial_result(self, mock_transport, make_page):
        mock_transport.get_json.side_effect = [
            make_page(["e_1"], has_more=True),
            TransportError("API error 500: boom", status=500, url=URL),
        ]

        with pytest.raises(TransportError, match="500"):
            await fetch_collection(
                mock_transport, URL, ListOptions(), API_KEY, return_all=True
            )

        assert mock_transport.get_json.call_count == 2


class TestUnexpectedBodies:

    @pytest.mark.asyncio
    async def test_bounded_returns_non_list_data_unchanged(self, mock_transport):
        mock_transport.get_json.return_value = {"object": "x", "data": "str"}

        response = await fetch_collection(
            mock_transport, URL, ListOptions(), API_KEY, return_all=False, limit=5
        )

        assert response.to_dict() == {"object": "x", "data": "str"}

    @pytest.mark.asyncio
    async def test_exhaustive_keeps_non_string_object(self, mock_transport):
        mock_transport.get_json.side_effect = [
            {"object": 1, "data": [{"id": "e_1"}], "has_more": True},
            {"object": 1, "data": [{"id": "e_2"}], "has_more": False},
        ]

        response = await fetch_collection(
            mock_transport, URL, ListOptions(), API_KEY, return_all=True
        )

        assert response.to_dict() == {
            "object": 1,
            "data": [{"id": "e_1"}, {"id": "e_2"}],
            "has_more": False,
        }
