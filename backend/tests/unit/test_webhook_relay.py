"""Tests for the webhook relay."""

from unittest.mock import AsyncMock, MagicMock, patch

from tourdesk.services.webhook_relay import (
    WebhookRelay,
    group_sheet_row,
    send_notification,
    send_sheet_log,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_http_response(status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = Exception(f"HTTP {status_code}")
    else:
        response.raise_for_status = MagicMock()
    return response


def make_async_client_ctx(response: MagicMock) -> tuple[AsyncMock, AsyncMock]:
    """Return an async context manager whose .post() returns *response*, and the client."""
    inner = AsyncMock()
    inner.post = AsyncMock(return_value=response)
    ctx = AsyncMock()
    ctx.__aenter__ = AsyncMock(return_value=inner)
    ctx.__aexit__ = AsyncMock(return_value=False)
    return ctx, inner


def make_db(settings: dict[str, str | None]) -> AsyncMock:
    """DB whose app_settings lookups answer from *settings* in call order."""
    db = AsyncMock()

    def lookup(values):
        result = MagicMock()
        result.scalar_one_or_none.return_value = values
        return result

    db.execute = AsyncMock(side_effect=[lookup(v) for v in settings.values()])
    return db


# ---------------------------------------------------------------------------
# get_webhook_url
# ---------------------------------------------------------------------------


class TestGetWebhookUrl:
    async def test_returns_stored_url(self) -> None:
        relay = WebhookRelay(make_db({"webhook_groups": " https://hooks.example.com/g "}))
        assert await relay.get_webhook_url("webhook_groups") == "https://hooks.example.com/g"

    async def test_blank_value_is_unset(self) -> None:
        relay = WebhookRelay(make_db({"webhook_groups": "   "}))
        assert await relay.get_webhook_url("webhook_groups") is None

    async def test_missing_row_is_unset(self) -> None:
        relay = WebhookRelay(make_db({"webhook_groups": None}))
        assert await relay.get_webhook_url("webhook_groups") is None


# ---------------------------------------------------------------------------
# notify
# ---------------------------------------------------------------------------


class TestNotify:
    async def test_posts_payload_to_entity_webhook(self) -> None:
        relay = WebhookRelay(make_db({"webhook_groups": "https://hooks.example.com/g"}))
        ctx, client = make_async_client_ctx(make_http_response())

        with patch("httpx.AsyncClient", return_value=ctx):
            delivered = await relay.notify("groups", "add", {"id": "group-1"})

        assert delivered is True
        url = client.post.await_args.args[0]
        payload = client.post.await_args.kwargs["json"]
        assert url == "https://hooks.example.com/g"
        assert payload["type"] == "groups"
        assert payload["action"] == "create"
        assert payload["data"] == {"id": "group-1"}
        assert "timestamp" in payload

    async def test_update_and_delete_actions_pass_through(self) -> None:
        relay = WebhookRelay(
            make_db({"a": "https://hooks.example.com/b", "b": "https://hooks.example.com/b"})
        )
        ctx, client = make_async_client_ctx(make_http_response())

        with patch("httpx.AsyncClient", return_value=ctx):
            await relay.notify("bookings", "update", {})
            await relay.notify("bookings", "delete", {})

        actions = [call.kwargs["json"]["action"] for call in client.post.await_args_list]
        assert actions == ["update", "delete"]

    async def test_unknown_entity_type_is_skipped(self) -> None:
        db = AsyncMock()
        relay = WebhookRelay(db)

        with patch("httpx.AsyncClient") as mock_client:
            assert await relay.notify("invoices", "create", {}) is False

        mock_client.assert_not_called()
        db.execute.assert_not_called()

    async def test_unconfigured_webhook_is_skipped(self) -> None:
        relay = WebhookRelay(make_db({"webhook_groups": None}))

        with patch("httpx.AsyncClient") as mock_client:
            assert await relay.notify("groups", "create", {}) is False

        mock_client.assert_not_called()

    async def test_http_error_returns_false(self) -> None:
        relay = WebhookRelay(make_db({"webhook_groups": "https://hooks.example.com/g"}))
        ctx, _ = make_async_client_ctx(make_http_response(status_code=502))

        with patch("httpx.AsyncClient", return_value=ctx):
            assert await relay.notify("groups", "create", {}) is False

    async def test_network_error_returns_false(self) -> None:
        relay = WebhookRelay(make_db({"webhook_groups": "https://hooks.example.com/g"}))
        ctx, client = make_async_client_ctx(make_http_response())
        client.post.side_effect = Exception("connection refused")

        with patch("httpx.AsyncClient", return_value=ctx):
            assert await relay.notify("groups", "create", {}) is False

    async def test_settings_read_error_returns_false(self) -> None:
        db = AsyncMock()
        db.execute.side_effect = Exception("database unavailable")
        relay = WebhookRelay(db)

        assert await relay.notify("groups", "create", {}) is False

    async def test_url_is_read_on_every_call(self) -> None:
        relay = WebhookRelay(
            make_db({"first": "https://hooks.example.com/old", "second": None})
        )
        ctx, _ = make_async_client_ctx(make_http_response())

        with patch("httpx.AsyncClient", return_value=ctx):
            assert await relay.notify("groups", "create", {}) is True
            assert await relay.notify("groups", "create", {}) is False


# ---------------------------------------------------------------------------
# log_to_sheets
# ---------------------------------------------------------------------------


class TestLogToSheets:
    async def test_posts_row_unchanged(self) -> None:
        relay = WebhookRelay(make_db({"sheets": "https://sheets.example.com/log"}))
        ctx, client = make_async_client_ctx(make_http_response())
        row = {"type": "report", "guide": "Youssef"}

        with patch("httpx.AsyncClient", return_value=ctx):
            assert await relay.log_to_sheets(row) is True

        assert client.post.await_args.kwargs["json"] == row

    async def test_delete_uses_delete_webhook(self) -> None:
        db = make_db({"sheets_delete": "https://sheets.example.com/delete"})
        relay = WebhookRelay(db)
        ctx, client = make_async_client_ctx(make_http_response())

        with patch("httpx.AsyncClient", return_value=ctx):
            await relay.log_to_sheets({"id": "row-1"}, action="delete")

        statement = db.execute.await_args.args[0]
        assert "sheets_delete_webhook_url" in str(statement.compile(compile_kwargs={"literal_binds": True}))
        assert client.post.await_args.args[0] == "https://sheets.example.com/delete"


# ---------------------------------------------------------------------------
# send_notification
# ---------------------------------------------------------------------------


async def test_send_notification_uses_own_session() -> None:
    session = AsyncMock()
    session_ctx = AsyncMock()
    session_ctx.__aenter__ = AsyncMock(return_value=session)
    session_ctx.__aexit__ = AsyncMock(return_value=False)

    with (
        patch(
            "tourdesk.services.webhook_relay.AsyncSessionLocal", return_value=session_ctx
        ),
        patch.object(WebhookRelay, "notify", AsyncMock(return_value=True)) as mock_notify,
    ):
        await send_notification("groups", "delete", {"id": "group-1"})

    mock_notify.assert_awaited_once_with("groups", "delete", {"id": "group-1"})


async def test_send_sheet_log_forwards_action() -> None:
    session_ctx = AsyncMock()
    session_ctx.__aenter__ = AsyncMock(return_value=AsyncMock())
    session_ctx.__aexit__ = AsyncMock(return_value=False)

    with (
        patch(
            "tourdesk.services.webhook_relay.AsyncSessionLocal", return_value=session_ctx
        ),
        patch.object(WebhookRelay, "log_to_sheets", AsyncMock(return_value=True)) as mock_log,
    ):
        await send_sheet_log({"#Action": "delete"}, "delete")

    mock_log.assert_awaited_once_with({"#Action": "delete"}, "delete")


def test_group_sheet_row_uses_sheet_columns() -> None:
    row = group_sheet_row(
        {
            "tour_date": "2025-12-24",
            "group_number": 2,
            "meeting_time": "09:30",
            "guide_id": None,
        },
        "import",
    )

    assert row["#Date"] == "2025-12-24"
    assert row["#Activity"] == "Group 2"
    assert row["#Pickup_Time"] == "09:30"
    assert row["#Guide"] == ""
    assert row["#Action"] == "import"
    assert len(row["#Operation_Time"]) == 5
