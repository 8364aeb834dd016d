from unittest.mock import MagicMock, patch

import httpx
import pytest

from spreadsheet_rescue.notify.base import AlertLevel
from spreadsheet_rescue.notify.factory import NotifierFactory
from spreadsheet_rescue.notify.log import LogNotifier
from spreadsheet_rescue.notify.webhook import WebhookNotifier


@pytest.fixture()
def mock_httpx_post():
    with patch("spreadsheet_rescue.notify.webhook.httpx.post") as mock:
        mock.return_value = MagicMock(spec=httpx.Response, status_code=200, text="ok")
        yield mock


def test_factory_default_is_log_notifier():
    assert isinstance(NotifierFactory.create_notifier(), LogNotifier)
    assert isinstance(NotifierFactory.create_notifier("webhook"), WebhookNotifier)


def test_factory_unknown_notifier():
    with pytest.raises(ValueError, match="Unsupported notifier"):
        NotifierFactory.get_notifier("email")


def test_log_notifier_never_raises():
    notifier = LogNotifier()
    for level in AlertLevel:
        notifier.notify(level, "Title", "Message", details={"file_name": "sales.csv"})


def test_webhook_payload(mock_httpx_post):
    notifier = WebhookNotifier(webhook_url="https://hooks.example.com/abc")
    notifier.notify(
        AlertLevel.ERROR,
        "Error processing file",
        "File contains no data rows: sales.csv",
        details={"error_type": "NoDataInFileError"},
    )

    mock_httpx_post.assert_called_once()
    assert mock_httpx_post.call_args.args[0] == "https://hooks.example.com/abc"
    payload = mock_httpx_post.call_args.kwargs["json"]
    assert payload["level"] == "ERROR"
    assert payload["title"] == "Error processing file"
    assert payload["details"] == {"error_type": "NoDataInFileError"}
    assert "File contains no data rows: sales.csv" in payload["text"]
    assert "• *error_type:* NoDataInFileError" in payload["text"]


def test_webhook_without_url_is_skipped(mock_httpx_post):
    WebhookNotifier(webhook_url=None).notify(AlertLevel.INFO, "Title", "Message")
    mock_httpx_post.assert_not_called()


def test_webhook_failure_is_swallowed_after_retries(mock_httpx_post):
    mock_httpx_post.return_value = MagicMock(spec=httpx.Response, status_code=500, text="boom")

    with patch("spreadsheet_rescue.utils.time.sleep"):
        WebhookNotifier(webhook_url="https://hooks.example.com/abc").notify(
            AlertLevel.WARNING, "History not saved", "database is locked"
        )

    assert mock_httpx_post.call_count == 3
