import base64
import email

import httplib2
from googleapiclient.errors import HttpError

from jobportal.gmail_service import GmailService


class FakeGmailApi:
    """Mimics service.users().messages().send(...).execute()."""

    def __init__(self, error=None):
        self.error = error
        self.sent = []

    def users(self):
        return self

    def messages(self):
        return self

    def send(self, userId, body):
        self.sent.append((userId, body))
        return self

    def execute(self):
        if self.error:
            raise self.error
        return {"id": "msg-1"}


def test_disabled_service_does_not_send():
    gmail = GmailService(enabled=False)
    gmail.service = FakeGmailApi()
    assert gmail.send_welcome_email("new@example.com", "new") is False
    assert gmail.service.sent == []


def test_missing_token_file_returns_false(tmp_path):
    gmail = GmailService(token_file=str(tmp_path / "missing.json"), enabled=True)
    assert gmail.send_email("someone@example.com", "Hi", "<p>hi</p>") is False
    assert gmail.service is None


def test_gmail_http_error_returns_false():
    error = HttpError(httplib2.Response({"status": "500"}), b'{"error": {"message": "boom"}}')
    gmail = GmailService(enabled=True)
    gmail.service = FakeGmailApi(error=error)
    assert gmail.send_application_notification("hr@example.com", "Engineer", "Jane") is False


def test_send_builds_raw_html_message():
    gmail = GmailService(sender="jobs@example.com", enabled=True)
    gmail.service = FakeGmailApi()

    assert gmail.send_application_notification("hr@example.com", "Engineer", "Jane") is True

    user_id, body = gmail.service.sent[0]
    assert user_id == "me"
    message = email.message_from_bytes(base64.urlsafe_b64decode(body["raw"]))
    assert message["to"] == "hr@example.com"
    assert message["from"] == "jobs@example.com"
    assert message["subject"] == "New Application: Engineer"
    assert message.get_content_type() == "text/html"
    assert "Jane has applied" in message.get_payload(decode=True).decode()
