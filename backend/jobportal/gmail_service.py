import base64
import logging
import os
from email.mime.text import MIMEText

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/gmail.send"]


class GmailService:
    """Sends transactional email as the authorized Gmail account."""

    def __init__(self, token_file: str = "token.json", credentials_file: str = "credentials.json",
                 sender: str = "notifications@jobportal.com", enabled: bool = True):
        self.token_file = token_file
        self.credentials_file = credentials_file
        self.sender = sender
        self.enabled = enabled
        self.creds = None
        self.service = None

    def authenticate(self):
        """Load the stored token, refreshing it if expired. Never prompts."""
        if os.path.exists(self.token_file):
            self.creds = Credentials.from_authorized_user_file(self.token_file, SCOPES)

        if not self.creds:
            raise RuntimeError(
                f"No Gmail token at {self.token_file}; run `python -m jobportal.gmail_service` first"
            )
        if not self.creds.valid:
            if self.creds.expired and self.creds.refresh_token:
                self.creds.refresh(Request())
                with open(self.token_file, "w") as token:
                    token.write(self.creds.to_json())
            else:
                raise RuntimeError("Gmail token is invalid and cannot be refreshed")

        self.service = build("gmail", "v1", credentials=self.creds, cache_discovery=False)
        return self.service

    def authorize(self):
        """Interactive one-time consent flow that writes the token file."""
        flow = InstalledAppFlow.from_client_secrets_file(self.credentials_file, SCOPES)
        self.creds = flow.run_local_server(port=0)
        with open(self.token_file, "w") as token:
            token.write(self.creds.to_json())
        return self.creds

    def send_email(self, to: str, subject: str, html: str, sender: str = None) -> bool:
        """Send one HTML email. Returns False instead of raising on any failure."""
        if not self.enabled:
            logger.info("Email disabled; not sending '%s' to %s", subject, to)
            return False

        try:
            if not self.service:
                self.authenticate()
            message = MIMEText(html, "html")
            message["to"] = to
            message["from"] = sender or self.sender
            message["subject"] = subject
            raw = base64.urlsafe_b64encode(message.as_bytes()).decode("utf-8")
            self.service.users().messages().send(userId="me", body={"raw": raw}).execute()
            return True
        except HttpError as error:
            logger.error("Gmail API error sending to %s: %s", to, error)
            return False
        except Exception as e:
            logger.error("Failed to send email to %s: %s", to, e)
            return False

    def send_application_notification(self, employer_email: str, job_title: str, candidate_name: str) -> bool:
        return self.send_email(
            employer_email,
            f"New Application: {job_title}",
            f"""
            <h2>New Job Application Received</h2>
            <p>Hello,</p>
            <p>{candidate_name} has applied for the position of {job_title}.</p>
            <p>Login to your dashboard to review the application.</p>
            """,
        )

    def send_welcome_email(self, email: str, username: str) -> bool:
        return self.send_email(
            email,
            "Welcome to JobPortal",
            f"""
            <h2>Welcome to JobPortal!</h2>
            <p>Hello {username},</p>
            <p>Thank you for joining JobPortal. We're excited to help you in your career journey.</p>
            <p>Get started by:</p>
            <ul>
              <li>Creating your resume</li>
              <li>Browsing available jobs</li>
              <li>Setting up job alerts</li>
            </ul>
            """,
        )


# One-time setup: python -m jobportal.gmail_service
if __name__ == "__main__":
    from .config import Settings

    settings = Settings()
    gmail = GmailService(settings.gmail_token_file, settings.gmail_credentials_file, settings.email_sender)
    gmail.authorize()
    print(f"Gmail token written to {settings.gmail_token_file}")
