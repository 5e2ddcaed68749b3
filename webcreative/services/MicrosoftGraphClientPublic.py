"""Microsoft Graph mail relay for the contact form notifications."""

import logging
import httpx
from datetime import datetime, timedelta
from typing import Optional

logger = logging.getLogger(__name__)


class MailRelayError(Exception):
    """Raised when the relay refuses a token request or a message."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MicrosoftGraphClientPublic:
    """
    Client for sending emails to external/public recipients.

    Uses a single authorized sender mailbox with the client-credentials flow
    and supports reply-to headers so the owner can answer the submitter
    directly from the alert email.
    """

    BASE_URL = "https://graph.microsoft.com/v1.0"
    LOGIN_URL = "https://login.microsoftonline.com"

    def __init__(
        self,
        tenant_id: str,
        client_id: str,
        client_secret: str,
        default_sender: str,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.tenant_id = tenant_id
        self.client_id = client_id
        self.client_secret = client_secret
        self.default_sender = default_sender
        self._transport = transport
        self._access_token = None
        self._token_expiry = None

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=30.0)

    async def _get_access_token(self, force_refresh: bool = False) -> str:
        """Get access token for application (not user-delegated)."""
        if not force_refresh and self._access_token and self._token_expiry:
            if datetime.utcnow() < self._token_expiry - timedelta(minutes=5):
                return self._access_token

        token_url = f"{self.LOGIN_URL}/{self.tenant_id}/oauth2/v2.0/token"

        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "scope": "https://graph.microsoft.com/.default",
            "grant_type": "client_credentials"
        }

        async with self._client() as client:
            response = await client.post(token_url, data=data)

        if response.status_code != 200:
            raise MailRelayError(
                f"Failed to get access token: {response.text}",
                status_code=response.status_code
            )

        token_data = response.json()
        self._access_token = token_data["access_token"]
        expires_in = token_data.get("expires_in", 3600)
        self._token_expiry = datetime.utcnow() + timedelta(seconds=expires_in)

        logger.info(f"✅ New relay access token obtained, expires in {expires_in}s")
        return self._access_token

    def clear_token_cache(self):
        """Force clear the token cache to get fresh permissions."""
        self._access_token = None
        self._token_expiry = None

    async def send_email(
        self,
        to_emails: list[str],
        subject: str,
        body_html: str,
        reply_to: str = None,
        retry_with_refresh: bool = True
    ) -> dict:
        """
        Send an HTML email from the default sender mailbox.

        Args:
            to_emails: List of recipient email addresses
            subject: Email subject
            body_html: HTML body content
            reply_to: Reply-to address (optional)
            retry_with_refresh: If True, retry once with fresh token on 403

        Returns:
            dict with status information

        Raises:
            MailRelayError: when the relay answers with anything but 200/202
        """
        token = await self._get_access_token()

        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json"
        }

        message = {
            "message": {
                "subject": subject,
                "body": {
                    "contentType": "HTML",
                    "content": body_html
                },
                "toRecipients": [
                    {"emailAddress": {"address": email}}
                    for email in to_emails
                ]
            },
            "saveToSentItems": "true"
        }

        if reply_to:
            message["message"]["replyTo"] = [
                {"emailAddress": {"address": reply_to}}
            ]

        url = f"{self.BASE_URL}/users/{self.default_sender}/sendMail"

        async with self._client() as client:
            response = await client.post(url, headers=headers, json=message)

        if response.status_code == 403 and retry_with_refresh:
            logger.warning("⚠️ Email send got 403, refreshing token and retrying...")
            self.clear_token_cache()
            return await self.send_email(
                to_emails, subject, body_html, reply_to, retry_with_refresh=False
            )

        if response.status_code not in [200, 202]:
            raise MailRelayError(
                f"Failed to send email: {response.status_code} - {response.text}",
                status_code=response.status_code
            )

        logger.info(f"✅ Email sent to {', '.join(to_emails)}")

        return {
            "status": "sent",
            "from": self.default_sender,
            "to": to_emails,
            "reply_to": reply_to,
            "subject": subject
        }
