"""
SendGrid client wrapper for outbound e-mail.

Sends one message per recipient through the v3 mail/send endpoint. Connection
failures are retried; any response from SendGrid is final.
"""

import os

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..errors import ServiceNotConfiguredError, wrap_sendgrid_error


class SendGridClient:
    """
    Async SendGrid client.

    Configuration via environment variables:
    - SENDGRID_API_KEY: Required API key
    - SENDGRID_FROM_EMAIL: Sender address (default: noreply@example.com)
    """

    API_BASE_URL = 'https://api.sendgrid.com/v3'

    def __init__(
        self,
        api_key: str | None = None,
        from_email: str | None = None,
        timeout_seconds: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the SendGrid client.

        Args:
            api_key: SendGrid API key (defaults to SENDGRID_API_KEY env var)
            from_email: Sender address (defaults to SENDGRID_FROM_EMAIL)
            timeout_seconds: Per-request HTTP timeout
            http_client: Preconfigured httpx client (mainly for tests)
        """
        self.api_key = api_key or os.getenv('SENDGRID_API_KEY')
        if not self.api_key:
            raise ServiceNotConfiguredError(
                'SendGrid API key is not configured. '
                'Please set SENDGRID_API_KEY in your environment variables.'
            )

        self.from_email = from_email or os.getenv('SENDGRID_FROM_EMAIL', 'noreply@example.com')

        self._client = http_client or httpx.AsyncClient(
            base_url=self.API_BASE_URL,
            headers={'Authorization': f'Bearer {self.api_key}'},
            timeout=timeout_seconds,
        )

    async def send(self, to: str, subject: str, html: str, text: str) -> None:
        """
        Send a single message.

        Args:
            to: Recipient address
            subject: Subject line
            html: HTML body
            text: Plain-text body

        Raises:
            EmailDeliveryError: SendGrid rejected the message or was unreachable
        """
        payload = {
            'personalizations': [{'to': [{'email': to}]}],
            'from': {'email': self.from_email},
            'subject': subject,
            'content': [
                {'type': 'text/plain', 'value': text},
                {'type': 'text/html', 'value': html},
            ],
        }
        try:
            response = await self._post('/mail/send', payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise wrap_sendgrid_error(e, context={'recipient': to}) from e

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(httpx.ConnectError),
        reraise=True,
    )
    async def _post(self, path: str, payload: dict) -> httpx.Response:
        return await self._client.post(path, json=payload)

    async def close(self):
        """Close the client connection."""
        await self._client.aclose()
