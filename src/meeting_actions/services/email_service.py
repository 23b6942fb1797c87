"""
E-mail sharing of extracted action items.

Wraps the SendGrid client with:
- A daily send quota (free-tier style, resets when the date changes),
  reserved before sending so concurrent requests cannot overrun it
- HTML and plain-text rendering of an action list
- Per-recipient delivery with partial-success reporting
"""

import asyncio
from collections.abc import Callable, Sequence
from datetime import date
from html import escape
from typing import Any

from ..clients.sendgrid_client import SendGridClient
from ..errors import (
    EmailDeliveryError,
    EmailQuotaExceededError,
    PartialSuccessResult,
    ServiceNotConfiguredError,
)
from ..logging import get_logger
from ..models.action_item import UNASSIGNED, ActionItem

logger = get_logger(__name__)

DEFAULT_SUBJECT = 'Meeting Action Items'


class DailyEmailQuota:
    """In-process counter of e-mails sent today."""

    def __init__(self, limit: int = 100, today: Callable[[], date] = date.today):
        self.limit = limit
        self._today = today
        self.used = 0
        self.reset_date: date = today()

    def _reset_if_needed(self) -> None:
        current = self._today()
        if current != self.reset_date:
            self.used = 0
            self.reset_date = current

    @property
    def remaining(self) -> int:
        self._reset_if_needed()
        return max(0, self.limit - self.used)

    def can_send(self, count: int = 1) -> bool:
        """True if count more e-mails fit in today's quota."""
        return count <= self.remaining

    def record(self, count: int) -> None:
        """Count e-mails that were actually sent."""
        self._reset_if_needed()
        self.used += count

    def reserve(self, count: int) -> date:
        """
        Claim count slots ahead of sending.

        Returns:
            The quota day the slots were taken from (pass it to release)
        """
        self._reset_if_needed()
        self.used += count
        return self.reset_date

    def release(self, count: int, day: date) -> None:
        """Return unused reserved slots; slots from an earlier day are already gone."""
        self._reset_if_needed()
        if day == self.reset_date:
            self.used = max(0, self.used - count)

    def snapshot(self) -> dict[str, Any]:
        remaining = self.remaining
        return {
            'limit': self.limit,
            'used': self.limit - remaining,
            'remaining': remaining,
            'reset_date': self.reset_date.isoformat(),
        }


def render_actions_html(actions: Sequence[ActionItem], message: str | None = None) -> str:
    """Render action items as an HTML document with an owner/task table."""
    rows = ''.join(
        f'<tr><td>{escape(a.owner or UNASSIGNED)}</td><td>{escape(a.task or "")}</td></tr>'
        for a in actions
    )
    intro = f'<p>{escape(message)}</p>' if message else ''
    return (
        '<html><body>'
        f'<h2>{DEFAULT_SUBJECT}</h2>'
        f'{intro}'
        f'<p>Total actions: {len(actions)}</p>'
        '<table border="1" cellpadding="10" cellspacing="0" '
        'style="border-collapse: collapse; width: 100%;">'
        '<thead><tr style="background-color: #f2f2f2;"><th>Owner</th><th>Task</th></tr></thead>'
        f'<tbody>{rows}</tbody>'
        '</table>'
        '</body></html>'
    )


def render_actions_text(actions: Sequence[ActionItem]) -> str:
    """Render action items as "owner: task" lines."""
    return '\n'.join(f'{a.owner or UNASSIGNED}: {a.task or ""}' for a in actions)


class EmailService:
    """
    Sends action item lists by e-mail within a daily quota.

    Usage:
        service = EmailService(SendGridClient(), DailyEmailQuota(limit=100))
        result = await service.send_actions(actions, ["a@example.com"])
    """

    def __init__(self, client: SendGridClient | None, quota: DailyEmailQuota | None = None):
        """
        Initialize the service.

        Args:
            client: Configured SendGrid client, or None when e-mail is disabled
            quota: Daily quota tracker (defaults to 100 e-mails/day)
        """
        self.client = client
        self.quota = quota or DailyEmailQuota()
        self._lock = asyncio.Lock()

    @property
    def is_available(self) -> bool:
        return self.client is not None

    async def send_actions(
        self,
        actions: Sequence[ActionItem],
        recipients: Sequence[str],
        subject: str | None = None,
        message: str | None = None,
    ) -> PartialSuccessResult:
        """
        E-mail an action list to each recipient.

        Args:
            actions: Action items to share
            recipients: Validated e-mail addresses
            subject: Subject line (defaults to "Meeting Action Items")
            message: Optional note shown above the table

        Returns:
            PartialSuccessResult keyed by recipient address

        Raises:
            ServiceNotConfiguredError: No SendGrid client configured
            EmailQuotaExceededError: Quota exhausted or too small for the recipients
        """
        if self.client is None:
            raise ServiceNotConfiguredError(
                'Email service is not configured. '
                'Please set SENDGRID_API_KEY in your environment variables.'
            )

        # No await between the check and the reservation, so concurrent
        # requests cannot both pass the check for the same slots.
        async with self._lock:
            self._check_quota(len(recipients))
            day = self.quota.reserve(len(recipients))

        html = render_actions_html(actions, message)
        text = render_actions_text(actions)
        subject = subject or DEFAULT_SUBJECT

        result = PartialSuccessResult()
        try:
            for recipient in recipients:
                try:
                    await self.client.send(recipient, subject, html, text)
                    result.add_success(item_id=recipient)
                except EmailDeliveryError as e:
                    logger.warning('email.delivery_failed', recipient=recipient, error=e.message)
                    result.add_failure(e, item_id=recipient)
        finally:
            self.quota.release(len(recipients) - result.success_count, day)

        logger.info(
            'email.sent',
            sent=result.success_count,
            failed=result.failure_count,
            daily_used=self.quota.used,
            daily_limit=self.quota.limit,
        )
        return result

    def _check_quota(self, requested: int) -> None:
        remaining = self.quota.remaining
        if remaining == 0:
            raise EmailQuotaExceededError(
                f'Daily email limit reached ({self.quota.limit} emails/day). '
                'Please try again tomorrow.',
                context={'limit': self.quota.limit},
            )
        if requested > remaining:
            raise EmailQuotaExceededError(
                f'Cannot send to {requested} recipients. '
                f'Only {remaining} emails remaining today.',
                context={'requested': requested, 'remaining': remaining},
            )
