"""In-memory store for shared action item lists."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from ..errors import ShareNotFoundError
from ..logging import get_logger
from ..models.action_item import ActionItem

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SharedResult:
    """A stored action list and when it was shared."""

    share_id: str
    actions: list[ActionItem]
    created_at: datetime = field(default_factory=_utcnow)


class ShareStore:
    """
    Process-local share storage keyed by a random share ID.

    Bounded two ways: once max_shares entries are held, creating a share
    evicts the oldest one; with ttl_seconds set, a share older than that is
    dropped and reported as not found.
    """

    def __init__(
        self,
        max_shares: int = 1000,
        ttl_seconds: float | None = None,
        now: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize the store.

        Args:
            max_shares: Most shares held at once (oldest evicted first)
            ttl_seconds: Share lifetime; None or 0 keeps shares until evicted
            now: Clock returning an aware datetime (injectable for tests)
        """
        if max_shares < 1:
            raise ValueError('max_shares must be at least 1')
        self.max_shares = max_shares
        self.ttl = timedelta(seconds=ttl_seconds) if ttl_seconds else None
        self._now = now
        # Insertion order is creation order
        self._results: dict[str, SharedResult] = {}

    def create(self, actions: list[ActionItem]) -> SharedResult:
        """Store a copy of the actions under a new share ID."""
        self._purge_expired()
        while len(self._results) >= self.max_shares:
            evicted = next(iter(self._results))
            del self._results[evicted]
            logger.debug('share_store.evicted', share_id=evicted)

        shared = SharedResult(share_id=str(uuid4()), actions=list(actions), created_at=self._now())
        self._results[shared.share_id] = shared
        return shared

    def get(self, share_id: str) -> SharedResult:
        """
        Look up a share.

        Raises:
            ShareNotFoundError: Unknown, evicted or expired share ID
        """
        shared = self._results.get(share_id)
        if shared is not None and self._expired(shared):
            del self._results[share_id]
            shared = None
        if shared is None:
            raise ShareNotFoundError(
                'Shared link not found or expired',
                context={'share_id': share_id},
            )
        return shared

    def _expired(self, shared: SharedResult) -> bool:
        return self.ttl is not None and self._now() - shared.created_at >= self.ttl

    def _purge_expired(self) -> None:
        # Oldest first, so stop at the first live share
        while self._results:
            oldest = next(iter(self._results.values()))
            if not self._expired(oldest):
                break
            del self._results[oldest.share_id]

    def __len__(self) -> int:
        return len(self._results)
