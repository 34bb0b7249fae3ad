import logging
import secrets
import string
import time
from datetime import datetime
from functools import lru_cache
from typing import Optional, Protocol

from ..models import Participant, Split

logger = logging.getLogger(__name__)

ME_PARTICIPANT_ID = "me"
ME_PARTICIPANT_NAME = "Me"

_ID_ALPHABET = string.digits + string.ascii_lowercase


class SplitNotFoundError(KeyError):
    """Raised when a split id is not in the repository."""


def now_ms() -> int:
    return int(time.time() * 1000)


def generate_id() -> str:
    """Timestamp-prefixed random id, e.g. "1729300000000-k3j9x0q2a"."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{now_ms()}-{suffix}"


def normalize_split(split: Split) -> Split:
    """
    Make the participant list agree with exclude_me.

    When the user is included and no "me" participant exists, one is put
    first; when the user is excluded any "me" participant is removed.
    Returns a new Split.
    """
    has_me = any(p.id == ME_PARTICIPANT_ID for p in split.participants)
    participants = list(split.participants)

    if not split.exclude_me and not has_me:
        participants.insert(0, Participant(id=ME_PARTICIPANT_ID, name=ME_PARTICIPANT_NAME))
    elif split.exclude_me and has_me:
        participants = [p for p in participants if p.id != ME_PARTICIPANT_ID]

    return split.model_copy(update={"participants": participants}, deep=True)


def create_split(name: Optional[str] = None, now: Optional[datetime] = None) -> Split:
    """
    Start a new, empty split with the current user as its only participant.

    The default name is "Split M/D/YYYY" for today's date.
    """
    now = now or datetime.now()
    timestamp = int(now.timestamp() * 1000)
    return Split(
        id=generate_id(),
        name=name or f"Split {now.month}/{now.day}/{now.year}",
        created_at=timestamp,
        updated_at=timestamp,
        participants=[Participant(id=ME_PARTICIPANT_ID, name=ME_PARTICIPANT_NAME)],
    )


class SplitRepository(Protocol):
    """Storage for splits. The engine never talks to one directly."""

    def load(self, split_id: str) -> Split: ...

    def save(self, split: Split) -> Split: ...

    def delete(self, split_id: str) -> None: ...

    def list(self) -> list[Split]: ...


class InMemorySplitRepository:
    """Process-local split storage. Splits are copied in and out."""

    def __init__(self) -> None:
        self._splits: dict[str, Split] = {}

    def load(self, split_id: str) -> Split:
        try:
            return self._splits[split_id].model_copy(deep=True)
        except KeyError:
            raise SplitNotFoundError(split_id) from None

    def save(self, split: Split) -> Split:
        """Normalize and store a split, bumping updated_at if it already existed."""
        normalized = normalize_split(split)
        if normalized.id in self._splits:
            normalized.updated_at = now_ms()
        self._splits[normalized.id] = normalized
        logger.info("Saved split %s", normalized.id)
        return normalized.model_copy(deep=True)

    def delete(self, split_id: str) -> None:
        if self._splits.pop(split_id, None) is None:
            raise SplitNotFoundError(split_id)
        logger.info("Deleted split %s", split_id)

    def list(self) -> list[Split]:
        return [split.model_copy(deep=True) for split in self._splits.values()]


@lru_cache
def get_repository() -> SplitRepository:
    """Get the shared repository instance."""
    return InMemorySplitRepository()
