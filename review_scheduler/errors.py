class ReviewSchedulerError(Exception):
    """Base class for every error raised by the review scheduler"""


class NotFoundError(ReviewSchedulerError):
    """A review item (or other record) with the requested id does not exist"""

    def __init__(self, kind: str, record_id):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} {record_id} not found")


class StoreError(ReviewSchedulerError):
    """The review item store failed (connectivity, constraint violation, ...)"""


class ConcurrentUpdateError(StoreError):
    """A review item was modified by someone else since it was read"""

    def __init__(self, item_id, expected_version, actual_version=None):
        self.item_id = item_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"review item {item_id} changed concurrently "
            f"(expected version {expected_version}, found {actual_version})"
        )


class SourceError(ReviewSchedulerError):
    """The study event source failed to supply study records"""


class InvalidArgumentError(ReviewSchedulerError, ValueError):
    """An input value is outside its allowed domain"""


def validate_understanding(understanding) -> int:
    """Fail fast on understanding values outside 1-5"""
    if isinstance(understanding, bool) or not isinstance(understanding, int) or not 1 <= understanding <= 5:
        raise InvalidArgumentError(f"understanding must be an integer between 1 and 5, got {understanding!r}")
    return understanding
