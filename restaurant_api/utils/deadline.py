import time


class Deadline:
    """Per-request budget for database calls.

    Created once per request and handed to every repository call so the
    whole request shares a single time limit.
    """

    def __init__(self, seconds: float):
        self.seconds = seconds
        self._expires_at = time.monotonic() + seconds

    def remaining(self) -> float:
        return max(0.0, self._expires_at - time.monotonic())

