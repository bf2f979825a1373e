import datetime
import logging
import threading
from dataclasses import dataclass

from contributions_api import decode_samples
from errors import ErrorInfo, FetchError
from grid_builder import ContributionGrid, build, window_anchor


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchSucceeded:
    identifier: str
    grid: ContributionGrid


@dataclass(frozen=True)
class FetchFailed:
    identifier: str
    error: ErrorInfo


class FetchTask:
    """
    One background lookup. Produces exactly one completion message on
    `outbox` and never touches application state.
    """

    def __init__(self, identifier, client, outbox, today=None):
        self.identifier = identifier
        self.client = client
        self.outbox = outbox
        self.today = today

    def execute(self):
        today = self.today or datetime.date.today()
        anchor = window_anchor(today)
        try:
            payload = self.client.fetch_calendar(self.identifier, anchor, today)
            samples = decode_samples(payload)
            grid = build(samples, anchor)
        except FetchError as e:
            info = ErrorInfo.from_exception(e)
            logger.warning("Fetch for %s failed: %s", self.identifier, info)
            return FetchFailed(self.identifier, info)
        logger.info(
            "Fetched %d days for %s (window from %s)",
            len(samples),
            self.identifier,
            anchor,
        )
        return FetchSucceeded(self.identifier, grid)

    def run(self):
        try:
            message = self.execute()
        except Exception as e:
            logger.exception("Unexpected error fetching %s", self.identifier)
            message = FetchFailed(self.identifier, ErrorInfo.from_exception(e))
        self.outbox.put(message)

    def start(self):
        t = threading.Thread(target=self.run, daemon=True)
        t.start()
        return t
