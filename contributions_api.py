import datetime
import json
import logging
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from errors import DecodeError, ResponseError, TransportError
from grid_builder import ContributionSample


logger = logging.getLogger(__name__)

GRAPHQL_URL = "https://api.github.com/graphql"
USER_AGENT = "ghcal"

CALENDAR_QUERY = """
query($login: String!, $from: DateTime!, $to: DateTime!) {
  user(login: $login) {
    contributionsCollection(from: $from, to: $to) {
      contributionCalendar {
        weeks {
          contributionDays {
            date
            contributionCount
          }
        }
      }
    }
  }
}
"""


class ContributionsClient:
    def __init__(self, token, api_url=GRAPHQL_URL, timeout=None, opener=urlopen):
        self.token = token
        self.api_url = api_url or GRAPHQL_URL
        self.timeout = timeout
        self._open = opener

    def _build_request(self, login, start, end):
        body = {
            "query": CALENDAR_QUERY,
            "variables": {
                "login": login,
                "from": f"{start.isoformat()}T00:00:00Z",
                "to": f"{end.isoformat()}T23:59:59Z",
            },
        }
        return Request(
            self.api_url,
            data=json.dumps(body).encode("utf-8"),
            headers={
                "Authorization": f"bearer {self.token}",
                "Content-Type": "application/json",
                "User-Agent": USER_AGENT,
            },
            method="POST",
        )

    def fetch_calendar(self, login: str, start: datetime.date, end: datetime.date) -> dict:
        """POST the calendar query and return the decoded JSON payload."""
        request = self._build_request(login, start, end)
        logger.info("Requesting contributions for %s (%s..%s)", login, start, end)
        try:
            kwargs = {} if self.timeout is None else {"timeout": self.timeout}
            with self._open(request, **kwargs) as resp:
                raw = resp.read().decode("utf-8", errors="replace")
        except HTTPError as e:
            raise ResponseError(f"GitHub returned HTTP {e.code}") from e
        except URLError as e:
            raise TransportError(f"Could not reach GitHub: {e.reason}") from e
        except (TimeoutError, OSError) as e:
            raise TransportError(f"Could not reach GitHub: {e}") from e

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise DecodeError(f"Invalid JSON from GitHub: {e.msg}") from e
        if not isinstance(payload, dict):
            raise DecodeError("Unexpected response shape")

        errors = payload.get("errors")
        if errors:
            first = errors[0] if isinstance(errors, list) and errors else errors
            message = first.get("message") if isinstance(first, dict) else str(first)
            raise ResponseError(message or "GraphQL error")
        return payload


def _parse_day(entry) -> ContributionSample:
    if not isinstance(entry, dict):
        raise DecodeError("Contribution day is not an object")
    raw_date = entry.get("date")
    count = entry.get("contributionCount")
    try:
        day = datetime.date.fromisoformat(raw_date)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Malformed date: {raw_date!r}") from e
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise DecodeError(f"Malformed contribution count for {raw_date}: {count!r}")
    return ContributionSample(day, count)


def decode_samples(payload: dict) -> list[ContributionSample]:
    """Flatten the weeks/contributionDays structure into samples."""
    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, dict):
        raise DecodeError("Response has no data")
    user = data.get("user")
    if user is None:
        raise ResponseError("No such GitHub user")
    try:
        weeks = user["contributionsCollection"]["contributionCalendar"]["weeks"]
    except (KeyError, TypeError) as e:
        raise DecodeError("Response is missing the contribution calendar") from e
    if not isinstance(weeks, list):
        raise DecodeError("Contribution weeks is not a list")

    samples = []
    for week in weeks:
        days = week.get("contributionDays") if isinstance(week, dict) else None
        if not isinstance(days, list):
            raise DecodeError("Week has no contributionDays")
        for entry in days:
            samples.append(_parse_day(entry))
    logger.debug("Decoded %d contribution days", len(samples))
    return samples
