import datetime
import logging
from dataclasses import dataclass

import pandas as pd


logger = logging.getLogger(__name__)

WINDOW_MONTHS = 13
DAYS_IN_MONTH = 31
DAY_COLUMNS = list(range(1, DAYS_IN_MONTH + 1))


@dataclass(frozen=True)
class ContributionSample:
    date: datetime.date
    count: int


def encode_year_month(year: int, month: int) -> int:
    return year * 100 + month


def decode_year_month(value: int) -> tuple[int, int]:
    value = int(value)
    return value // 100, value % 100


def window_anchor(today=None) -> datetime.date:
    """Return today minus one calendar year (29 Feb falls back to 28 Feb)."""
    if today is None:
        today = datetime.date.today()
    return (pd.Timestamp(today) - pd.DateOffset(years=1)).date()


def month_index(day: datetime.date, anchor: datetime.date) -> int:
    return (day.year - anchor.year) * 12 + (day.month - anchor.month)


def _shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    total = year * 12 + (month - 1) + offset
    return total // 12, total % 12 + 1


class ContributionGrid:
    """
    Month-by-day contribution counts for the trailing window.

    Rows are month buckets starting at the anchor month; the frame index
    carries each bucket's encoded year-month. Columns are days 1..31.
    Cells without a sample hold pd.NA, which is distinct from a real 0.
    """

    LABEL_COLUMNS = 1

    def __init__(self, frame: pd.DataFrame):
        self._frame = frame

    @property
    def frame(self) -> pd.DataFrame:
        return self._frame.copy()

    @property
    def rows(self) -> int:
        return len(self._frame.index)

    @property
    def cols(self) -> int:
        return len(self._frame.columns) + self.LABEL_COLUMNS

    def labels(self) -> list[int]:
        return [int(v) for v in self._frame.index]

    def label(self, row: int) -> tuple[int, int]:
        return decode_year_month(self._frame.index[row])

    def cell(self, row: int, day: int) -> int | None:
        value = self._frame.iat[row, day - 1]
        if pd.isna(value):
            return None
        return int(value)

    def total(self) -> int:
        return int(self._frame.sum().sum())

    def __eq__(self, other):
        if not isinstance(other, ContributionGrid):
            return NotImplemented
        return self._frame.equals(other._frame)

    def __repr__(self):
        return f"ContributionGrid(rows={self.rows}, cols={self.cols})"


def empty_frame(anchor: datetime.date, months: int = WINDOW_MONTHS) -> pd.DataFrame:
    labels = [
        encode_year_month(*_shift_month(anchor.year, anchor.month, i))
        for i in range(months)
    ]
    columns = {
        day: pd.array([pd.NA] * months, dtype="Int64") for day in DAY_COLUMNS
    }
    frame = pd.DataFrame(columns, index=pd.Index(labels, name="year_month"))
    frame.columns.name = "day"
    return frame


def build(samples, anchor: datetime.date, months: int = WINDOW_MONTHS) -> ContributionGrid:
    frame = empty_frame(anchor, months)
    dropped = 0
    for sample in samples:
        idx = month_index(sample.date, anchor)
        if idx < 0 or idx >= months:
            dropped += 1
            continue
        # later samples for the same date overwrite earlier ones
        frame.iat[idx, sample.date.day - 1] = int(sample.count)
    if dropped:
        logger.debug("Dropped %d samples outside window starting %s", dropped, anchor)
    return ContributionGrid(frame)
