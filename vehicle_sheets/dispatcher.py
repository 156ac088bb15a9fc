"""
Writes laid-out rows to the spreadsheet, one update call per row.

Calls are paced by a fixed window: after the call at position 0, 10, 20, ...
the dispatcher sleeps before continuing. The first failed call stops the run;
rows written before it stay in the sheet.
"""

import time
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .config import SHEETS_SYNC_CONFIG
from .errors import SheetsSyncError
from .google_sheets_client import GoogleSheetsClient
from .row_layout import Row, FIRST_COLUMN, LAST_COLUMN

logger = logging.getLogger(__name__)


@dataclass
class SinkConfig:
    """Where the rows go: an authenticated client (None for dry runs) and the target spreadsheet."""
    client: Optional[GoogleSheetsClient]
    spreadsheet_id: str
    value_input_option: str = SHEETS_SYNC_CONFIG["value_input_option"]


class FixedWindowPacing:
    """Pause for `delay_seconds` after every `every`-th call, starting with the first."""

    def __init__(self, every: int = SHEETS_SYNC_CONFIG["pace_every"],
                 delay_seconds: float = SHEETS_SYNC_CONFIG["pace_delay_seconds"]):
        if every < 1:
            raise ValueError(f"every must be at least 1, got {every}")
        self.every = every
        self.delay_seconds = delay_seconds

    def delay_after(self, position: int) -> Optional[float]:
        """Returns the pause due after the call at 0-based `position`, or None."""
        if position % self.every == 0:
            return self.delay_seconds
        return None


@dataclass(frozen=True)
class UpdateOutcome:
    """The result of writing one row: ok, or the error that stopped the run."""
    row: Row
    error: Optional[SheetsSyncError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class DispatchResult:
    """Outcomes of every update call made, in order."""
    outcomes: List[UpdateOutcome] = field(default_factory=list)

    @property
    def applied(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def error(self) -> Optional[SheetsSyncError]:
        for outcome in self.outcomes:
            if not outcome.ok:
                return outcome.error
        return None

    @property
    def ok(self) -> bool:
        return self.error is None


class UpdateDispatcher:
    """Writes rows one update call at a time, paced and stopping at the first failure."""

    def __init__(self, sink: SinkConfig, pacing: Optional[FixedWindowPacing] = None,
                 sleep: Optional[Callable[[float], None]] = None, dry_run: bool = False):
        self.sink = sink
        self.pacing = pacing or FixedWindowPacing()
        self.sleep = sleep or time.sleep
        self.dry_run = dry_run

    def _apply(self, row: Row) -> UpdateOutcome:
        if self.dry_run:
            logger.info(f"[dry run] {row.a1_range} <- {row.values}")
            return UpdateOutcome(row)
        try:
            self.sink.client.update_range(
                self.sink.spreadsheet_id,
                row.a1_range,
                [row.values],
                value_input_option=self.sink.value_input_option
            )
        except SheetsSyncError as e:
            return UpdateOutcome(row, error=e)
        logger.debug(f"Wrote {row.a1_range}")
        return UpdateOutcome(row)

    def dispatch(self, rows: List[Row]) -> DispatchResult:
        """
        Issues one update per row, in order, stopping at the first failure.

        Args:
            rows (List[Row]): Header and data rows, in the order they should be written.

        Returns:
            DispatchResult: The outcome of every call made. A failed result ends with
                            the failing outcome; later rows were not attempted.
        """
        result = DispatchResult()
        for position, row in enumerate(rows):
            outcome = self._apply(row)
            result.outcomes.append(outcome)
            if not outcome.ok:
                logger.error(f"Unable to set data for {row.a1_range}: {outcome.error}. "
                             f"Stopping after {result.applied} of {len(rows)} rows.")
                return result

            delay = None if self.dry_run else self.pacing.delay_after(position)
            if delay:
                logger.info(f"Wrote {position + 1} of {len(rows)} rows; pausing {delay:g} seconds.")
                self.sleep(delay)

        logger.info(f"Successfully wrote {len(rows)} rows to spreadsheet '{self.sink.spreadsheet_id}'.")
        return result


def _trim(values: List) -> List[str]:
    cells = [str(value) for value in values]
    while cells and cells[-1] == "":
        cells.pop()
    return cells


def verify_rows(sink: SinkConfig, rows: List[Row]) -> List[int]:
    """
    Reads the written block back and compares it with `rows`.

    Only rows that were written are compared. Blank rows between makes are not
    written, so whatever they hold is left alone.

    Returns:
        List[int]: Sheet row numbers whose content differs, in ascending order.
    """
    if not rows:
        return []
    first = min(row.start_row for row in rows)
    last = max(row.end_row for row in rows)
    range_a1 = f"{rows[0].sheet_name}!{FIRST_COLUMN}{first}:{LAST_COLUMN}{last}"
    actual = sink.client.read_range(sink.spreadsheet_id, range_a1)

    expected_by_row = {row.start_row: _trim(row.values) for row in rows}
    mismatched = []
    for row_number in sorted(expected_by_row):
        offset = row_number - first
        got = _trim(actual[offset]) if offset < len(actual) else []
        if got != expected_by_row[row_number]:
            mismatched.append(row_number)
    if mismatched:
        logger.warning(f"{len(mismatched)} rows in {range_a1} differ from what was written: {mismatched}")
    else:
        logger.info(f"Verified {len(rows)} rows in {range_a1}.")
    return mismatched
