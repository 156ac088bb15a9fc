"""
Turns assembled makes into addressed spreadsheet rows.

The sheet groups models visually under their make: the make name and id are
printed once, on the row of its first model, and left blank below it.

    A           B    C   D            E
    make name   id       model name   id      <- row 1, header
    Toyota      m1       Corolla      c1      <- row 2
                         Camry        c2      <- row 3
"""

import logging
from dataclasses import dataclass
from typing import List

from .vehicle_data import Make

logger = logging.getLogger(__name__)

HEADER_VALUES = ["make name", "id", "", "model name", "id"]
HEADER_ROW_INDEX = 1
FIRST_DATA_ROW_INDEX = 2
FIRST_COLUMN = "A"
LAST_COLUMN = "E"


@dataclass(frozen=True)
class Row:
    """One row of cells (columns A to E) and where it goes in the sheet."""
    sheet_name: str
    start_row: int
    end_row: int
    values: List[str]

    @property
    def a1_range(self) -> str:
        return f"{self.sheet_name}!{FIRST_COLUMN}{self.start_row}:{LAST_COLUMN}{self.end_row}"


def build_header_row(sheet_name: str) -> Row:
    return Row(sheet_name, HEADER_ROW_INDEX, HEADER_ROW_INDEX, list(HEADER_VALUES))


def build_rows(makes: List[Make], sheet_name: str, separate_makes: bool = False) -> List[Row]:
    """
    Lays out the header followed by one row per (make, model) pair.

    Rows follow make order, then model order within each make. A make without
    models produces nothing.

    Args:
        makes (List[Make]): Assembled makes, each carrying its models.
        sheet_name (str): The worksheet the rows are addressed to.
        separate_makes (bool): Leave one blank row after every make, including makes
                               without models. Defaults to False (contiguous rows).

    Returns:
        List[Row]: The header row first, then the data rows.
    """
    rows = [build_header_row(sheet_name)]
    row_index = FIRST_DATA_ROW_INDEX
    for make in makes:
        for j, model in enumerate(make.models):
            make_name, make_id = (make.name, make.id) if j == 0 else ("", "")
            rows.append(Row(sheet_name, row_index, row_index, [make_name, make_id, "", model.name, model.id]))
            row_index += 1
        if separate_makes:
            row_index += 1

    logger.info(f"Laid out {len(rows) - 1} data rows for {len(makes)} makes on sheet '{sheet_name}'.")
    return rows


def closed_form_row_index(makes: List[Make], make_index: int, model_index: int) -> int:
    """
    Row of the `model_index`-th model of the `make_index`-th make, computed directly.

    Counts one extra row for every make before `make_index`, so it matches the
    layout of `build_rows(..., separate_makes=True)`.
    """
    models_before = sum(len(make.models) for make in makes[:make_index])
    return FIRST_DATA_ROW_INDEX + make_index + model_index + models_before
