from app_state import Phase
from grid_builder import DAY_COLUMNS


LABEL_WIDTH = 7
CELL_WIDTH = 3
NO_DATA_GLYPH = "✗"
OVERFLOW_TEXT = "1k+"
LABEL_SPAN = LABEL_WIDTH + 2  # "|YYYY-MM|"
CELL_SPAN = CELL_WIDTH + 1  # "  4|"


def format_label(year, month):
    return f"{year:04d}-{month:02d}"


def format_count(count):
    if count is None:
        return NO_DATA_GLYPH.rjust(CELL_WIDTH)
    text = str(count)
    if len(text) > CELL_WIDTH:
        return OVERFLOW_TEXT
    return text.rjust(CELL_WIDTH)


def cell_start(day):
    """Column offset of `day`'s cell within a layout row."""
    return LABEL_SPAN + (day - 1) * CELL_SPAN


def header_row():
    return "|" + " " * LABEL_WIDTH + "|" + "".join(
        f"{day:>{CELL_WIDTH}}|" for day in DAY_COLUMNS
    )


def layout(grid):
    """Grid as fixed-width text rows: a day header, then one row per month."""
    rows = [header_row()]
    for r in range(grid.rows):
        label = format_label(*grid.label(r))
        cells = "".join(f"{format_count(grid.cell(r, day))}|" for day in DAY_COLUMNS)
        rows.append(f"|{label:>{LABEL_WIDTH}}|{cells}")
    return rows


def view_lines(state):
    lines = []
    if state.submitted_identifier:
        lines.append(f"Contributions for : {state.submitted_identifier}")
    if state.phase is Phase.FETCHING:
        lines.append("Fetching…")
    elif state.phase is Phase.FAILED and state.last_error is not None:
        lines.append(f"Error: {state.last_error.message}")
    lines.append("")
    lines.extend(layout(state.grid))
    return lines
