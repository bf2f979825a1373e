import curses


MAX_LENGTH = 156
PROMPT = "> "
PLACEHOLDER = "Enter GitHub username"


def _is_word_char(ch):
    return ch.isalnum() or ch in "_-"


def word_boundary_left(buffer, cursor):
    i = cursor
    # skip whitespace and separators immediately left
    while i > 0 and not _is_word_char(buffer[i - 1]):
        i -= 1
    while i > 0 and _is_word_char(buffer[i - 1]):
        i -= 1
    return i


def edit(buffer, cursor, ch):
    """Apply one editing key. Returns the new (buffer, cursor)."""
    cursor = max(0, min(cursor, len(buffer)))

    if ch == 23:  # Ctrl+W, delete word backward
        start = word_boundary_left(buffer, cursor)
        return buffer[:start] + buffer[cursor:], start

    if ch == 21:  # Ctrl+U, kill to line start
        return buffer[cursor:], 0

    if ch == 11:  # Ctrl+K, kill to line end
        return buffer[:cursor], cursor

    if ch in (curses.KEY_BACKSPACE, 127, 8):
        if cursor > 0:
            return buffer[: cursor - 1] + buffer[cursor:], cursor - 1
        return buffer, cursor

    if ch in (curses.KEY_DC, 4):  # Delete or Ctrl+D
        return buffer[:cursor] + buffer[cursor + 1 :], cursor

    if ch in (curses.KEY_LEFT, 2):  # Left or Ctrl+B
        return buffer, max(0, cursor - 1)

    if ch in (curses.KEY_RIGHT, 6):  # Right or Ctrl+F
        return buffer, min(len(buffer), cursor + 1)

    if ch in (curses.KEY_HOME, 1):  # Home or Ctrl+A
        return buffer, 0

    if ch in (curses.KEY_END, 5):  # End or Ctrl+E
        return buffer, len(buffer)

    if 32 <= ch <= 126:
        if len(buffer) >= MAX_LENGTH:
            return buffer, cursor
        return buffer[:cursor] + chr(ch) + buffer[cursor:], cursor + 1

    return buffer, cursor


def visible_slice(buffer, cursor, width):
    """Return (text, cursor_col) for a field `width` columns wide."""
    width = max(1, width)
    hscroll = max(0, cursor - width + 1)
    return buffer[hscroll : hscroll + width], cursor - hscroll


def draw(win, y, buffer, cursor):
    h, w = win.getmaxyx()
    if y >= h:
        return
    text_w = max(1, w - len(PROMPT) - 1)
    visible, cursor_col = visible_slice(buffer, cursor, text_w)

    try:
        win.addnstr(y, 0, PROMPT, len(PROMPT))
        if buffer:
            win.addnstr(y, len(PROMPT), visible, text_w)
        else:
            win.addnstr(y, len(PROMPT), PLACEHOLDER, text_w, curses.A_DIM)
    except curses.error:
        pass

    try:
        win.move(y, max(0, min(len(PROMPT) + cursor_col, w - 1)))
    except curses.error:
        pass
