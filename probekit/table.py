"""Plain-text tables with column sizing, word wrapping and optional style tags."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

STYLE_RESET = "{{/}}"


class AlignType(enum.Enum):
    """Horizontal alignment of a cell's lines."""

    LEFT = 0
    CENTER = 1
    RIGHT = 2


class Divider(str):
    """The character repeated under a row to separate it from the next."""


@dataclass
class TableStyle:
    """Layout and styling settings for a table."""

    padding: int = 1
    vertical_borders: bool = True
    horizontal_borders: bool = True
    max_table_width: int = 120
    max_col_width: int = 40
    enable_text_styling: bool = True


def _split_word_to_width(word: str, width: int) -> list[str]:
    pieces = []
    chunk = ""
    for char in word:
        chunk += char
        if len(chunk) == width - 1:
            pieces.append(chunk + "-")
            chunk = ""
    return pieces


def _break_long_word(word: str, width: int) -> tuple[list[str], str]:
    pieces = _split_word_to_width(word, width)
    if not pieces:
        raise ValueError(f"cannot split {word!r} to width {width}")
    return pieces[:-1], pieces[-1]


@dataclass
class Cell:
    """A table cell: one or more lines of text with a style and an alignment."""

    contents: list[str] = field(default_factory=list)
    style: str = ""
    align: AlignType = AlignType.LEFT

    def width(self) -> tuple[int, int]:
        """Return the widest line and the widest single word."""
        widest_line = max((len(line) for line in self.contents), default=0)
        widest_word = max(
            (len(word) for line in self.contents for word in line.split(" ")),
            default=0,
        )
        return widest_line, widest_word

    def _align_line(self, line: str, width: int) -> str:
        gap = width - len(line)
        if gap <= 0:
            return line
        if self.align is AlignType.RIGHT:
            return " " * gap + line
        if self.align is AlignType.CENTER:
            left = gap // 2
            return " " * left + line + " " * (gap - left)
        return line + " " * gap

    def _split_to_width(self, line: str, width: int) -> list[str]:
        if len(line) <= width:
            return [line]

        out_lines: list[str] = []
        first, *rest = line.split(" ")
        out_words = [first]
        length = len(first)
        if length > width:
            broken, last = _break_long_word(first, width)
            out_lines.extend(broken)
            out_words = [last]
            length = len(last)

        for word in rest:
            if length + len(word) + 1 <= width:
                length += len(word) + 1
                out_words.append(word)
                continue
            out_lines.append(" ".join(out_words))
            out_words = [word]
            length = len(word)
            if length > width:
                broken, last = _break_long_word(word, width)
                out_lines.extend(broken)
                out_words = [last]
                length = len(last)

        if out_words:
            out_lines.append(" ".join(out_words))
        return out_lines

    def render(self, width: int, style: str, table_style: TableStyle) -> list[str]:
        """Wrap, align and optionally style the cell's lines to the given width."""
        lines = [
            self._align_line(piece, width)
            for line in self.contents
            for piece in self._split_to_width(line, width)
        ]
        if table_style.enable_text_styling:
            combined = style + self.style
            if combined:
                lines = [combined + line + STYLE_RESET for line in lines]
        return lines


def cell(contents: str, *args) -> Cell:
    """Build a cell; string arguments set its style, AlignType arguments its alignment."""
    result = Cell(contents=contents.split("\n"))
    for arg in args:
        if isinstance(arg, AlignType):
            result.align = arg
        elif isinstance(arg, str):
            result.style = arg
    return result


@dataclass
class Row:
    """A row of cells with a divider and a row-wide style."""

    cells: list[Cell] = field(default_factory=list)
    divider: str = "-"
    style: str = ""

    def append_cell(self, *args: Cell) -> Row:
        """Append cells and return the row."""
        self.cells.extend(args)
        return self

    def render(
        self,
        widths: list[int],
        total_width: int,
        table_style: TableStyle,
        is_last_row: bool,
    ) -> str:
        """Render the row (and its divider, unless it is the last row)."""
        if len(self.cells) == 1:
            out = "\n".join(self.cells[0].render(total_width, self.style, table_style)) + "\n"
        else:
            if len(self.cells) != len(widths):
                raise ValueError("row vs width mismatch")
            rendered = [
                c.render(w, self.style, table_style) for c, w in zip(self.cells, widths)
            ]
            height = max((len(lines) for lines in rendered), default=0)
            for lines, w in zip(rendered, widths):
                lines.extend([" " * w] * (height - len(lines)))
            border = " " * table_style.padding
            if table_style.vertical_borders:
                border += "|" + border
            out = "".join(border.join(parts) + "\n" for parts in zip(*rendered))

        if table_style.horizontal_borders and not is_last_row and self.divider:
            out += self.divider * total_width + "\n"
        return out


def row(*args) -> Row:
    """Build a row from Divider, style string and Cell arguments; others are ignored."""
    result = Row()
    for arg in args:
        if isinstance(arg, Divider):
            result.divider = str(arg)
        elif isinstance(arg, str):
            result.style = arg
        elif isinstance(arg, Cell):
            result.cells.append(arg)
    return result


@dataclass
class Table:
    """A list of rows rendered together with shared column widths."""

    rows: list[Row] = field(default_factory=list)
    table_style: TableStyle = field(default_factory=TableStyle)

    def append_row(self, row: Row) -> Table:
        """Append a row and return the table."""
        self.rows.append(row)
        return self

    def render(self) -> str:
        """Render every row into a single string."""
        total_width, widths = self._compute_widths()
        last = len(self.rows) - 1
        return "".join(
            r.render(widths, total_width, self.table_style, idx == last)
            for idx, r in enumerate(self.rows)
        )

    def _compute_widths(self) -> tuple[int, list[int]]:
        style = self.table_style
        n_col = max((len(r.cells) for r in self.rows), default=0)

        border_width = style.padding
        if style.vertical_borders:
            border_width += 1 + style.padding
        total_border = border_width * (n_col - 1)

        widths = [0] * n_col
        min_widths = [0] * n_col
        for r in self.rows:
            for idx, c in enumerate(r.cells):
                w, min_w = c.width()
                widths[idx] = max(widths[idx], w)
                min_widths[idx] = max(min_widths[idx], min_w)

        limit = style.max_table_width
        if sum(widths) + total_border <= limit:
            return sum(widths) + total_border, widths

        widths = [min(w, style.max_col_width) for w in widths]
        min_widths = [min(w, style.max_col_width) for w in min_widths]
        if sum(widths) + total_border <= limit:
            return sum(widths) + total_border, widths

        if sum(min_widths) + total_border >= limit:
            return sum(min_widths) + total_border, min_widths

        budget = limit - total_border
        for _ in range(101):
            if sum(widths) + total_border <= limit:
                break
            baseline = sum(widths)
            widths = [
                max(w * budget // baseline, min_w) for w, min_w in zip(widths, min_widths)
            ]
        return sum(widths) + total_border, widths