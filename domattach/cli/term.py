# This file is part of Domattach
#
# Domattach is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# Domattach is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with Domattach.  If not, see <http://www.gnu.org/licenses/>.

"""Utils for creating terminal output."""


class Table:
    """Minimalistic text table constructor."""

    def __init__(self, whitespace: str | None = None):
        """Initialise Table."""
        self.whitespace = whitespace or '\t'
        self.header = []
        self.rows = []

    def add_row(self, row: list) -> None:
        """Add table row."""
        self.rows.append([str(col) for col in row])

    def add_rows(self, rows: list[list]) -> None:
        """Add multiple rows."""
        for row in rows:
            self.add_row(row)

    def __str__(self) -> str:
        """Return table."""
        rows = [[str(h).upper() for h in self.header], *self.rows]
        widths = [max(map(len, col)) for col in zip(*rows, strict=True)]
        lines = [
            self.whitespace.join(
                val.ljust(width)
                for val, width in zip(row, widths, strict=True)
            ).rstrip()
            for row in rows
        ]
        return '\n'.join(lines)
