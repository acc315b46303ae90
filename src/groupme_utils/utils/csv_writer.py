"""CSV writer with columns that grow as rows are added."""

import csv
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union


class CSVWriter:
    """
    Collects rows of key/value data and writes them to a .csv file.

    Columns are written in the order they were given or first seen. Cells
    for which a row has no value (or None) are filled with ``empty_value``.
    """

    def __init__(self, columns: Optional[Iterable[str]] = None, empty_value: str = ""):
        self.columns: List[str] = list(columns or [])
        self.empty_value = empty_value
        self._rows: List[Mapping[str, Any]] = []

    @property
    def rows(self) -> List[Mapping[str, Any]]:
        return list(self._rows)

    def add_row(self, row: Mapping[str, Any]) -> bool:
        """
        Add a row of data to the output.

        Keys that do not match an existing column are added as new columns
        after the existing ones.

        Returns:
            True if a new column was created
        """
        modified = False
        for column in row:
            if column not in self.columns:
                self.columns.append(column)
                modified = True

        self._rows.append(dict(row))
        return modified

    def format_row(self, row: Mapping[str, Any]) -> List[str]:
        values = []
        for column in self.columns:
            value = row.get(column)
            values.append(self.empty_value if value is None else str(value))
        return values

    def write_to(self, path: Union[str, Path], include_header: bool = True) -> int:
        """
        Write all collected rows to a file, replacing its content.

        The writer is not reset, so a later call writes the same rows again.

        Returns:
            Number of data rows written
        """
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f, lineterminator="\n")
            if include_header:
                writer.writerow(self.columns)
            for row in self._rows:
                writer.writerow(self.format_row(row))

        return len(self._rows)
