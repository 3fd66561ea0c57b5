"""
Schema-checked reader for the delimited tables written by fusion callers.

Every caller writes a header row followed by one fusion per line. The header
names the columns (STAR-Fusion and Arriba prefix it with ``#``); each data line
is validated against a per-format pydantic row model whose field aliases are
the column names, so parsers only ever see typed rows.
"""
import logging
import os
from typing import IO, Iterable, List, Optional, Type, TypeVar, Union
from pydantic import BaseModel, ValidationError
from fusion_importer.config import get_settings
from fusion_importer.core.errors import SourceReadError

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT", bound=BaseModel)
Source = Union[str, os.PathLike, IO[str]]


def source_name(source: Source) -> str:
    """Human readable name of a path or stream, used in messages."""
    if isinstance(source, (str, os.PathLike)):
        return os.fspath(source)
    return getattr(source, "name", None) or "<stream>"


def required_columns(row_model: Type[BaseModel]) -> List[str]:
    return [
        field.alias or name
        for name, field in row_model.model_fields.items()
        if field.is_required()
    ]


class TableReader:
    """Reads a delimited caller report into a list of typed rows."""

    def __init__(
        self,
        row_model: Type[RowT],
        delimiter: str = "\t",
        encoding: Optional[str] = None,
        na_values: Optional[Iterable[str]] = None
    ):
        settings = get_settings()
        self.row_model = row_model
        self.delimiter = delimiter
        self.encoding = encoding or settings.file_encoding
        self.na_values = set(settings.na_values if na_values is None else na_values)
        self.warnings: List[str] = []

    def read(self, source: Source, limit: Optional[int] = None) -> List[RowT]:
        """
        Read at most ``limit`` data rows (all rows when None) in file order.

        Paths are opened here and closed on every exit path; open streams are
        read from their current position and left open for the caller.
        """
        self.warnings = []
        name = source_name(source)

        if not isinstance(source, (str, os.PathLike)):
            return self._read_lines(source, name, limit)

        try:
            handle = open(source, "r", encoding=self.encoding, newline="")
        except OSError as e:
            raise SourceReadError(f"Reading caused an error: {e}", source=name) from e

        with handle:
            return self._read_lines(handle, name, limit)

    def _read_lines(self, handle: Iterable[str], name: str, limit: Optional[int]) -> List[RowT]:
        try:
            return self._parse(handle, name, limit)
        except UnicodeDecodeError as e:
            raise SourceReadError(f"Reading caused an error: {e}", source=name) from e

    def _parse(self, handle: Iterable[str], name: str, limit: Optional[int]) -> List[RowT]:
        rows: List[RowT] = []
        lines = iter(handle)
        header = None
        line_no = 0

        # Header is the first non-empty line
        for line in lines:
            line_no += 1
            line = line.rstrip("\r\n")
            if line.strip():
                header = [col.strip() for col in line.lstrip("#").split(self.delimiter)]
                break

        if header is None:
            raise SourceReadError("No header row found", source=name)

        missing = [col for col in required_columns(self.row_model) if col not in header]
        if missing:
            raise SourceReadError(f"Missing required columns: {', '.join(missing)}", source=name)

        if limit is not None and limit <= 0:
            return rows

        for line in lines:
            line_no += 1
            line = line.rstrip("\r\n")

            if not line.strip():
                self._warn(name, f"blank line {line_no} skipped")
                continue
            if line.startswith("#"):
                self._warn(name, f"comment line {line_no} skipped")
                continue

            cells = line.split(self.delimiter)
            if len(cells) > len(header):
                self._warn(name, f"line {line_no} has {len(cells)} fields, expected {len(header)}; extra fields ignored")
            elif len(cells) < len(header):
                self._warn(name, f"line {line_no} has {len(cells)} fields, expected {len(header)}; missing fields treated as absent")

            # NA cells stay as None so the row still records which columns exist
            record = {
                col: None if cell.strip() in self.na_values else cell
                for col, cell in zip(header, cells)
            }

            try:
                rows.append(self.row_model.model_validate(record))
            except ValidationError as e:
                problems = "; ".join(
                    f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                    for err in e.errors()
                )
                raise SourceReadError(
                    f"line {line_no} does not match the expected column types ({problems})",
                    source=name,
                    row=len(rows) + 1
                ) from e

            if limit is not None and len(rows) >= limit:
                break

        return rows

    def _warn(self, name: str, message: str) -> None:
        logger.warning(f"Reading {name} caused a warning: {message}")
        self.warnings.append(message)
