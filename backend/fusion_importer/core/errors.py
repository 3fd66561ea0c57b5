from typing import Optional


class FusionImportError(Exception):
    """Base class for every failure raised while importing a fusion file."""

    def __init__(self, message: str, source: Optional[str] = None, row: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.source = source
        self.row = row

    def __str__(self) -> str:
        prefix = ""
        if self.source is not None:
            prefix += f"{self.source}: "
        if self.row is not None:
            prefix += f"row {self.row}: "
        return f"{prefix}{self.message}"


class InvalidGenomeVersion(FusionImportError, ValueError):
    pass


class InvalidLimit(FusionImportError, ValueError):
    pass


class UnknownFusionTool(FusionImportError, ValueError):
    pass


class SourceReadError(FusionImportError):
    """The file could not be opened or its cells do not match the column types."""


class RowError(FusionImportError, ValueError):
    """A single row holds structurally invalid evidence; aborts the import."""


class MalformedLocus(RowError):
    pass


class MalformedGeneField(RowError):
    pass


class InvalidRecord(RowError):
    """Extracted values violate a PartnerGene/Fusion constraint."""
