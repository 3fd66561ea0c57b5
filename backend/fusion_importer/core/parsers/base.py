import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple, Type
from pydantic import BaseModel, ValidationError
from fusion_importer.core.errors import InvalidRecord, RowError
from fusion_importer.core.extractors import optional_field
from fusion_importer.core.reader import Source, TableReader, source_name
from fusion_importer.schemas.fusion import Fusion, FusionTool, GenomeVersion, ToolValue

logger = logging.getLogger(__name__)


class BaseFusionParser(ABC):
    """
    Base class for fusion file parsers.

    Subclasses describe one caller's column layout (``row_model``), the
    optional columns kept verbatim in ``fusion_tool_specific_data``
    (``tool_specific_fields``) and how one typed row becomes a Fusion.
    """

    fusion_tool: FusionTool
    row_model: Type[BaseModel]
    tool_specific_fields: Tuple[str, ...] = ()
    header_markers: Tuple[str, ...] = ()  # Columns that identify the layout

    def __init__(self):
        self.warnings: List[str] = []

    def parse(
        self,
        source: Source,
        genome_version: GenomeVersion,
        limit: Optional[int] = None
    ) -> List[Fusion]:
        """Parse a report into Fusion objects in file order; one bad row aborts the import."""
        name = source_name(source)
        reader = TableReader(self.row_model)
        rows = reader.read(source, limit)
        self.warnings = reader.warnings

        fusions = []
        for index, row in enumerate(rows, start=1):
            try:
                fusions.append(self.build_fusion(row, index, genome_version))
            except RowError as e:
                e.source = e.source or name
                e.row = e.row or index
                raise
            except ValidationError as e:
                problems = "; ".join(
                    f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                    for err in e.errors()
                )
                raise InvalidRecord(f"Invalid fusion record ({problems})", source=name, row=index) from e

        logger.info(f"Imported {len(fusions)} {self.fusion_tool.value} fusions from {name}")
        return fusions

    @abstractmethod
    def build_fusion(self, row: BaseModel, index: int, genome_version: GenomeVersion) -> Fusion:
        """Build one Fusion from one typed row (index is the 1-based row number)."""
        pass

    def tool_specific_data(self, row: BaseModel) -> Dict[str, ToolValue]:
        """
        Optional columns present in the report, keyed by their column name.

        A column the report has is always kept, with None for an NA cell; a
        column the report lacks is left out.
        """
        data = {}
        for field_name in self.tool_specific_fields:
            if field_name in row.model_fields_set:
                column = self.row_model.model_fields[field_name].alias or field_name
                data[column] = optional_field(row, field_name)
        return data

    @classmethod
    def matches_header(cls, header: List[str]) -> bool:
        return bool(cls.header_markers) and all(col in header for col in cls.header_markers)
