from enum import Enum
from types import MappingProxyType
from pydantic import BaseModel, Field, field_serializer, field_validator
from typing import Any, Dict, Mapping, Optional, Tuple, Union
from fusion_importer.core.errors import InvalidGenomeVersion
from fusion_importer.schemas.gene import PartnerGene


ToolValue = Union[bool, int, float, str, None]


class GenomeVersion(str, Enum):
    HG19 = "hg19"
    HG38 = "hg38"
    MM10 = "mm10"

    @classmethod
    def parse(cls, value: Any) -> "GenomeVersion":
        """Match a genome tag case-insensitively against the whitelist."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        valid = ", ".join(v.value for v in cls)
        raise InvalidGenomeVersion(f"Invalid genome version given: {value!r} (expected one of {valid})")


class FusionTool(str, Enum):
    STARFUSION = "starfusion"
    ARRIBA = "arriba"
    DEFUSE = "defuse"


class Fusion(BaseModel):
    """A fusion event normalized from one row of a caller's output."""
    id: str
    fusion_tool: FusionTool
    genome_version: GenomeVersion
    spanning_reads_count: Optional[int] = Field(None, ge=0)  # None when the caller does not report it
    split_reads_count: Optional[int] = Field(None, ge=0)
    fusion_reads_alignment: Tuple[Any, ...] = ()  # Populated by the alignment track step
    gene_upstream: PartnerGene
    gene_downstream: PartnerGene
    inframe: Optional[bool] = None  # None = unknown
    fusion_tool_specific_data: Mapping[str, ToolValue] = Field(default_factory=dict, validate_default=True)

    class Config:
        frozen = True

    @field_validator("fusion_tool_specific_data", mode="after")
    @classmethod
    def read_only_tool_data(cls, value: Mapping[str, ToolValue]) -> Mapping[str, ToolValue]:
        return MappingProxyType(dict(value))

    @field_serializer("fusion_tool_specific_data")
    def serialize_tool_data(self, value: Mapping[str, ToolValue]) -> Dict[str, ToolValue]:
        return dict(value)

    @property
    def name(self) -> str:
        return f"{self.gene_upstream.name}--{self.gene_downstream.name}"

    @property
    def total_reads_count(self) -> int:
        return (self.spanning_reads_count or 0) + (self.split_reads_count or 0)
