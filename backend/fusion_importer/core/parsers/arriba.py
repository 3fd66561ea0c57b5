from typing import Optional
from pydantic import BaseModel, Field
from fusion_importer.core.extractors import (
    arriba_inframe_status,
    optional_field,
    parse_arriba_strand,
    parse_chromosome_position,
    split_delimited_junction_sequence,
    strip_version
)
from fusion_importer.core.parsers.base import BaseFusionParser
from fusion_importer.schemas.fusion import Fusion, FusionTool, GenomeVersion
from fusion_importer.schemas.gene import PartnerGene


class ArribaRow(BaseModel):
    """One line of Arriba's fusions.tsv."""
    gene1: str
    gene2: str
    gene_id1: Optional[str] = None
    gene_id2: Optional[str] = None
    strand1: str = Field(..., alias="strand1(gene/fusion)")
    strand2: str = Field(..., alias="strand2(gene/fusion)")
    breakpoint1: str
    breakpoint2: str
    split_reads1: int
    split_reads2: int
    discordant_mates: int

    site1: Optional[str] = None
    site2: Optional[str] = None
    type: Optional[str] = None
    confidence: Optional[str] = None
    reading_frame: Optional[str] = None
    fusion_transcript: Optional[str] = None


class ArribaParser(BaseFusionParser):
    """Parser for Arriba fusion output files."""

    fusion_tool = FusionTool.ARRIBA
    row_model = ArribaRow
    tool_specific_fields = ("site1", "site2", "type", "confidence", "reading_frame")
    header_markers = ("gene1", "gene2", "breakpoint1", "breakpoint2")

    def build_fusion(self, row: ArribaRow, index: int, genome_version: GenomeVersion) -> Fusion:
        chr_a, pos_a = parse_chromosome_position(row.breakpoint1)
        chr_b, pos_b = parse_chromosome_position(row.breakpoint2)

        # fusion_transcript marks the breakpoint with |
        sequence_upstream, sequence_downstream = split_delimited_junction_sequence(
            optional_field(row, "fusion_transcript")
        )

        gene_upstream = PartnerGene(
            name=row.gene1,
            ensembl_id=strip_version(row.gene_id1 or ""),
            chromosome=chr_a,
            breakpoint=pos_a,
            strand=parse_arriba_strand(row.strand1),
            junction_sequence=sequence_upstream
        )
        gene_downstream = PartnerGene(
            name=row.gene2,
            ensembl_id=strip_version(row.gene_id2 or ""),
            chromosome=chr_b,
            breakpoint=pos_b,
            strand=parse_arriba_strand(row.strand2),
            junction_sequence=sequence_downstream
        )

        return Fusion(
            id=str(index),
            fusion_tool=self.fusion_tool,
            genome_version=genome_version,
            spanning_reads_count=row.discordant_mates,
            split_reads_count=row.split_reads1 + row.split_reads2,
            gene_upstream=gene_upstream,
            gene_downstream=gene_downstream,
            inframe=arriba_inframe_status(optional_field(row, "reading_frame")),
            fusion_tool_specific_data=self.tool_specific_data(row)
        )
