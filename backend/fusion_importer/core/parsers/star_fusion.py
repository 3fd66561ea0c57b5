from typing import Optional
from pydantic import BaseModel, Field
from fusion_importer.core.extractors import (
    inframe_status,
    optional_field,
    parse_breakpoint_locus,
    parse_gene_field,
    split_case_junction_sequence
)
from fusion_importer.core.parsers.base import BaseFusionParser
from fusion_importer.schemas.fusion import Fusion, FusionTool, GenomeVersion
from fusion_importer.schemas.gene import PartnerGene


class StarFusionRow(BaseModel):
    """One line of star-fusion.fusion_predictions(.abridged).tsv."""
    junction_read_count: int = Field(..., alias="JunctionReadCount")
    spanning_frag_count: int = Field(..., alias="SpanningFragCount")
    left_gene: str = Field(..., alias="LeftGene")
    left_breakpoint: str = Field(..., alias="LeftBreakpoint")
    right_gene: str = Field(..., alias="RightGene")
    right_breakpoint: str = Field(..., alias="RightBreakpoint")

    # Annotation columns, not written by every STAR-Fusion version
    large_anchor_support: Optional[str] = Field(None, alias="LargeAnchorSupport")
    left_break_dinuc: Optional[str] = Field(None, alias="LeftBreakDinuc")
    left_break_entropy: Optional[float] = Field(None, alias="LeftBreakEntropy")
    right_break_dinuc: Optional[str] = Field(None, alias="RightBreakDinuc")
    right_break_entropy: Optional[float] = Field(None, alias="RightBreakEntropy")
    ffpm: Optional[float] = Field(None, alias="FFPM")

    # Only present when run with --examine_coding_effect / FusionInspector
    prot_fusion_type: Optional[str] = Field(None, alias="PROT_FUSION_TYPE")
    annots: Optional[str] = None
    fusion_cds: Optional[str] = Field(None, alias="FUSION_CDS")


class StarFusionParser(BaseFusionParser):
    """Parser for STAR-Fusion output files."""

    fusion_tool = FusionTool.STARFUSION
    row_model = StarFusionRow
    tool_specific_fields = (
        "large_anchor_support",
        "left_break_dinuc",
        "left_break_entropy",
        "right_break_dinuc",
        "right_break_entropy",
        "ffpm",
        "prot_fusion_type",
        "annots"
    )
    header_markers = ("JunctionReadCount", "SpanningFragCount", "LeftBreakpoint", "RightBreakpoint")

    def build_fusion(self, row: StarFusionRow, index: int, genome_version: GenomeVersion) -> Fusion:
        left_gene = parse_gene_field(row.left_gene)
        right_gene = parse_gene_field(row.right_gene)
        left_locus = parse_breakpoint_locus(row.left_breakpoint)
        right_locus = parse_breakpoint_locus(row.right_breakpoint)

        # FUSION_CDS: upstream bases lowercase, downstream bases uppercase
        sequence_upstream, sequence_downstream = split_case_junction_sequence(
            optional_field(row, "fusion_cds")
        )

        gene_upstream = PartnerGene(
            name=left_gene.name,
            ensembl_id=left_gene.ensembl_id,
            chromosome=left_locus.chromosome,
            breakpoint=left_locus.position,
            strand=left_locus.strand,
            junction_sequence=sequence_upstream
        )
        gene_downstream = PartnerGene(
            name=right_gene.name,
            ensembl_id=right_gene.ensembl_id,
            chromosome=right_locus.chromosome,
            breakpoint=right_locus.position,
            strand=right_locus.strand,
            junction_sequence=sequence_downstream
        )

        return Fusion(
            id=str(index),
            fusion_tool=self.fusion_tool,
            genome_version=genome_version,
            spanning_reads_count=row.spanning_frag_count,
            split_reads_count=row.junction_read_count,
            gene_upstream=gene_upstream,
            gene_downstream=gene_downstream,
            inframe=inframe_status(optional_field(row, "prot_fusion_type")),
            fusion_tool_specific_data=self.tool_specific_data(row)
        )
