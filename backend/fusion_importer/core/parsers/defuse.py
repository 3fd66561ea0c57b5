from typing import Optional
from pydantic import BaseModel
from fusion_importer.core.extractors import optional_field, split_delimited_junction_sequence, strip_version
from fusion_importer.core.parsers.base import BaseFusionParser
from fusion_importer.schemas.fusion import Fusion, FusionTool, GenomeVersion
from fusion_importer.schemas.gene import PartnerGene


class DefuseRow(BaseModel):
    """One line of deFuse results.filtered.tsv / results.classify.tsv."""
    cluster_id: str
    gene_name1: str
    gene_name2: str
    gene1: str
    gene2: str
    gene_chromosome1: str
    gene_chromosome2: str
    genomic_break_pos1: int
    genomic_break_pos2: int
    genomic_strand1: str
    genomic_strand2: str
    span_count: int
    splitr_count: int

    splitr_sequence: Optional[str] = None
    probability: Optional[float] = None


class DefuseParser(BaseFusionParser):
    """
    Parser for deFuse output files.

    deFuse numbers its predictions itself, so cluster_id is used as the
    fusion id instead of the row number.
    """

    fusion_tool = FusionTool.DEFUSE
    row_model = DefuseRow
    tool_specific_fields = ("probability",)
    header_markers = ("cluster_id", "splitr_count", "span_count")

    def build_fusion(self, row: DefuseRow, index: int, genome_version: GenomeVersion) -> Fusion:
        sequence_upstream, sequence_downstream = split_delimited_junction_sequence(
            optional_field(row, "splitr_sequence")
        )

        gene_upstream = PartnerGene(
            name=row.gene_name1,
            ensembl_id=strip_version(row.gene1),
            chromosome=row.gene_chromosome1,
            breakpoint=row.genomic_break_pos1,
            strand=row.genomic_strand1,
            junction_sequence=sequence_upstream
        )
        gene_downstream = PartnerGene(
            name=row.gene_name2,
            ensembl_id=strip_version(row.gene2),
            chromosome=row.gene_chromosome2,
            breakpoint=row.genomic_break_pos2,
            strand=row.genomic_strand2,
            junction_sequence=sequence_downstream
        )

        return Fusion(
            id=row.cluster_id,
            fusion_tool=self.fusion_tool,
            genome_version=genome_version,
            spanning_reads_count=row.span_count,
            split_reads_count=row.splitr_count,
            gene_upstream=gene_upstream,
            gene_downstream=gene_downstream,
            fusion_tool_specific_data=self.tool_specific_data(row)
        )
