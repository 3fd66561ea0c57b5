import io
import pytest
from fusion_importer import import_arriba, import_defuse, import_fusions, import_starfusion
from fusion_importer.core.errors import (
    InvalidGenomeVersion,
    InvalidLimit,
    SourceReadError,
    UnknownFusionTool
)
from fusion_importer.core.importer import detect_fusion_tool
from fusion_importer.schemas.fusion import FusionTool, GenomeVersion


class UnseekableStream(io.StringIO):
    """Text stream that can only be read forwards, like a pipe."""

    def seekable(self):
        return False

    def tell(self):
        raise io.UnsupportedOperation("not seekable")

    def seek(self, *args):
        raise io.UnsupportedOperation("not seekable")


class TestGenomeVersion:
    @pytest.mark.parametrize("value", ["hg19", "HG19", "Hg19"])
    def test_case_insensitive(self, starfusion_file, value):
        fusions = import_starfusion(starfusion_file, value, limit=1)
        assert fusions[0].genome_version == GenomeVersion.HG19
        assert fusions[0].genome_version.value == "hg19"

    @pytest.mark.parametrize("value", ["hg18", "GRCh38", "", None])
    def test_rejects_unknown_tags(self, starfusion_file, value):
        with pytest.raises(InvalidGenomeVersion):
            import_starfusion(starfusion_file, value)

    def test_rejected_before_reading(self, tmp_path):
        # The file does not exist; the genome check must fail first
        with pytest.raises(InvalidGenomeVersion):
            import_starfusion(tmp_path / "missing.tsv", "hg18")


class TestLimit:
    @pytest.mark.parametrize("limit", [0, -1, 2.5, "3", True])
    def test_invalid_limit(self, starfusion_file, limit):
        with pytest.raises(InvalidLimit):
            import_starfusion(starfusion_file, "hg19", limit=limit)

    def test_limit_reads_top_rows(self, starfusion_file):
        fusions = import_starfusion(starfusion_file, "hg19", limit=2)
        assert [f.id for f in fusions] == ["1", "2"]
        assert [f.name for f in fusions] == ["TPR--NTRK1", "BCR--ABL1"]

    def test_limit_of_three(self, starfusion_file):
        assert len(import_starfusion(starfusion_file, "hg19", 3)) == 3

    def test_whole_number_float_limit(self, starfusion_file):
        fusions = import_starfusion(starfusion_file, "hg19", 3.0)
        assert [f.id for f in fusions] == ["1", "2", "3"]

    def test_limit_larger_than_file(self, starfusion_file):
        assert len(import_starfusion(starfusion_file, "hg19", limit=100)) == 5

    def test_no_limit_reads_everything(self, starfusion_file):
        assert len(import_starfusion(starfusion_file, "hg38")) == 5


class TestImportFusions:
    def test_idempotent(self, starfusion_file):
        first = import_starfusion(starfusion_file, "hg19")
        second = import_starfusion(starfusion_file, "hg19")
        assert first == second

    def test_records_are_immutable(self, starfusion_file):
        fusion = import_starfusion(starfusion_file, "hg19", limit=1)[0]
        with pytest.raises(Exception):
            fusion.id = "other"
        with pytest.raises(Exception):
            fusion.gene_upstream.breakpoint = 1
        with pytest.raises(TypeError):
            fusion.fusion_tool_specific_data["FFPM"] = 999.0
        assert fusion.fusion_tool_specific_data["FFPM"] == 1.2345

    def test_tool_data_serializes_as_dict(self, starfusion_file):
        fusion = import_starfusion(starfusion_file, "hg19", limit=1)[0]
        assert fusion.model_dump()["fusion_tool_specific_data"]["LargeAnchorSupport"] == "YES_LDAS"
        assert isinstance(fusion.model_dump()["fusion_tool_specific_data"], dict)

    def test_read_warnings_returned(self, tmp_path):
        path = tmp_path / "report.tsv"
        path.write_text(
            "#FusionName\tJunctionReadCount\tSpanningFragCount\tLeftGene\tLeftBreakpoint\tRightGene\tRightBreakpoint\n"
            "\n"
            "BCR--ABL1\t50\t30\tBCR^ENSG00000186716.19\tchr22:23632600:+\tABL1^ENSG00000097007.17\tchr9:130854064:-\n"
        )
        read_warnings = []

        fusions = import_starfusion(path, "hg19", read_warnings=read_warnings)

        assert len(fusions) == 1
        assert len(read_warnings) == 1
        assert "blank line" in read_warnings[0]

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceReadError):
            import_starfusion(tmp_path / "missing.tsv", "hg19")

    def test_per_tool_entry_points(self, arriba_file, defuse_file):
        assert import_arriba(arriba_file, "hg38")[0].fusion_tool == FusionTool.ARRIBA
        assert import_defuse(defuse_file, "hg19")[0].fusion_tool == FusionTool.DEFUSE

    def test_tool_by_name(self, arriba_file):
        assert len(import_fusions(arriba_file, "hg38", tool="Arriba")) == 2

    def test_unknown_tool(self, starfusion_file):
        with pytest.raises(UnknownFusionTool):
            import_fusions(starfusion_file, "hg19", tool="fusioncatcher")

    def test_auto_detect(self, starfusion_file, arriba_file, defuse_file):
        assert import_fusions(starfusion_file, "hg19")[0].fusion_tool == FusionTool.STARFUSION
        assert import_fusions(arriba_file, "hg19")[0].fusion_tool == FusionTool.ARRIBA
        assert import_fusions(defuse_file, "hg19")[0].fusion_tool == FusionTool.DEFUSE

    def test_auto_detect_stream(self):
        content = "\n#gene1\tgene2\tstrand1(gene/fusion)\tstrand2(gene/fusion)\tbreakpoint1\tbreakpoint2\tsplit_reads1\tsplit_reads2\tdiscordant_mates\tgene_id1\tgene_id2\n" \
            "BCR\tABL1\t+/+\t-/-\t22:23632600\t9:130854064\t25\t25\t30\tENSG00000186716\tENSG00000097007\n"
        fusions = import_fusions(io.StringIO(content), "hg38")
        assert len(fusions) == 1
        assert fusions[0].fusion_tool == FusionTool.ARRIBA

    def test_auto_detect_unseekable_stream(self, starfusion_file):
        stream = UnseekableStream(starfusion_file.read_text())
        with pytest.raises(SourceReadError):
            import_fusions(stream, "hg19")

    def test_unseekable_stream_with_tool(self, starfusion_file):
        stream = UnseekableStream(starfusion_file.read_text())
        assert len(import_fusions(stream, "hg19", tool="starfusion")) == 5

    def test_auto_detect_unknown_format(self):
        with pytest.raises(UnknownFusionTool):
            import_fusions(io.StringIO("invalid content"), "hg19")


class TestDetectFusionTool:
    def test_detect(self):
        assert detect_fusion_tool("#FusionName\tJunctionReadCount\tSpanningFragCount\tLeftBreakpoint\tRightBreakpoint") == FusionTool.STARFUSION
        assert detect_fusion_tool("#gene1\tgene2\tbreakpoint1\tbreakpoint2") == FusionTool.ARRIBA
        assert detect_fusion_tool("cluster_id\tsplitr_count\tspan_count\tgene1\tgene2") == FusionTool.DEFUSE
        assert detect_fusion_tool("invalid content") is None
