"""
Entry points for importing fusion caller reports.

The facade validates what every import shares (genome version, row limit,
tool) and hands the file to the matching format parser. Errors are raised
synchronously and never retried: they are deterministic input problems.
"""
import logging
import numbers
import os
from typing import Any, Dict, List, Optional, Type, Union
from fusion_importer.config import get_settings
from fusion_importer.core.errors import InvalidLimit, SourceReadError, UnknownFusionTool
from fusion_importer.core.parsers import ArribaParser, DefuseParser, StarFusionParser
from fusion_importer.core.parsers.base import BaseFusionParser
from fusion_importer.core.reader import Source, source_name
from fusion_importer.schemas.fusion import Fusion, FusionTool, GenomeVersion

logger = logging.getLogger(__name__)

# Checked in order by detect_fusion_tool
PARSERS: Dict[FusionTool, Type[BaseFusionParser]] = {
    FusionTool.STARFUSION: StarFusionParser,
    FusionTool.ARRIBA: ArribaParser,
    FusionTool.DEFUSE: DefuseParser,
}


def validate_limit(limit: Any) -> Optional[int]:
    """None means no limit; anything else must be a positive whole number (3 or 3.0)."""
    if limit is None:
        return None
    if isinstance(limit, bool) or not isinstance(limit, numbers.Real):
        raise InvalidLimit(f"limit must be a numeric value bigger than 0, got {limit!r}")
    if not float(limit).is_integer():
        raise InvalidLimit(f"limit must be a numeric value bigger than 0, got {limit!r}")
    if limit <= 0:
        raise InvalidLimit(f"limit must be a numeric value bigger than 0, got {limit!r}")
    return int(limit)


def resolve_tool(tool: Union[str, FusionTool]) -> FusionTool:
    if isinstance(tool, FusionTool):
        return tool
    normalized = str(tool).strip().lower().replace("-", "").replace("_", "")
    try:
        return FusionTool(normalized)
    except ValueError:
        valid = ", ".join(t.value for t in FusionTool)
        raise UnknownFusionTool(f"Unsupported fusion tool: {tool!r} (expected one of {valid})") from None


def detect_fusion_tool(header_line: str) -> Optional[FusionTool]:
    """Auto-detect the caller from a report's header line."""
    header = [col.strip() for col in header_line.rstrip("\r\n").lstrip("#").split("\t")]
    for tool, parser_class in PARSERS.items():
        if parser_class.matches_header(header):
            return tool
    return None


def _read_header_line(source: Source) -> str:
    if not isinstance(source, (str, os.PathLike)):
        # Streams must be rewound so the parser sees the header again
        try:
            start = source.tell()
            line = source.readline()
            while line and not line.strip():
                line = source.readline()
            source.seek(start)
        except OSError as e:
            raise SourceReadError(
                f"Cannot detect the format of a stream that is not seekable ({e}); pass tool explicitly",
                source=source_name(source)
            ) from e
        return line

    try:
        with open(source, "r", encoding=get_settings().file_encoding) as handle:
            for line in handle:
                if line.strip():
                    return line
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(f"Reading caused an error: {e}", source=source_name(source)) from e
    return ""


def import_fusions(
    source: Source,
    genome_version: Union[str, GenomeVersion],
    tool: Union[str, FusionTool, None] = None,
    limit: Optional[int] = None,
    read_warnings: Optional[List[str]] = None
) -> List[Fusion]:
    """
    Import a fusion caller report into a list of Fusion objects.

    Args:
        source: Path to the report, or an open text stream.
        genome_version: Genome used in mapping (hg19, hg38 or mm10, any case).
        tool: Caller that wrote the report; detected from the header when None.
        limit: Read at most this many fusions from the top of the file.
        read_warnings: When given, non-fatal read warnings are appended to it.

    Returns:
        One Fusion per data row, in file order.
    """
    genome = GenomeVersion.parse(genome_version)
    limit = validate_limit(limit)

    if tool is None:
        detected = detect_fusion_tool(_read_header_line(source))
        if detected is None:
            raise UnknownFusionTool(
                "Unknown file format. Expected STAR-Fusion, Arriba or deFuse TSV.",
                source=source_name(source)
            )
        logger.debug(f"Detected {detected.value} format for {source_name(source)}")
        fusion_tool = detected
    else:
        fusion_tool = resolve_tool(tool)

    parser = PARSERS[fusion_tool]()
    try:
        return parser.parse(source, genome, limit)
    finally:
        if read_warnings is not None:
            read_warnings.extend(parser.warnings)


def import_starfusion(
    source: Source,
    genome_version: Union[str, GenomeVersion],
    limit: Optional[int] = None,
    read_warnings: Optional[List[str]] = None
) -> List[Fusion]:
    """Import a star-fusion.fusion_candidates.final.abridged style report."""
    return import_fusions(source, genome_version, FusionTool.STARFUSION, limit, read_warnings)


def import_arriba(
    source: Source,
    genome_version: Union[str, GenomeVersion],
    limit: Optional[int] = None,
    read_warnings: Optional[List[str]] = None
) -> List[Fusion]:
    return import_fusions(source, genome_version, FusionTool.ARRIBA, limit, read_warnings)


def import_defuse(
    source: Source,
    genome_version: Union[str, GenomeVersion],
    limit: Optional[int] = None,
    read_warnings: Optional[List[str]] = None
) -> List[Fusion]:
    return import_fusions(source, genome_version, FusionTool.DEFUSE, limit, read_warnings)
