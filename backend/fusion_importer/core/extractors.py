"""
Field extractors shared by the format parsers.

Each function turns one raw cell (or a row's optional column) into a typed
value. Structural problems raise a RowError subclass, which the parser
decorates with the file name and row number before aborting the import.
"""
import re
from typing import Any, NamedTuple, Optional, Tuple
from pydantic import BaseModel
from fusion_importer.core.errors import MalformedGeneField, MalformedLocus


INFRAME_TOKEN = "INFRAME"
FRAMESHIFT_TOKEN = "FRAMESHIFT"

_TRAILING_UPPER = re.compile(r"[A-Z]+$")
_LEADING_LOWER = re.compile(r"^[a-z]+")


class Locus(NamedTuple):
    chromosome: str
    position: int
    strand: str


class GeneId(NamedTuple):
    name: str
    ensembl_id: str


def _parse_position(value: str, locus: str) -> int:
    if not (value.isascii() and value.isdigit()):
        raise MalformedLocus(f"Invalid breakpoint position {value!r} in {locus!r}")
    return int(value)


def parse_breakpoint_locus(locus: str) -> Locus:
    """Parse breakpoint string in format chr:pos:strand."""
    parts = locus.strip().split(":")
    if len(parts) != 3:
        raise MalformedLocus(f"Invalid breakpoint format: {locus!r} (expected chromosome:position:strand)")
    chromosome, position, strand = parts
    if not chromosome:
        raise MalformedLocus(f"Missing chromosome in breakpoint {locus!r}")
    return Locus(chromosome, _parse_position(position, locus), strand)


def parse_chromosome_position(locus: str) -> Tuple[str, int]:
    """Parse Arriba breakpoint format (chr:position)."""
    parts = locus.strip().split(":")
    if len(parts) != 2 or not parts[0]:
        raise MalformedLocus(f"Invalid breakpoint format: {locus!r} (expected chromosome:position)")
    return parts[0], _parse_position(parts[1], locus)


def strip_version(identifier: str) -> str:
    """ENSG00000186716.19 -> ENSG00000186716"""
    return identifier.split(".")[0]


def parse_gene_field(value: str) -> GeneId:
    """Parse a STAR-Fusion gene field (symbol^ensembl_id.version)."""
    parts = value.strip().split("^")
    if len(parts) < 2:
        raise MalformedGeneField(f"Invalid gene format: {value!r} (expected symbol^ensembl_id)")
    name, ensembl_id = parts[0], strip_version(parts[1])
    if not name or not ensembl_id:
        raise MalformedGeneField(f"Empty gene symbol or id in {value!r}")
    return GeneId(name, ensembl_id)


def split_case_junction_sequence(sequence: Optional[str]) -> Tuple[str, str]:
    """
    Split a junction sequence written with the upstream part in lowercase and
    the downstream part in uppercase (STAR-Fusion FUSION_CDS).

    The upstream part is the sequence with its trailing uppercase run removed,
    the downstream part is the sequence with its leading lowercase run removed.
    A missing sequence gives two empty strings.
    """
    if not sequence:
        return "", ""
    return _TRAILING_UPPER.sub("", sequence), _LEADING_LOWER.sub("", sequence)


def split_delimited_junction_sequence(sequence: Optional[str], delimiter: str = "|") -> Tuple[str, str]:
    """Split a junction sequence whose breakpoint is marked by a delimiter."""
    if not sequence:
        return "", ""
    upstream, sep, downstream = sequence.partition(delimiter)
    if not sep:
        return "", ""
    # Arriba marks non-template bases and splice sites inside each half
    return re.sub(r"[^A-Za-z]", "", upstream), re.sub(r"[^A-Za-z]", "", downstream)


def optional_field(row: BaseModel, name: str) -> Optional[Any]:
    """Value of an optional column, or None when the column or cell is absent."""
    return getattr(row, name, None)


def inframe_status(prot_fusion_type: Optional[str]) -> Optional[bool]:
    """INFRAME -> True, FRAMESHIFT -> False, anything else -> None (unknown)."""
    if prot_fusion_type == INFRAME_TOKEN:
        return True
    if prot_fusion_type == FRAMESHIFT_TOKEN:
        return False
    return None


def arriba_inframe_status(reading_frame: Optional[str]) -> Optional[bool]:
    if reading_frame == "in-frame":
        return True
    if reading_frame == "out-of-frame":
        return False
    return None


def parse_arriba_strand(value: str) -> str:
    """Extract fusion strand (second value after /) from strand1(gene/fusion)."""
    strand = value.split("/")[1] if "/" in value else value
    return strand.strip()
