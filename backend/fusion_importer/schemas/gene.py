from pydantic import BaseModel, Field
from typing import Literal, Tuple


class TranscriptRange(BaseModel):
    """Transcript annotation attached to a partner gene by a later annotation step."""
    transcript_id: str
    chromosome: str
    start: int
    end: int
    strand: Literal["+", "-"]

    class Config:
        frozen = True


class PartnerGene(BaseModel):
    """One side (upstream or downstream) of a fusion."""
    name: str = Field(..., min_length=1, description="Gene symbol (e.g., BCR)")
    ensembl_id: str = Field(..., min_length=1, description="Stable gene id without version suffix")
    chromosome: str
    breakpoint: int = Field(..., ge=0, description="1-based genomic coordinate")
    strand: Literal["+", "-"]
    junction_sequence: str = ""  # Empty when the caller does not report it
    transcripts: Tuple[TranscriptRange, ...] = ()  # Filled by annotation, never by import

    class Config:
        frozen = True
