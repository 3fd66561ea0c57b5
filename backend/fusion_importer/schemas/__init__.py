from fusion_importer.schemas.fusion import Fusion, FusionTool, GenomeVersion
from fusion_importer.schemas.gene import PartnerGene, TranscriptRange

__all__ = [
    "Fusion",
    "FusionTool",
    "GenomeVersion",
    "PartnerGene",
    "TranscriptRange"
]
