from fusion_importer.core.parsers.star_fusion import StarFusionParser
from fusion_importer.core.parsers.arriba import ArribaParser
from fusion_importer.core.parsers.defuse import DefuseParser

__all__ = ["StarFusionParser", "ArribaParser", "DefuseParser"]
