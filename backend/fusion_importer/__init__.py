from fusion_importer.core.importer import (
    import_arriba,
    import_defuse,
    import_fusions,
    import_starfusion
)

__all__ = ["import_fusions", "import_starfusion", "import_arriba", "import_defuse"]
