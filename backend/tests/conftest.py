"""
Pytest configuration and shared fixtures for fusion importer tests.
"""

import pytest
from pathlib import Path

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def starfusion_file():
    """STAR-Fusion abridged report with 5 fusions and coding-effect columns."""
    return DATA_DIR / "star-fusion.fusion_predictions.abridged.tsv"


@pytest.fixture
def arriba_file():
    return DATA_DIR / "arriba.fusions.tsv"


@pytest.fixture
def defuse_file():
    return DATA_DIR / "defuse.results.filtered.tsv"
