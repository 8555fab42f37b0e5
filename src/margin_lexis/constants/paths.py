"""Data directory paths and file path builders."""

from pathlib import Path

# Base directories (relative to project root)
DATA_DIR = Path("data")
STATS_DIR = DATA_DIR / "stats"
EXPORTS_DIR = DATA_DIR / "exports"

# Cache directories
DEFINITION_CACHE_DIR = DATA_DIR / "cache" / "definitions"


def get_stats_path(project_name: str) -> Path:
    """Get path to the persisted vocabulary stat table of a project."""
    return STATS_DIR / f"{project_name}_vocabulary_stats.json"


def get_lexicon_export_path(project_name: str) -> Path:
    """Get path to the exported lexicon CSV of a project."""
    return EXPORTS_DIR / f"{project_name}_lexicon.csv"
