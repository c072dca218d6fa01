"""General utility functions."""

from pathlib import Path

DEFAULT_OUTPUT_DIR = "RhythmOutput"
TIMING_FILE_SUFFIXES = (".txt", ".csv")
EXPORT_SUFFIX = ".rhythm.txt"


def get_outputdir(path: str | Path, output_dir: str | Path | None = None) -> Path:
    """Returns the absolute output directory path for exports.

    Args:
        path: The file or directory being processed.
        output_dir: Custom output directory. If None, uses 'RhythmOutput' in path's directory.

    Returns:
        Absolute path to the output directory.
    """
    if output_dir is not None:
        return Path(output_dir).resolve()

    p = Path(path)
    base = p if p.is_dir() else p.parent
    return (base / DEFAULT_OUTPUT_DIR).resolve()

