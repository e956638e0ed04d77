"""
I/O module: Load and save occurrence tables, prepare the output folder layout.
"""

import os
import tempfile
from pathlib import Path

import pandas as pd

from . import config
from .errors import MissingInputError, PipelineError


def load_occurrences_csv(filepath, **kwargs):
    """
    Load an occurrence CSV with every column kept as text.

    Missing values are read from ``config.NA_VALUES``; nothing else is
    interpreted here so coordinate parsing stays in ``cleaning``.

    Args:
        filepath: Path to CSV file
        **kwargs: Additional arguments for pd.read_csv()

    Returns:
        pd.DataFrame

    Raises:
        MissingInputError: If the file does not exist.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise MissingInputError(
            f"CSV file not found: {filepath}. "
            "Check the project directory and input file name."
        )

    options = {
        "dtype": str,
        "na_values": list(config.NA_VALUES),
        "keep_default_na": False,
    }
    options.update(kwargs)
    return pd.read_csv(filepath, **options)


def clean_output_path(input_path, out_dir=None):
    """
    Derive the cleaned-file path for an input file.

    Args:
        input_path: Source CSV path
        out_dir: Directory of the cleaned file (defaults to the input's folder)

    Returns:
        Path named ``<stem>_clean<ext>``
    """
    input_path = Path(input_path)
    out_dir = Path(out_dir) if out_dir is not None else input_path.parent
    return out_dir / config.clean_file_name(input_path)


def save_csv(df, filepath, protect=(), **kwargs):
    """
    Save DataFrame to CSV, all-or-nothing.

    The frame is written to a temporary sibling file which is then renamed
    onto ``filepath``, so a failed write never leaves a partial file.

    Args:
        df: DataFrame to save
        filepath: Output path
        protect: Paths that must never be overwritten (the input file)
        **kwargs: Additional arguments for df.to_csv()

    Returns:
        Path to saved file
    """
    filepath = Path(filepath)
    target = filepath.resolve()
    for protected in protect:
        if Path(protected).resolve() == target:
            raise PipelineError(
                f"Refusing to overwrite input file {filepath}. "
                "Write the cleaned table to a different path."
            )
    filepath.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{filepath.name}.", suffix=".tmp", dir=filepath.parent
    )
    os.close(fd)
    try:
        df.to_csv(tmp_name, index=False, **kwargs)
        os.replace(tmp_name, filepath)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    return filepath


def ensure_layout(project_dir):
    """
    Create the folders geoenrich writes into, if missing.

    Existing folders and their content are left untouched.

    Args:
        project_dir: Project working directory

    Returns:
        List of the layout folders
    """
    project_dir = Path(project_dir)
    biodiv = project_dir / config.BIODIV_DIR_NAME
    folders = [
        biodiv,
        biodiv / config.DATASETS_DIR_NAME,
        biodiv / config.RESULTS_DIR_NAME,
        project_dir / config.SAT_DIR_NAME,
    ]
    for folder in folders:
        folder.mkdir(parents=True, exist_ok=True)
    return folders


def list_outputs(project_dir):
    """Relative paths of every file under biodiv/ and sat/, sorted."""
    project_dir = Path(project_dir)
    outputs = []
    for name in (config.BIODIV_DIR_NAME, config.SAT_DIR_NAME):
        root = project_dir / name
        if not root.exists():
            continue
        outputs.extend(
            path.relative_to(project_dir).as_posix()
            for path in root.rglob("*")
            if path.is_file()
        )
    return sorted(outputs)


def file_size_mb(filepath):
    """Get file size in MB."""
    return Path(filepath).stat().st_size / (1024 ** 2)
