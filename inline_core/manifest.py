"""
Manifest locator for cargo-script output.

The manifest is either given explicitly, discovered by walking up from the
input file, or replaced by a fixed empty dependency table on request. A
failed search is an error, never a silent fallback to the empty manifest.
"""
import tomllib
from pathlib import Path

from inline_core.config import EMPTY_MANIFEST, MANIFEST_FILE_NAME, ManifestMode
from inline_core.console import debug_log
from inline_core.errors import InvalidManifest, ManifestNotFound
from inline_core.models import ManifestDescriptor


def load_manifest(path):
    """Read and validate a Cargo manifest."""
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidManifest(
            f"Cannot read manifest: {e}",
            path=path,
            suggestion="Pass an existing Cargo.toml with --manifest-path",
        )

    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise InvalidManifest(f"Manifest is not valid TOML: {e}", path=path)

    dependencies = data.get("dependencies", {})
    if not isinstance(dependencies, dict):
        raise InvalidManifest("`dependencies` must be a table", path=path)

    return ManifestDescriptor(path=path, text=text, dependencies=dependencies)


def empty_manifest():
    return ManifestDescriptor(text=EMPTY_MANIFEST, empty=True)


def find_manifest(start, stop=None):
    """
    Walk from `start` towards the filesystem root looking for Cargo.toml.

    Args:
        start: Directory to begin the search in
        stop: Optional directory at which the walk ends (inclusive)

    Returns:
        Path to the first manifest found

    Raises:
        ManifestNotFound: If the searched range holds no manifest
    """
    current = Path(start).resolve()
    boundary = Path(stop).resolve() if stop is not None else None
    searched = []

    while True:
        candidate = current / MANIFEST_FILE_NAME
        searched.append(str(current))
        if candidate.is_file():
            debug_log(f"Found manifest: {candidate}")
            return candidate
        if current == boundary or current.parent == current:
            break
        current = current.parent

    raise ManifestNotFound(
        f"No {MANIFEST_FILE_NAME} found (searched {len(searched)} directories from {searched[0]} to {searched[-1]})",
        suggestion="Pass --manifest-path, use --empty-manifest, or --search-above-cwd",
    )


def locate_manifest(config, cwd=None):
    """Return the ManifestDescriptor the configuration asks for (None without zscript)."""
    mode = config.manifest_mode
    if mode is ManifestMode.NONE:
        return None
    if mode is ManifestMode.EMPTY:
        return empty_manifest()
    if mode is ManifestMode.EXPLICIT:
        return load_manifest(config.manifest_path)

    start = Path(config.input).absolute().parent
    stop = None if config.search_above_cwd else (cwd if cwd is not None else Path.cwd())
    return load_manifest(find_manifest(start, stop))
