"""
Script assembler: shebang + embedded manifest + source.
"""
import os

from inline_core.config import DEFAULT_SHEBANG, SHEBANG_ENV_VAR


def get_shebang():
    """Shebang line for script artifacts, honoring the environment override."""
    value = os.environ.get(SHEBANG_ENV_VAR)
    if not value:
        return DEFAULT_SHEBANG
    return value.rstrip("\n")


def build_manifest_segment(manifest, shebang=None):
    """Everything that precedes the source body in a script artifact."""
    if shebang is None:
        shebang = get_shebang()
    text = manifest.text
    if not text.endswith("\n"):
        text += "\n"
    return f"{shebang}\n---cargo\n{text}---\n\n"


def build_script(body, manifest, shebang=None):
    return build_manifest_segment(manifest, shebang) + body
