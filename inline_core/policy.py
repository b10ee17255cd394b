"""
Output policy engine.

Which combination of target, zscript mode and color request is legal is an
explicit lookup table, evaluated once before anything is read or written.
Color only ever touches the script body on standard output; manifests and
files stay plain text so compilers, diff and TOML parsers can read them.
"""
import os
import sys
import tempfile
from pathlib import Path

from inline_core.console import debug_log
from inline_core.errors import StdoutWithoutZscript
from inline_core.highlight import colorize, resolve_theme
from inline_core.models import Outcome, OutputTarget, TargetKind
from inline_core.script import build_manifest_segment, build_script

# (target, zscript, color requested) -> outcome
POLICY_TABLE = {
    (TargetKind.STDOUT, False, False): Outcome.REJECT_STDOUT_WITHOUT_ZSCRIPT,
    (TargetKind.STDOUT, False, True): Outcome.REJECT_STDOUT_WITHOUT_ZSCRIPT,
    (TargetKind.STDOUT, True, False): Outcome.SCRIPT_PLAIN,
    (TargetKind.STDOUT, True, True): Outcome.SCRIPT_COLORED_BODY,
    (TargetKind.FILE, False, False): Outcome.SOURCE_PLAIN,
    (TargetKind.FILE, False, True): Outcome.SOURCE_PLAIN,
    (TargetKind.FILE, True, False): Outcome.SCRIPT_PLAIN,
    (TargetKind.FILE, True, True): Outcome.SCRIPT_PLAIN,
}


def decide(kind, zscript, color):
    """Look up the outcome for one combination; rejected combinations raise."""
    outcome = POLICY_TABLE[(TargetKind(kind), bool(zscript), bool(color))]
    if outcome is Outcome.REJECT_STDOUT_WITHOUT_ZSCRIPT:
        raise StdoutWithoutZscript(
            "stdout without zscript is not allowed",
            suggestion="Give an output path, or enable zscript with --manifest-path, --auto-zscript or --empty-manifest",
        )
    return outcome


def plan_output(config):
    """Build the OutputTarget for a configuration, validating the theme if it will be used."""
    kind = TargetKind.FILE if config.output is not None else TargetKind.STDOUT
    outcome = decide(kind, config.zscript, config.color)
    colorize_body = outcome is Outcome.SCRIPT_COLORED_BODY
    if colorize_body:
        resolve_theme(config.theme)
    debug_log(f"Output policy: {kind.value}, zscript={config.zscript}, color={config.color} -> {outcome.value}")
    return OutputTarget(
        kind=kind,
        path=config.output,
        zscript=config.zscript,
        colorize_body=colorize_body,
        outcome=outcome,
        theme=config.theme if colorize_body else None,
    )


def assemble_artifact(target, body, manifest=None):
    """Produce the final text for a target from the printed body and manifest."""
    if target.outcome is Outcome.SOURCE_PLAIN:
        return body
    if target.colorize_body:
        return build_manifest_segment(manifest) + colorize(body, target.theme)
    return build_script(body, manifest)


def write_artifact(target, artifact):
    """Write the complete artifact in one go."""
    if target.kind is TargetKind.STDOUT:
        sys.stdout.write(artifact)
        sys.stdout.flush()
        return

    path = Path(target.path)
    fd, tmp_path = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
            f.write(artifact)
        os.chmod(tmp_path, 0o666 & ~_current_umask())
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def _current_umask():
    mask = os.umask(0)
    os.umask(mask)
    return mask
