"""
Inlining pipeline: crate root in, finished artifact out.

Order matters: the output policy (and the theme, when it will be used) is
settled before any source is read, and nothing is written until the whole
artifact exists in memory.
"""
from inline_core.bundler import bundle
from inline_core.console import debug_log, set_verbose
from inline_core.manifest import locate_manifest
from inline_core.policy import assemble_artifact, plan_output, write_artifact
from inline_core.printer import print_tree


def inline_source(file_path):
    """Inline all modules of a crate root and return the formatted source."""
    tree = bundle(file_path)
    debug_log(f"Absorbed {len(tree.files)} file(s)")
    return print_tree(tree.items)


def build_artifact(config):
    """Return (target, artifact) for a configuration without writing anything."""
    # STEP 1: DECIDE OUTPUT POLICY
    target = plan_output(config)

    # STEP 2: INLINE AND FORMAT
    body = inline_source(config.input)

    # STEP 3: LOCATE MANIFEST (zscript only)
    manifest = locate_manifest(config) if target.zscript else None

    # STEP 4: ASSEMBLE
    return target, assemble_artifact(target, body, manifest)


def run(config):
    """Run the whole pipeline and write the artifact to its target."""
    set_verbose(config.verbose)
    target, artifact = build_artifact(config)
    write_artifact(target, artifact)
    return target
