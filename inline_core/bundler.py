"""
Inlining engine for Rust modules.

Recursively replaces every `mod name;` with `mod name { <contents of the
file> }`, starting at the entry file, much like a C preprocessor handles
#include. Traversal is depth-first and fails on the first error.
"""
import os
from pathlib import Path

from inline_core.console import debug_log
from inline_core.errors import CyclicModuleReference, ModuleNotFound, ParseError
from inline_core.models import ModuleTree, SourceUnit
from inline_core.parser import parse_source, scan_modules
from inline_core.resolver import ModuleContext, resolve_module
from inline_core.syntax import Group


def read_source(path):
    """Read a source file as UTF-8."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise ParseError(f"Source is not valid UTF-8: {e.reason}", path=path)


def load_unit(path, canonical_path, module_path=()):
    """Read and parse one file into a SourceUnit."""
    try:
        items = parse_source(read_source(path), origin=str(path))
    except ParseError as e:
        raise e.in_module(module_path)
    return SourceUnit(
        path=path,
        canonical_path=canonical_path,
        items=items,
        module_path=list(module_path),
    )


def bundle(file_path):
    """
    Inline every external module reachable from the entry file.

    Args:
        file_path: Path to the crate root (e.g. src/lib.rs or src/main.rs)

    Returns:
        ModuleTree with the merged token trees and the absorbed files in order

    Raises:
        ModuleNotFound, AmbiguousModulePath, CyclicModuleReference, ParseError
    """
    # Resolve absolute path so relative lookups do not depend on later chdir calls
    entry = Path(os.path.abspath(file_path))
    if not entry.is_file():
        raise ModuleNotFound(f"Entry file not found: {entry}")

    canonical = entry.resolve()
    visited = {canonical}
    files = [canonical]

    debug_log(f"Inlining crate root: {entry}")
    unit = load_unit(entry, canonical)
    items = _splice(unit.items, ModuleContext.for_entry(entry), visited, files)
    return ModuleTree(items=items, files=files)


def _splice(nodes, context, visited, files):
    """Return a copy of one module scope with its declarations inlined."""
    result = list(nodes)
    for item in scan_modules(nodes):
        if item.is_inline:
            nested = context.nested(item.name, item.path_override)
            body = item.body
            result[item.tail] = body.with_children(_splice(body.children, nested, visited, files))
        else:
            result[item.tail] = _inline_declaration(item, context, visited, files)
    return result


def _inline_declaration(item, context, visited, files):
    declaration = item.to_declaration(context.path)
    resolved = resolve_module(declaration, context)

    if resolved.canonical_path in visited:
        raise CyclicModuleReference(
            f"module `{declaration.name}` resolves to {resolved.canonical_path}, which is already inlined",
            path=declaration.declaring_file,
            line_number=declaration.line,
            column=declaration.column,
            context=declaration.source_text(),
            suggestion="A file can only be one module; check symlinks and #[path] attributes",
            module_path=context.module_path,
        )
    visited.add(resolved.canonical_path)
    files.append(resolved.canonical_path)

    module_path = context.module_path + (declaration.name,)
    debug_log(f"Inlining {'::'.join(module_path)} from {resolved.path}")

    unit = load_unit(resolved.path, resolved.canonical_path, module_path)
    children = _splice(unit.items, ModuleContext.for_module(resolved, module_path), visited, files)
    return Group("{", children, spaced=True)
