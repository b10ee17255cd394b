"""
Module resolver: maps a `mod name;` declaration to the one file defining it.

Resolution follows the compiler's file-module conventions and never guesses:
the result is a single ResolvedModule or one specific error.
"""
import os
from pathlib import Path

from inline_core.errors import AmbiguousModulePath, ModuleNotFound
from inline_core.models import ResolvedModule
from inline_core.syntax import unraw


class ModuleContext:
    """
    Where nested declarations of one module scope are looked up.

    A directory owner (the entry file, a `mod.rs`, or a file reached through
    `#[path]`) keeps its children next to itself; a leaf file `foo.rs` keeps
    them in `foo/`. Inline `mod a { ... }` blocks add one directory component
    each.
    """

    def __init__(self, path, directory_owner, name, inline_path=(), module_path=()):
        self.path = Path(path)
        self.directory_owner = directory_owner
        self.name = name
        self.inline_path = tuple(inline_path)
        self.module_path = tuple(module_path)

    @classmethod
    def for_entry(cls, path):
        path = Path(path)
        return cls(path, True, path.stem)

    @classmethod
    def for_module(cls, resolved, module_path):
        return cls(
            resolved.path,
            resolved.directory_owner,
            unraw(resolved.declaration.name),
            module_path=module_path,
        )

    def nested(self, name, directory=None):
        """Context for the body of an inline module (directory from `#[path]` if given)."""
        component = directory if directory is not None else unraw(name)
        return ModuleContext(
            self.path,
            self.directory_owner,
            self.name,
            self.inline_path + (component,),
            self.module_path + (name,),
        )

    def module_directory(self):
        """Directory that holds conventional candidates for child modules."""
        base = self.path.parent
        if not self.directory_owner:
            base = base / self.name
        for component in self.inline_path:
            base = base / component
        return base

    def override_base(self):
        """Directory that `#[path]` overrides are relative to."""
        if self.inline_path:
            return self.module_directory()
        return self.path.parent


def _display(path):
    try:
        return os.path.relpath(path)
    except ValueError:
        return str(path)


def resolve_module(declaration, context):
    """
    Resolve a module declaration to its defining file.

    Args:
        declaration: The ModuleDeclaration to resolve
        context: ModuleContext of the scope that contains the declaration

    Returns:
        ResolvedModule with the candidate's path and canonical path

    Raises:
        ModuleNotFound: If no candidate file exists
        AmbiguousModulePath: If both `name.rs` and `name/mod.rs` exist
    """
    location = dict(
        path=declaration.declaring_file,
        line_number=declaration.line,
        column=declaration.column,
        context=declaration.source_text(),
        module_path=context.module_path,
    )

    # An explicit #[path] is authoritative; conventional candidates are not consulted
    if declaration.path_override is not None:
        candidate = context.override_base() / declaration.path_override
        if not candidate.is_file():
            raise ModuleNotFound(
                f"#[path] for module `{declaration.name}` points to missing file {_display(candidate)}",
                suggestion="Fix the path attribute; it is relative to the declaring file's directory",
                **location,
            )
        return ResolvedModule(
            declaration=declaration,
            path=candidate,
            canonical_path=candidate.resolve(),
            directory_owner=True,
        )

    directory = context.module_directory()
    stem = declaration.file_stem
    leaf = directory / f"{stem}.rs"
    root = directory / stem / "mod.rs"
    has_leaf = leaf.is_file()
    has_root = root.is_file()

    if has_leaf and has_root:
        raise AmbiguousModulePath(
            f"module `{declaration.name}` is defined by both {_display(leaf)} and {_display(root)}",
            suggestion="Delete one of the two files or pick one with #[path = \"...\"]",
            **location,
        )
    if not has_leaf and not has_root:
        raise ModuleNotFound(
            f"file not found for module `{declaration.name}`",
            suggestion=f"Create {_display(leaf)} or {_display(root)}",
            **location,
        )

    winner = leaf if has_leaf else root
    return ResolvedModule(
        declaration=declaration,
        path=winner,
        canonical_path=winner.resolve(),
        directory_owner=has_root,
    )
