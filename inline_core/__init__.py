# inline-mod - Core Components
"""
Core modules for the Rust module inliner:
- errors: Error taxonomy and formatting helpers
- grammar: Lark grammar that lexes Rust into token trees
- parser: Token-tree construction and `mod` item discovery
- resolver: File-module resolution (name.rs / name/mod.rs / #[path])
- bundler: Recursive inlining of module files
- printer: Canonical formatting of merged token trees
- manifest: Cargo.toml loading and discovery
- script: Cargo-script assembly
- highlight: Terminal syntax highlighting
- policy: Output policy table and artifact writing
"""

from .errors import InlineModError
from .bundler import bundle
from .grammar import rust_grammar
from .parser import parse_source, scan_modules
from .printer import print_tree

__all__ = [
    'InlineModError',
    'bundle',
    'rust_grammar',
    'parse_source',
    'scan_modules',
    'print_tree',
]
