"""
Error handling utilities for the module inliner.

Every failure the tool can report is a subclass of InlineModError. The
subclasses form a closed taxonomy: callers either get a finished artifact or
exactly one of these, never a best-effort default.
"""


class InlineModError(Exception):
    """Base exception for inlining failures with location and hints."""

    kind = "InlineModError"

    def __init__(self, message, path=None, line_number=None, column=None, context=None, suggestion=None,
                 module_path=()):
        self.message = message
        self.path = str(path) if path is not None else None
        self.line_number = line_number
        self.column = column
        self.context = context  # The offending line
        self.suggestion = suggestion  # How to fix it
        self.module_path = tuple(module_path)  # Logical path of the module being inlined
        super().__init__(self._format_error())

    def in_module(self, module_path):
        """Attach the logical module path (e.g. ('net', 'http')) and rebuild the report."""
        self.module_path = tuple(module_path)
        self.args = (self._format_error(),)
        return self

    def _location(self):
        location = self.path
        if self.line_number:
            location += f":{self.line_number}"
            if self.column:
                location += f":{self.column}"
        return location

    def _format_error(self):
        """
        Build a compiler-style report:

            error[ModuleNotFound]: file not found for module `util`
              --> src/main.rs:3:5
               |
               | mod util;
               = note: while inlining crate::net
               = help: Create src/util.rs or src/util/mod.rs
        """
        lines = [f"error[{self.kind}]: {self.message}"]
        if self.path:
            lines.append(f"  --> {self._location()}")
        if self.context:
            lines.append("   |")
            lines.append(f"   | {self.context}")
        if self.module_path:
            lines.append(f"   = note: while inlining {'::'.join(('crate',) + self.module_path)}")
        if self.suggestion:
            lines.append(f"   = help: {self.suggestion}")
        return "\n".join(lines) + "\n"


class ParseError(InlineModError):
    """Source text is not syntactically valid."""
    kind = "ParseError"


class ModuleNotFound(InlineModError):
    """Neither conventional candidate file exists for a declaration."""
    kind = "ModuleNotFound"


class AmbiguousModulePath(InlineModError):
    """Both `name.rs` and `name/mod.rs` exist for a declaration."""
    kind = "AmbiguousModulePath"


class CyclicModuleReference(InlineModError):
    """A candidate's canonical path was already absorbed into the tree."""
    kind = "CyclicModuleReference"


class ManifestNotFound(InlineModError):
    kind = "ManifestNotFound"


class InvalidManifest(InlineModError):
    kind = "InvalidManifest"


class UnknownTheme(InlineModError):
    kind = "UnknownTheme"


class StdoutWithoutZscript(InlineModError):
    kind = "StdoutWithoutZscript"


def get_line_context(source_code, line_number):
    """Extract the line of code from source by line number (1-based)."""
    if not source_code or line_number is None:
        return None
    source_lines = source_code.split('\n')
    if 0 < line_number <= len(source_lines):
        return source_lines[line_number - 1].strip()
    return None


def detect_delimiter_problems(source_code):
    """Return a hint when the raw delimiter counts do not balance."""
    pairs = [("{", "}", "braces"), ("(", ")", "parentheses"), ("[", "]", "brackets")]
    for opener, closer, label in pairs:
        open_count = source_code.count(opener)
        close_count = source_code.count(closer)
        if open_count != close_count:
            return f"Unmatched {label}: found {open_count} '{opener}' but {close_count} '{closer}'"
    return None
