"""
Token-tree nodes produced by the parser and consumed by the printer.
"""

IDENT = "ident"
PUNCT = "punct"
LITERAL = "literal"
LIFETIME = "lifetime"
DOC = "doc"

CLOSERS = {"{": "}", "(": ")", "[": "]"}


class Tok:
    """A single lexical token."""

    __slots__ = ("kind", "text", "start", "end", "line", "column", "spaced")

    def __init__(self, kind, text, start=0, end=0, line=None, column=None, spaced=False):
        self.kind = kind
        self.text = text
        self.start = start
        self.end = end
        self.line = line
        self.column = column
        # Whether the source had whitespace or a comment right before this token
        self.spaced = spaced

    def __repr__(self):
        return f"Tok({self.kind}, {self.text!r})"


class Group:
    """A delimited token tree: `{ ... }`, `( ... )` or `[ ... ]`."""

    __slots__ = ("delim", "children", "start", "end", "close_start", "line", "column", "spaced", "close_spaced")

    def __init__(self, delim, children, start=0, end=0, close_start=0, line=None, column=None,
                 spaced=False, close_spaced=False):
        self.delim = delim
        self.children = children
        self.start = start
        self.end = end
        self.close_start = close_start
        self.line = line
        self.column = column
        self.spaced = spaced
        self.close_spaced = close_spaced

    @property
    def closer(self):
        return CLOSERS[self.delim]

    def with_children(self, children):
        """Copy of this group holding different children."""
        return Group(self.delim, children, self.start, self.end, self.close_start,
                     self.line, self.column, self.spaced, self.close_spaced)

    def __repr__(self):
        return f"Group({self.delim!r}, {self.children!r})"


def is_ident(node, name=None):
    return isinstance(node, Tok) and node.kind == IDENT and (name is None or node.text == name)


def is_punct(node, *texts):
    return isinstance(node, Tok) and node.kind == PUNCT and (not texts or node.text in texts)


def is_group(node, delim=None):
    return isinstance(node, Group) and (delim is None or node.delim == delim)


def is_doc(node):
    return isinstance(node, Tok) and node.kind == DOC


def is_line_doc(node):
    """Doc comments of the `///` / `//!` form run to the end of the line."""
    return is_doc(node) and node.text.startswith("//")


def is_inner_doc(node):
    return is_doc(node) and node.text[:3] in ("//!", "/*!")


def is_attribute(nodes, index):
    """True when nodes[index] is the bracket group of `#[...]` or `#![...]`."""
    if not is_group(nodes[index], "["):
        return False
    if index >= 1 and is_punct(nodes[index - 1], "#"):
        return True
    return index >= 2 and is_punct(nodes[index - 1], "!") and is_punct(nodes[index - 2], "#")


def is_inner_attribute(nodes, index):
    return (is_group(nodes[index], "[") and index >= 2
            and is_punct(nodes[index - 1], "!") and is_punct(nodes[index - 2], "#"))


def unraw(name):
    """Strip the `r#` prefix of a raw identifier."""
    return name[2:] if name.startswith("r#") else name
