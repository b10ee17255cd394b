"""
Canonical printer for merged token trees.

Layout is a pure function of the tree: one item or statement per line,
four-space indentation, non-empty brace groups opened as blocks. Between two
tokens on the same line the printer normalizes a handful of cases and
otherwise emits a single space exactly where the source had a gap.
"""

from inline_core.syntax import (
    Group,
    Tok,
    IDENT,
    LIFETIME,
    LITERAL,
    is_attribute,
    is_doc,
    is_group,
    is_line_doc,
    is_punct,
)

INDENT = "    "

# Words that may follow a closing brace without starting a new statement
_CONTINUATIONS = {"else", "as"}


class _Writer:
    """Accumulates output lines with indentation."""

    def __init__(self):
        self.lines = []
        self.indent = 0
        self._parts = []

    @property
    def at_line_start(self):
        return not self._parts

    def write(self, text, space=False):
        if not self._parts:
            self._parts.append(INDENT * self.indent)
        elif space:
            self._parts.append(" ")
        self._parts.append(text)

    def newline(self):
        if self._parts:
            self.lines.append("".join(self._parts).rstrip())
            self._parts = []

    def getvalue(self):
        self.newline()
        if not self.lines:
            return ""
        return "\n".join(self.lines) + "\n"


class CanonicalPrinter:
    """Serializes token trees into deterministic, formatted Rust text."""

    def __init__(self):
        self._out = _Writer()

    def print(self, nodes):
        self._block(nodes)
        return self._out.getvalue()

    def print_inline(self, nodes):
        self._inline(nodes, None)
        return self._out.getvalue().rstrip("\n")

    # --- Block level ---

    def _block(self, nodes):
        list_mode = _is_comma_list(nodes)
        prev = None
        for index, node in enumerate(nodes):
            if is_doc(node):
                self._out.newline()
            self._node(node, prev, None)
            if self._ends_line(nodes, index, list_mode):
                self._out.newline()
            prev = node

    def _ends_line(self, nodes, index, list_mode):
        node = nodes[index]
        if isinstance(node, Tok):
            if is_doc(node):
                return True
            if is_punct(node, ";"):
                return True
            return list_mode and is_punct(node, ",")
        if node.delim == "[":
            return is_attribute(nodes, index)
        if node.delim == "{":
            following = nodes[index + 1] if index + 1 < len(nodes) else None
            return following is None or _starts_statement(following)
        return False

    # --- Inline level ---

    def _inline(self, nodes, opener):
        prev = None
        for node in nodes:
            self._node(node, prev, opener)
            if is_line_doc(node):
                self._out.newline()
            prev = node

    def _node(self, node, prev, opener):
        space = self._space_before(prev, node, opener)
        if isinstance(node, Tok):
            self._out.write(node.text, space)
            return
        if node.delim == "{" and node.children and not is_punct(prev, "::"):
            self._out.write("{", space)
            self._out.newline()
            self._out.indent += 1
            self._block(node.children)
            self._out.newline()
            self._out.indent -= 1
            self._out.write("}")
            return
        self._out.write(node.delim, space)
        self._inline(node.children, node.delim)
        close_space = node.delim == "{" and bool(node.children) and node.close_spaced
        self._out.write(node.closer, close_space)

    def _space_before(self, prev, node, opener):
        if prev is None:
            # First token inside a group
            return opener == "{" and node.spaced
        if is_punct(node, ",", ";"):
            return False
        if is_punct(prev, ","):
            return True
        if is_group(node, "{") and _ends_operand(prev):
            return True
        return node.spaced


def _is_comma_list(nodes):
    has_comma = False
    for node in nodes:
        if is_punct(node, ";"):
            return False
        if is_punct(node, ","):
            has_comma = True
    return has_comma


def _starts_statement(node):
    if isinstance(node, Group):
        return node.delim == "{"
    if node.kind == IDENT:
        return node.text not in _CONTINUATIONS
    if node.kind in (LITERAL, LIFETIME) or is_doc(node):
        return True
    return is_punct(node, "#")


def _ends_operand(node):
    if isinstance(node, Group):
        return node.delim in "(["
    if node.kind in (IDENT, LITERAL, LIFETIME):
        return True
    return is_punct(node, ">")


def print_tree(nodes):
    """Format a sequence of top-level token trees as a Rust source file."""
    return CanonicalPrinter().print(nodes)


def render_inline(nodes):
    """Render token trees on a single logical line (used in diagnostics)."""
    return CanonicalPrinter().print_inline(nodes)
