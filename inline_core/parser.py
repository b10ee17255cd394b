"""
Source parser: Rust text to token trees, plus module item discovery.

The Lark grammar yields balanced token trees; TokenTreeBuilder turns the Lark
tree into Tok/Group nodes and scan_modules() finds the `mod` items that the
inlining engine has to resolve.
"""

import re

from lark import Lark, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from inline_core.errors import ParseError, detect_delimiter_problems, get_line_context
from inline_core.grammar import rust_grammar
from inline_core.models import ModuleDeclaration
from inline_core.printer import render_inline
from inline_core.syntax import (
    DOC,
    IDENT,
    LIFETIME,
    LITERAL,
    PUNCT,
    Group,
    Tok,
    is_doc,
    is_group,
    is_ident,
    is_inner_attribute,
    is_inner_doc,
    is_punct,
)

_PARSER = None


def get_parser():
    """Return the shared LALR parser, building it on first use."""
    global _PARSER
    if _PARSER is None:
        # Nested block comments and raw-string hashes need the regex module
        _PARSER = Lark(rust_grammar, parser='lalr', lexer='basic', regex=True)
    return _PARSER


class TokenTreeBuilder(Transformer):
    """Converts the Lark parse tree into Tok and Group nodes."""

    def start(self, items):
        return list(items)

    def brace_group(self, items):
        return self._group("{", items)

    def paren_group(self, items):
        return self._group("(", items)

    def bracket_group(self, items):
        return self._group("[", items)

    def _group(self, delim, items):
        opener, *children, closer = items
        return Group(
            delim,
            children,
            start=opener.start_pos,
            end=closer.end_pos,
            close_start=closer.start_pos,
            line=opener.line,
            column=opener.column,
        )

    @staticmethod
    def _tok(kind, token):
        return Tok(kind, str(token), token.start_pos, token.end_pos, token.line, token.column)

    def IDENT(self, t): return self._tok(IDENT, t)
    def PUNCT(self, t): return self._tok(PUNCT, t)
    def LIFETIME(self, t): return self._tok(LIFETIME, t)
    def DOC_COMMENT(self, t): return self._tok(DOC, t)
    def STRING(self, t): return self._tok(LITERAL, t)
    def RAW_STRING(self, t): return self._tok(LITERAL, t)
    def CHAR(self, t): return self._tok(LITERAL, t)
    def NUMBER(self, t): return self._tok(LITERAL, t)


def _strip_preamble(text):
    """Blank out a byte-order mark and a leading shebang line."""
    if text.startswith("\ufeff"):
        text = text[1:]
    if text.startswith("#!") and not text[2:].lstrip().startswith("["):
        newline = text.find("\n")
        if newline == -1:
            return ""
        # Keep offsets stable so reported columns still match the file
        text = " " * newline + text[newline:]
    return text


def _mark_spacing(nodes, prev_end):
    for node in nodes:
        node.spaced = node.start > prev_end
        if isinstance(node, Group):
            inner_end = _mark_spacing(node.children, node.start + 1)
            node.close_spaced = node.close_start > inner_end
        prev_end = node.end
    return prev_end


def _describe(error, text):
    if isinstance(error, UnexpectedCharacters):
        if text.startswith("/*", error.pos_in_stream):
            return "Unterminated block comment"
        return f"Unexpected character {text[error.pos_in_stream]!r}"
    if isinstance(error, UnexpectedEOF):
        return "Unexpected end of file (unclosed delimiter)"
    if isinstance(error, UnexpectedToken):
        if error.token.type == "$END":
            return "Unexpected end of file (unclosed delimiter)"
        return f"Unexpected {str(error.token)!r}"
    return "Syntax error"


def parse_source(text, origin="<input>"):
    """
    Parse Rust source text into a list of token trees.

    Args:
        text: The file contents
        origin: Path or label used in error reports

    Returns:
        List of Tok/Group nodes, in source order

    Raises:
        ParseError: If the text has unbalanced delimiters or unlexable characters
    """
    text = _strip_preamble(text)
    try:
        tree = get_parser().parse(text)
    except UnexpectedInput as e:
        line = getattr(e, "line", None)
        line_number = line if isinstance(line, int) and line > 0 else None
        column = e.column if line_number else None
        raise ParseError(
            message=_describe(e, text),
            path=origin,
            line_number=line_number,
            column=column,
            context=get_line_context(text, line_number),
            suggestion=detect_delimiter_problems(text) or "Check syntax around this line",
        )
    nodes = TokenTreeBuilder().transform(tree)
    _mark_spacing(nodes, 0)
    return nodes


# ==========================================
# MODULE ITEMS
# ==========================================

_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", "\\": "\\", '"': '"', "'": "'"}
_ESCAPE_RE = re.compile(r'\\(u\{[0-9a-fA-F_]+\}|x[0-9a-fA-F]{2}|\n\s*|.)')


def _unescape(match):
    seq = match.group(1)
    if seq.startswith("u{"):
        return chr(int(seq[2:-1].replace("_", ""), 16))
    if seq.startswith("x") and len(seq) == 3:
        return chr(int(seq[1:], 16))
    if seq.startswith("\n"):
        return ""
    return _SIMPLE_ESCAPES.get(seq, seq)


def literal_string_value(text):
    """Value of a plain or raw string literal token; None for other literals."""
    if text.startswith('r"') or text.startswith("r#"):
        body = text[1:]
        hashes = len(body) - len(body.lstrip("#"))
        return body[hashes + 1:len(body) - hashes - 1]
    if text.startswith('"') and text.endswith('"') and len(text) >= 2:
        return _ESCAPE_RE.sub(_unescape, text[1:-1])
    return None


def path_attribute(attribute):
    """Return the value of a `#[path = "..."]` bracket group, else None."""
    children = attribute.children
    if len(children) != 3:
        return None
    key, eq, value = children
    if not (is_ident(key, "path") and is_punct(eq, "=")):
        return None
    if not (isinstance(value, Tok) and value.kind == LITERAL):
        return None
    return literal_string_value(value.text)


class ModuleItem:
    """A `mod` item found in a token sequence, located by node indices."""

    def __init__(self, start, keyword, name_tok, terminator, attributes, visibility):
        self.start = start
        self.keyword = keyword
        self.name_tok = name_tok
        self.terminator = terminator
        self.attributes = attributes
        self.visibility = visibility

    @property
    def name(self):
        return self.name_tok.text

    @property
    def tail(self):
        """Index of the `;` or body group."""
        return self.keyword + 2

    @property
    def body(self):
        return self.terminator if is_group(self.terminator, "{") else None

    @property
    def is_inline(self):
        return self.body is not None

    @property
    def path_override(self):
        for attribute in self.attributes:
            value = path_attribute(attribute)
            if value is not None:
                return value
        return None

    def to_declaration(self, declaring_file):
        return ModuleDeclaration(
            name=self.name,
            path_override=self.path_override,
            attributes=[f"#[{render_inline(a.children)}]" for a in self.attributes],
            visibility=render_inline(self.visibility) if self.visibility else None,
            declaring_file=declaring_file,
            line=self.name_tok.line,
            column=self.name_tok.column,
        )


def _at_item_boundary(nodes, start):
    if start == 0:
        return True
    prev = nodes[start - 1]
    if is_punct(prev, ";") or is_group(prev, "{") or is_inner_doc(prev):
        return True
    return is_inner_attribute(nodes, start - 1)


def scan_modules(nodes):
    """
    Find the module items of one module scope.

    Only the given sequence is scanned; bodies of inline modules are scanned
    by the caller when it descends into them.
    """
    items = []
    for index, node in enumerate(nodes):
        if not is_ident(node, "mod") or index + 2 >= len(nodes):
            continue
        name_tok, terminator = nodes[index + 1], nodes[index + 2]
        if not is_ident(name_tok):
            continue
        if not (is_punct(terminator, ";") or is_group(terminator, "{")):
            continue

        start = index
        visibility = []
        if start >= 2 and is_group(nodes[start - 1], "(") and is_ident(nodes[start - 2], "pub"):
            visibility = nodes[start - 2:start]
            start -= 2
        elif start >= 1 and is_ident(nodes[start - 1], "pub"):
            visibility = nodes[start - 1:start]
            start -= 1

        attributes = []
        while True:
            if start >= 2 and is_group(nodes[start - 1], "[") and is_punct(nodes[start - 2], "#"):
                attributes.insert(0, nodes[start - 1])
                start -= 2
            elif start >= 1 and is_doc(nodes[start - 1]) and not is_inner_doc(nodes[start - 1]):
                start -= 1
            else:
                break

        if not _at_item_boundary(nodes, start):
            continue
        items.append(ModuleItem(start, index, name_tok, terminator, attributes, visibility))
    return items
