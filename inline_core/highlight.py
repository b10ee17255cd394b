"""
Terminal syntax highlighting for Rust text.

Highlighting only adds ANSI escape sequences around tokens; removing them
gives back the input byte for byte.
"""
from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import RustLexer
from pygments.styles import get_all_styles, get_style_by_name
from pygments.util import ClassNotFound

from inline_core.errors import UnknownTheme


def available_themes():
    return sorted(get_all_styles())


def resolve_theme(name):
    """Return the style class for a theme name."""
    try:
        return get_style_by_name(name)
    except ClassNotFound:
        raise UnknownTheme(
            f"Unknown theme: {name}",
            suggestion="Run with --list-themes to see the available names",
        )


def colorize(text, theme):
    style = resolve_theme(theme)
    lexer = RustLexer(stripnl=False, ensurenl=False)
    return highlight(text, lexer, Terminal256Formatter(style=style))
