"""
Unit tests for terminal highlighting.
"""
import re

import pytest

from inline_core.errors import UnknownTheme
from inline_core.highlight import available_themes, colorize, resolve_theme

ANSI_RE = re.compile(r'\x1b\[[0-9;]*m')

SOURCE = 'pub fn main() {\n    let s = "hi";\n    println!("{}", s);\n}\n'


class TestThemes:
    def test_default_theme_is_available(self):
        assert 'monokai' in available_themes()

    def test_themes_sorted(self):
        themes = available_themes()
        assert themes == sorted(themes)

    def test_unknown_theme(self):
        with pytest.raises(UnknownTheme) as exc_info:
            resolve_theme('no-such-theme')
        assert 'no-such-theme' in exc_info.value.message


class TestColorize:
    def test_adds_escapes(self):
        assert '\x1b[' in colorize(SOURCE, 'monokai')

    def test_stripping_escapes_gives_input_back(self):
        assert ANSI_RE.sub('', colorize(SOURCE, 'monokai')) == SOURCE

    def test_unknown_theme_raises(self):
        with pytest.raises(UnknownTheme):
            colorize(SOURCE, 'no-such-theme')
