"""
Unit tests for cargo-script assembly.
"""
from inline_core.config import DEFAULT_SHEBANG, SHEBANG_ENV_VAR
from inline_core.models import ManifestDescriptor
from inline_core.manifest import empty_manifest
from inline_core.script import build_manifest_segment, build_script, get_shebang

BODY = 'fn main() {}\n'


class TestBuildScript:
    """Layout of the script artifact."""

    def test_empty_manifest_layout(self, monkeypatch):
        monkeypatch.delenv(SHEBANG_ENV_VAR, raising=False)
        script = build_script(BODY, empty_manifest())
        assert script == (
            f'{DEFAULT_SHEBANG}\n'
            '---cargo\n'
            '[dependencies]\n'
            '---\n'
            '\n'
            'fn main() {}\n'
        )

    def test_manifest_text_is_verbatim(self):
        text = '[dependencies]\nregex = { version = "1", default-features = false }\n'
        script = build_script(BODY, ManifestDescriptor(text=text), shebang='#!x')
        assert script == '#!x\n---cargo\n' + text + '---\n\n' + BODY

    def test_missing_trailing_newline_is_added(self):
        segment = build_manifest_segment(ManifestDescriptor(text='[dependencies]'), shebang='#!x')
        assert segment == '#!x\n---cargo\n[dependencies]\n---\n\n'


class TestShebang:
    """The shebang line and its environment override."""

    def test_default(self, monkeypatch):
        monkeypatch.delenv(SHEBANG_ENV_VAR, raising=False)
        assert get_shebang() == DEFAULT_SHEBANG

    def test_override(self, monkeypatch):
        monkeypatch.setenv(SHEBANG_ENV_VAR, '#!/usr/bin/env cargo +nightly -Zscript\n')
        assert get_shebang() == '#!/usr/bin/env cargo +nightly -Zscript'
        assert build_script(BODY, empty_manifest()).startswith('#!/usr/bin/env cargo +nightly -Zscript\n---cargo\n')

    def test_empty_override_means_default(self, monkeypatch):
        monkeypatch.setenv(SHEBANG_ENV_VAR, '')
        assert get_shebang() == DEFAULT_SHEBANG
