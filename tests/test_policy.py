"""
Unit tests for the output policy table and artifact writing.
"""
import os

import pytest
from pydantic import ValidationError

from inline_core.config import DEFAULT_SHEBANG, SHEBANG_ENV_VAR, InlineConfig, ManifestMode
from inline_core.errors import StdoutWithoutZscript, UnknownTheme
from inline_core.manifest import empty_manifest
from inline_core.models import Outcome, TargetKind
from inline_core.policy import POLICY_TABLE, assemble_artifact, decide, plan_output, write_artifact
from inline_core.script import build_script

BODY = 'fn main() {}\n'


@pytest.fixture(autouse=True)
def default_shebang(monkeypatch):
    monkeypatch.delenv(SHEBANG_ENV_VAR, raising=False)


class TestDecide:
    """Tests for the policy table lookup."""

    def test_table_is_total(self):
        assert len(POLICY_TABLE) == 8
        for kind in TargetKind:
            for zscript in (False, True):
                for color in (False, True):
                    assert (kind, zscript, color) in POLICY_TABLE

    @pytest.mark.parametrize('color', [False, True])
    def test_stdout_without_zscript_rejected(self, color):
        with pytest.raises(StdoutWithoutZscript):
            decide(TargetKind.STDOUT, False, color)

    def test_stdout_script_colored(self):
        assert decide(TargetKind.STDOUT, True, True) is Outcome.SCRIPT_COLORED_BODY
        assert decide(TargetKind.STDOUT, True, False) is Outcome.SCRIPT_PLAIN

    def test_file_never_colored(self):
        assert decide(TargetKind.FILE, False, True) is Outcome.SOURCE_PLAIN
        assert decide(TargetKind.FILE, True, True) is Outcome.SCRIPT_PLAIN


class TestPlanOutput:
    """Tests for plan_output()."""

    def test_stdout_without_zscript(self, tmp_path):
        with pytest.raises(StdoutWithoutZscript):
            plan_output(InlineConfig(input=tmp_path / 'main.rs'))

    def test_file_target_ignores_unknown_theme(self, tmp_path):
        config = InlineConfig(input=tmp_path / 'main.rs', output=tmp_path / 'out.rs', theme='no-such-theme')
        target = plan_output(config)
        assert target.kind is TargetKind.FILE
        assert not target.colorize_body
        assert target.theme is None

    def test_stdout_colored_script(self, tmp_path):
        config = InlineConfig(input=tmp_path / 'main.rs', manifest_mode=ManifestMode.EMPTY)
        target = plan_output(config)
        assert target.colorize_body
        assert target.theme == 'monokai'

    def test_stdout_colored_script_unknown_theme(self, tmp_path):
        config = InlineConfig(input=tmp_path / 'main.rs', manifest_mode=ManifestMode.EMPTY, theme='no-such-theme')
        with pytest.raises(UnknownTheme):
            plan_output(config)

    def test_no_color_skips_theme_check(self, tmp_path):
        config = InlineConfig(
            input=tmp_path / 'main.rs',
            manifest_mode=ManifestMode.EMPTY,
            theme='no-such-theme',
            color=False,
        )
        assert plan_output(config).outcome is Outcome.SCRIPT_PLAIN


class TestAssembleArtifact:
    """Tests for assemble_artifact()."""

    def test_plain_source(self, tmp_path):
        target = plan_output(InlineConfig(input=tmp_path / 'main.rs', output=tmp_path / 'out.rs'))
        assert assemble_artifact(target, BODY) == BODY

    def test_file_script_is_plain(self, tmp_path):
        config = InlineConfig(input=tmp_path / 'main.rs', output=tmp_path / 'out.rs', manifest_mode=ManifestMode.EMPTY)
        artifact = assemble_artifact(plan_output(config), BODY, empty_manifest())
        assert artifact == f'{DEFAULT_SHEBANG}\n---cargo\n[dependencies]\n---\n\n{BODY}'

    def test_plain_script_is_the_assembled_script(self, tmp_path, monkeypatch):
        monkeypatch.setenv(SHEBANG_ENV_VAR, '#!/usr/bin/env cargo +nightly -Zscript')
        config = InlineConfig(input=tmp_path / 'main.rs', manifest_mode=ManifestMode.EMPTY, color=False)
        artifact = assemble_artifact(plan_output(config), BODY, empty_manifest())
        assert artifact == build_script(BODY, empty_manifest())
        assert artifact.startswith('#!/usr/bin/env cargo +nightly -Zscript\n---cargo\n')

    def test_stdout_colors_only_the_body(self, tmp_path):
        config = InlineConfig(input=tmp_path / 'main.rs', manifest_mode=ManifestMode.EMPTY)
        artifact = assemble_artifact(plan_output(config), BODY, empty_manifest())
        header, body = artifact.split('---\n\n', 1)
        assert '\x1b' not in header
        assert '\x1b[' in body


class TestWriteArtifact:
    """Tests for write_artifact()."""

    def test_writes_file_atomically(self, tmp_path):
        out = tmp_path / 'out.rs'
        target = plan_output(InlineConfig(input=tmp_path / 'main.rs', output=out))
        write_artifact(target, BODY)
        assert out.read_text(encoding='utf-8') == BODY
        assert os.listdir(tmp_path) == ['out.rs']

    def test_replaces_existing_file(self, tmp_path):
        out = tmp_path / 'out.rs'
        out.write_text('old contents\n', encoding='utf-8')
        target = plan_output(InlineConfig(input=tmp_path / 'main.rs', output=out))
        write_artifact(target, BODY)
        assert out.read_text(encoding='utf-8') == BODY

    def test_stdout(self, tmp_path, capsys):
        target = plan_output(InlineConfig(input=tmp_path / 'main.rs', manifest_mode=ManifestMode.EMPTY, color=False))
        write_artifact(target, BODY)
        assert capsys.readouterr().out == BODY


class TestInlineConfig:
    def test_explicit_mode_needs_path(self, tmp_path):
        with pytest.raises(ValidationError):
            InlineConfig(input=tmp_path / 'main.rs', manifest_mode=ManifestMode.EXPLICIT)

    def test_path_only_in_explicit_mode(self, tmp_path):
        with pytest.raises(ValidationError):
            InlineConfig(input=tmp_path / 'main.rs', manifest_path=tmp_path / 'Cargo.toml')

    def test_zscript(self, tmp_path):
        assert not InlineConfig(input=tmp_path / 'main.rs').zscript
        assert InlineConfig(input=tmp_path / 'main.rs', manifest_mode=ManifestMode.AUTO).zscript
