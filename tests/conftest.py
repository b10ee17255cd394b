"""
Shared fixtures for the inline-mod test suite.
"""
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture
def write_tree(tmp_path):
    """Write a {relative path: contents} mapping under tmp_path and return the root."""
    def _write(files):
        for rel_path, contents in files.items():
            path = tmp_path / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(contents, encoding='utf-8')
        return tmp_path
    return _write
