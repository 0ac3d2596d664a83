"""
Pytest configuration and fixtures for the cut tests.
"""

import io
import os
import sys

import pytest

# The tools live as flat modules in python/, not in an installed package.
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'python'))


@pytest.fixture
def run_cut(monkeypatch, capsys):
    """Runs cut's main() with the given arguments and stdin, returning (status, out, err)."""
    import cut

    def _run(*argv, stdin=b''):
        monkeypatch.setattr(sys, 'argv', ['cut', *argv])
        monkeypatch.setattr(sys, 'stdin', io.TextIOWrapper(io.BytesIO(stdin)))
        with pytest.raises(SystemExit) as exc_info:
            cut.main()
        captured = capsys.readouterr()
        return exc_info.value.code, captured.out, captured.err

    return _run


@pytest.fixture
def movies_file(tmp_path):
    """A small tab-separated file with a header row."""
    path = tmp_path / "movies.tsv"
    path.write_bytes(
        "Author\tYear\tTitle\n"
        "Émile Zola\t1865\tLa Confession de Claude\n"
        "Samuel Beckett\t1952\tEn attendant Godot\n".encode('utf-8')
    )
    return path
