import io
import sys
from pathlib import Path
from typing import List

import pytest

from lisp_reader.cli import main


def run(monkeypatch, argv: List[str], stdin: str = ''):
    monkeypatch.setattr(sys, 'argv', ['lisp-reader'] + argv)
    monkeypatch.setattr(sys, 'stdin', io.StringIO(stdin))
    main()


def test_repl(monkeypatch, capsys):
    run(monkeypatch, ['repl'], "(1\n2)\n#z\n'a\n")
    out = capsys.readouterr().out
    assert out.startswith('> (1 2)\n> error: unknown sharp syntax')
    assert '> (quote a)\n' in out
    assert out.endswith('> \n')


def test_repl_is_default(monkeypatch, capsys):
    run(monkeypatch, [], '#t #(1 2)\n')
    assert capsys.readouterr().out == '> #t\n#(1 2)\n> \n'


def test_repl_prompt(monkeypatch, capsys):
    run(monkeypatch, ['repl', '--prompt', 'lisp> '], '(a . b)\n')
    assert capsys.readouterr().out == 'lisp> (a . b)\nlisp> \n'


def test_read_file(monkeypatch, capsys, fixture_sample_path: Path, fixture_sample_expected: List[str]):
    run(monkeypatch, ['read', str(fixture_sample_path)])
    assert capsys.readouterr().out.splitlines() == fixture_sample_expected


def test_read_stdin(monkeypatch, capsys):
    run(monkeypatch, ['read'], '1 "two"\n(3)\n')
    assert capsys.readouterr().out == '1\n"two"\n(3)\n'


def test_read_reports_errors(monkeypatch, capsys, tmp_path: Path):
    path = tmp_path / 'broken.scm'
    path.write_text('(a #z)\n(b)\n(c\n')
    run(monkeypatch, ['read', str(path)])
    captured = capsys.readouterr()
    assert captured.out == '(b)\n'
    assert 'error: unknown sharp syntax' in captured.err
    assert 'unterminated datum' in captured.err


def test_read_strict(monkeypatch, tmp_path: Path):
    path = tmp_path / 'broken.scm'
    path.write_text('#z\n')
    with pytest.raises(SystemExit) as e:
        run(monkeypatch, ['read', '--strict', str(path)])
    assert e.value.code == 1


def test_read_missing_file(monkeypatch, capsys, tmp_path: Path):
    run(monkeypatch, ['read', str(tmp_path / 'missing.scm')])
    assert 'No such file' in capsys.readouterr().err


def test_read_final_atom_without_newline(monkeypatch, capsys):
    run(monkeypatch, ['read'], '(a) b')
    captured = capsys.readouterr()
    assert captured.out == '(a)\nb\n'
    assert captured.err == ''


def test_read_final_error_without_newline(monkeypatch, capsys):
    with pytest.raises(SystemExit) as e:
        run(monkeypatch, ['read', '--strict'], '1 .')
    captured = capsys.readouterr()
    assert captured.out == '1\n'
    assert '<stdin>: error:' in captured.err
    assert e.value.code == 1


def test_read_undecodable_file(monkeypatch, capsys, tmp_path: Path):
    path = tmp_path / 'latin1.scm'
    path.write_bytes(b'(a)\n"\xff\xfe"\n')
    good = tmp_path / 'good.scm'
    good.write_text('(b)\n')
    with pytest.raises(SystemExit) as e:
        run(monkeypatch, ['read', '--strict', str(path), str(good)])
    captured = capsys.readouterr()
    assert f'Cannot read \'{path}\'' in captured.err
    assert captured.out.endswith('(b)\n')
    assert e.value.code == 1
