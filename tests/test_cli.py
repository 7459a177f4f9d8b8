"""Tests for the jack-analyze and jack-tokenize entry points."""

import logging

import pytest

from jack_analyzer.cli import analyze_main, token_output_path, tokenize_main, tree_output_path


class TestOutputPaths:
    def test_tree_output(self, tmp_path):
        assert tree_output_path(tmp_path / "Square.jack") == tmp_path / "Square.xml"

    def test_token_output(self, tmp_path):
        assert token_output_path(tmp_path / "Square.jack") == tmp_path / "SquareT.xml"


class TestAnalyze:
    def test_writes_parse_tree(self, jack_file, capsys):
        assert analyze_main([str(jack_file)]) == 0

        out = jack_file.with_suffix(".xml")
        text = out.read_text()
        assert text.startswith("<class>\n")
        assert text.endswith("</class>\n")
        assert str(out) in capsys.readouterr().out

    def test_wrong_extension(self, tmp_path, capsys):
        src = tmp_path / "Main.txt"
        src.write_text("class Main { }")
        assert analyze_main([str(src)]) == 1
        assert "Error" in capsys.readouterr().out
        assert not (tmp_path / "Main.xml").exists()

    def test_missing_file(self, tmp_path, capsys):
        assert analyze_main([str(tmp_path / "Nope.jack")]) == 1
        assert "Error" in capsys.readouterr().out

    def test_no_arguments(self):
        with pytest.raises(SystemExit) as exc:
            analyze_main([])
        assert exc.value.code == 2

    def test_too_many_arguments(self, jack_file):
        with pytest.raises(SystemExit) as exc:
            analyze_main([str(jack_file), str(jack_file)])
        assert exc.value.code == 2

    def test_syntax_error_writes_nothing(self, tmp_path, capsys):
        src = tmp_path / "Bad.jack"
        src.write_text("class { }")
        assert analyze_main([str(src)]) == 1
        assert "expected identifier" in capsys.readouterr().out
        assert not (tmp_path / "Bad.xml").exists()

    def test_lexical_error_writes_nothing(self, tmp_path, capsys):
        src = tmp_path / "Bad.jack"
        src.write_text('class Bad { function void f() { do g("oops); } }')
        assert analyze_main([str(src)]) == 1
        assert "unterminated string" in capsys.readouterr().out
        assert not (tmp_path / "Bad.xml").exists()

    def test_error_reported_once(self, tmp_path, capsys, caplog):
        src = tmp_path / "Bad.jack"
        src.write_text("class { }")
        assert analyze_main([str(src)]) == 1
        captured = capsys.readouterr()
        assert (captured.out + captured.err).count("expected identifier") == 1
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    def test_undecodable_source(self, tmp_path, capsys):
        src = tmp_path / "Bad.jack"
        src.write_bytes(b"class Bad { \xff }")
        assert analyze_main([str(src)]) == 1
        out = capsys.readouterr().out
        assert out.startswith("Error:")
        assert "decode" in out
        assert not (tmp_path / "Bad.xml").exists()

    def test_deep_nesting_writes_nothing(self, tmp_path, capsys):
        src = tmp_path / "Deep.jack"
        depth = 5000
        body = "(" * depth + "1" + ")" * depth
        src.write_text(f"class Deep {{ function int f() {{ return {body}; }} }}")
        assert analyze_main([str(src)]) == 1
        assert "nesting too deep" in capsys.readouterr().out
        assert not (tmp_path / "Deep.xml").exists()


class TestTokenize:
    def test_writes_token_list(self, jack_file, capsys):
        assert tokenize_main([str(jack_file)]) == 0

        out = jack_file.with_name("MainT.xml")
        lines = out.read_text().splitlines()
        assert lines[0] == "<tokens>"
        assert lines[1] == "<keyword> class </keyword>"
        assert lines[-1] == "</tokens>"
        assert "MainT.xml" in capsys.readouterr().out

    def test_tokenizer_mode_ignores_grammar(self, tmp_path):
        """Token mode only needs valid tokens, not a valid class."""
        src = tmp_path / "Frag.jack"
        src.write_text("let x = 1 ; ; }")
        assert tokenize_main([str(src)]) == 0
        assert (tmp_path / "FragT.xml").exists()

    def test_lexical_error(self, tmp_path):
        src = tmp_path / "Bad.jack"
        src.write_text("let x = 40000;")
        assert tokenize_main([str(src)]) == 1
        assert not (tmp_path / "BadT.xml").exists()

    def test_undecodable_source(self, tmp_path, capsys):
        src = tmp_path / "Bad.jack"
        src.write_bytes(b"class Bad { \xff }")
        assert tokenize_main([str(src)]) == 1
        assert "Error" in capsys.readouterr().out
        assert not (tmp_path / "BadT.xml").exists()
