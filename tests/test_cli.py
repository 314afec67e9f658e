"""Tests for the CLI module."""

from __future__ import annotations

from pathlib import Path

import pytest

from flt2html.cli import main

FIXTURE_DIR = Path(__file__).parent / "fixtures"
SAMPLE_JSON = FIXTURE_DIR / "sample.json"


class TestCLIMain:
    """Test the main() entry point."""

    def test_missing_input(self):
        with pytest.raises(SystemExit):
            main([])

    def test_file_not_found(self, capsys):
        ret = main(["nonexistent.json"])
        assert ret == 1
        err = capsys.readouterr().err
        assert "not found" in err

    def test_convert_sample(self, tmp_path, capsys):
        if not SAMPLE_JSON.exists():
            pytest.skip("sample.json fixture not found")
        out = tmp_path / "output.html"
        ret = main([str(SAMPLE_JSON), "-o", str(out)])
        assert ret == 0
        assert out.exists()
        assert out.stat().st_size > 0

    def test_verbose_flag(self, tmp_path, capsys):
        if not SAMPLE_JSON.exists():
            pytest.skip("sample.json fixture not found")
        out = tmp_path / "output.html"
        ret = main([str(SAMPLE_JSON), "-o", str(out), "-v"])
        assert ret == 0
        stdout = capsys.readouterr().out
        assert "Input:" in stdout
        assert "Output:" in stdout
        assert "Done." in stdout

    def test_default_output_name(self, tmp_path, capsys):
        src = tmp_path / "myfile.json"
        src.write_text('[{"text": "Test"}]', encoding="utf-8")
        ret = main([str(src)])
        assert ret == 0
        assert (tmp_path / "myfile.html").exists()

    def test_body_only_and_classes(self, tmp_path, capsys):
        src = tmp_path / "doc.json"
        src.write_text('[{"type": "section"}, {"text": "Hi"}]', encoding="utf-8")
        out = tmp_path / "doc.html"
        ret = main([str(src), "-o", str(out), "--body-only", "--no-pretty"])
        assert ret == 0
        assert out.read_text(encoding="utf-8") == "<section><p>Hi</p></section>"

    def test_stylesheet_and_body_class(self, tmp_path, capsys):
        src = tmp_path / "doc.json"
        src.write_text('[{"text": "Hi"}]', encoding="utf-8")
        out = tmp_path / "doc.html"
        ret = main([
            str(src), "-o", str(out),
            "--stylesheet", "site.css", "--body-class", "story",
        ])
        assert ret == 0
        html = out.read_text(encoding="utf-8")
        assert 'href="site.css"' in html
        assert 'class="story"' in html

    def test_render_error(self, tmp_path, capsys):
        src = tmp_path / "bad.json"
        src.write_text('[{"type": "destination", "destination": "cell"}]', encoding="utf-8")
        ret = main([str(src)])
        assert ret == 1
        assert "no table is defined" in capsys.readouterr().err
