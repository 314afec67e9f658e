"""Integration tests for the Converter orchestrator."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from flt2html.converter import Converter
from flt2html.exceptions import ParsingError, RenderingError
from flt2html.options import RenderOptions

FIXTURE_DIR = Path(__file__).parent / "fixtures"
SAMPLE_JSON = FIXTURE_DIR / "sample.json"


class TestConverterInit:
    """Test Converter construction."""

    def test_default_options(self):
        c = Converter()
        assert c.options == RenderOptions()

    def test_custom_options(self):
        c = Converter(RenderOptions(body_only=True))
        assert c.renderer.options.body_only is True


class TestConvertText:
    """Test convert_text produces HTML."""

    def test_simple_document(self):
        c = Converter()
        html = c.convert_text('[{"type": "section"}, {"text": "Hello", "bold": true}]')
        assert html.startswith("<!DOCTYPE html>")
        assert "<strong>Hello</strong>" in html

    def test_empty_stream(self):
        c = Converter(RenderOptions(body_only=True))
        assert c.convert_text("[]") == ""

    def test_text_is_escaped(self):
        c = Converter(RenderOptions(pretty=False))
        html = c.convert_text(json.dumps([{"text": "a < b & c"}]))
        assert "a &lt; b &amp; c" in html

    def test_unicode_preserved(self):
        c = Converter()
        html = c.convert_text(json.dumps([{"text": "한글 본문입니다."}]))
        assert "한글 본문입니다." in html

    def test_parse_error_propagates(self):
        with pytest.raises(ParsingError):
            Converter().convert_text("not json")

    def test_render_error_propagates(self):
        with pytest.raises(RenderingError, match="No image content available"):
            Converter().convert_text('[{"type": "image"}]')


class TestSampleFixture:
    """Render the sample fixture that uses every line type."""

    @pytest.fixture
    def html(self):
        if not SAMPLE_JSON.exists():
            pytest.skip("sample.json fixture not found")
        c = Converter(RenderOptions(pretty=False))
        return c.convert_text(SAMPLE_JSON.read_text(encoding="utf-8"))

    def test_head(self, html):
        assert "<title>A Sample, Story</title>" in html
        assert 'content="First Author"' in html
        assert 'content="Second Author"' in html
        assert 'property="og:article:published_time"' in html

    def test_body_structure(self, html):
        assert '<section><h2>Chapter One</h2></section><hr><section class="align-center">' in html
        assert "<em><strong>dark</strong></em>" in html
        assert "night.<br>The rain fell." in html

    def test_link_and_reset(self, html):
        assert (
            '<a href="https://example.com/" title="Go to the example">'
            '<span class="underline">a link</span></a> after the link'
        ) in html

    def test_note_and_image(self, html):
        assert 'href="#note-1"' in html
        assert 'href="#note-return-1"' in html
        assert 'src="data:image/png;base64,iVBORw0KGgo="' in html

    def test_table(self, html):
        assert "<tr><th>Name</th><th>Value</th></tr>" in html
        assert '<tr><td>x</td><td><span class="monospace">1</span></td></tr>' in html


class TestConvertFile:
    """Test file-based conversion."""

    def test_convert_sample_fixture(self, tmp_path):
        if not SAMPLE_JSON.exists():
            pytest.skip("sample.json fixture not found")
        out = tmp_path / "output.html"
        Converter().convert_file(SAMPLE_JSON, out)
        assert out.exists()
        assert out.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")

    def test_output_directory_created(self, tmp_path):
        src = tmp_path / "in.json"
        src.write_text('[{"text": "x"}]', encoding="utf-8")
        out = tmp_path / "nested" / "dir" / "out.html"
        Converter().convert_file(src, out)
        assert out.exists()
