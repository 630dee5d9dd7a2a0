"""Unit tests for source map extraction and validation."""

import json

import pytest

from mapburst.core.errors import (
    CannotExtractSourceMapError,
    ErrorCode,
    InvalidSourceMapError,
    SourceMapHasNoSourcesContentError,
    SourceMapInDifferentFileError,
)
from mapburst.core.types import SourceMap
from mapburst.sourcemap import extract_sourcemap, find_sourcemap_reference, load_sourcemap


class TestExtractSourcemap:
    def test_extracts_from_js_comment(self):
        sourcemap = extract_sourcemap("\n//# sourceMappingURL=data:application/json;base64,eyJtYXBwaW5ncyI6IiJ9")
        assert sourcemap == {"mappings": ""}

    def test_extracts_from_css_comment(self):
        sourcemap = extract_sourcemap("\n/*# sourceMappingURL=data:application/json;base64,eyJtYXBwaW5ncyI6IiJ9*/")
        assert sourcemap == {"mappings": ""}

    def test_extracts_from_bytes(self, sourcemap, annotate):
        code = f"console.log(1)\n{annotate(sourcemap)}\n".encode("utf-8")
        assert extract_sourcemap(code) == sourcemap

    def test_accepts_charset_parameter(self):
        code = "//# sourceMappingURL=data:application/json;charset=utf-8;base64,eyJtYXBwaW5ncyI6IiJ9"
        assert extract_sourcemap(code) == {"mappings": ""}

    def test_no_comment(self):
        with pytest.raises(CannotExtractSourceMapError, match="no sourceMappingURL") as exc:
            extract_sourcemap("\n")
        assert exc.value.code == ErrorCode.CANNOT_EXTRACT_SOURCEMAP
        assert exc.value.matches == 0

    def test_too_many_comments(self, sourcemap, annotate):
        code = f"{annotate(sourcemap)}\n{annotate(sourcemap, block=True)}\n"
        with pytest.raises(CannotExtractSourceMapError, match="too many") as exc:
            extract_sourcemap(code)
        assert exc.value.matches == 2

    def test_comment_must_start_the_line(self):
        with pytest.raises(CannotExtractSourceMapError):
            extract_sourcemap("var a = '//# sourceMappingURL=foo.map'")

    def test_points_to_a_file(self):
        with pytest.raises(SourceMapInDifferentFileError, match="file") as exc:
            extract_sourcemap("\n/*# sourceMappingURL=file.map")
        assert exc.value.code == ErrorCode.SOURCEMAP_IN_DIFFERENT_FILE

    def test_trims_the_reference(self):
        with pytest.raises(SourceMapInDifferentFileError) as exc:
            extract_sourcemap("\n/*# sourceMappingURL=foo.map\n\n")
        assert exc.value.reference == "foo.map"

    def test_block_comment_reference_drops_terminator(self):
        with pytest.raises(SourceMapInDifferentFileError) as exc:
            extract_sourcemap("a{}\n/*# sourceMappingURL=style.css.map */")
        assert exc.value.reference == "style.css.map"

    def test_non_base64_data_url_is_treated_as_external(self):
        with pytest.raises(SourceMapInDifferentFileError):
            extract_sourcemap('//# sourceMappingURL=data:application/json,{"a":1}')

    def test_undecodable_payload(self):
        with pytest.raises(InvalidSourceMapError) as exc:
            extract_sourcemap("//# sourceMappingURL=data:application/json;base64,bm90IGpzb24=")
        assert exc.value.code == ErrorCode.INVALID_SOURCEMAP

    def test_find_reference(self):
        assert find_sourcemap_reference("x\n//# sourceMappingURL=app.js.map\n") == "app.js.map"


class TestLoadSourcemap:
    def test_accepts_mapping(self, sourcemap):
        loaded = load_sourcemap(sourcemap)
        assert isinstance(loaded, SourceMap)
        assert loaded.sources == sourcemap["sources"]
        assert loaded.sources_content == sourcemap["sourcesContent"]
        assert loaded.file == "foo.js"

    def test_accepts_json_text_and_bytes(self, sourcemap):
        text = json.dumps(sourcemap)
        assert load_sourcemap(text).sources == sourcemap["sources"]
        assert load_sourcemap(text.encode("utf-8")).sources == sourcemap["sources"]

    def test_keeps_unknown_keys(self, sourcemap):
        sourcemap["mappings"] = "AAAA"
        assert load_sourcemap(sourcemap).model_extra["mappings"] == "AAAA"

    @pytest.mark.parametrize("value", [None, 42, "not json", b"[1, 2]"])
    def test_rejects_non_objects(self, value):
        with pytest.raises(InvalidSourceMapError) as exc:
            load_sourcemap(value)
        assert isinstance(exc.value, TypeError)

    def test_rejects_missing_contents(self):
        with pytest.raises(SourceMapHasNoSourcesContentError) as exc:
            load_sourcemap({"sources": []})
        assert exc.value.code == ErrorCode.SOURCEMAP_HAS_NO_SOURCESCONTENT
        assert isinstance(exc.value, TypeError)

    def test_rejects_mismatched_lengths(self, sourcemap):
        sourcemap["sourcesContent"] = sourcemap["sourcesContent"][:1]
        with pytest.raises(SourceMapHasNoSourcesContentError):
            load_sourcemap(sourcemap)

    def test_rejects_null_entries(self, sourcemap):
        sourcemap["sourcesContent"][1] = None
        with pytest.raises(SourceMapHasNoSourcesContentError):
            load_sourcemap(sourcemap)

    def test_empty_map_is_valid(self):
        assert load_sourcemap({"sources": [], "sourcesContent": []}).sources == []

    def test_validated_sourcemap_passes_through(self, sourcemap):
        loaded = load_sourcemap(sourcemap)
        assert load_sourcemap(loaded) is loaded
