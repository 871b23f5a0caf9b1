"""Unit tests for the individual extraction stages."""

from __future__ import annotations

import pytest

from conftest import CONTAINER_CLOSE, CONTAINER_OPEN, section_html

# ---------------------------------------------------------------------------
# Entity decoding
# ---------------------------------------------------------------------------

class TestDecodeEntities:
    @pytest.mark.parametrize(
        ("entity", "char"),
        [
            ("&nbsp;", " "),
            ("&quot;", '"'),
            ("&ldquo;", '"'),
            ("&rdquo;", '"'),
            ("&lsquo;", "'"),
            ("&rsquo;", "'"),
            ("&apos;", "'"),
            ("&amp;", "&"),
            ("&#x27;", "'"),
            ("&mdash;", "—"),
        ],
    )
    def test_known_entity(self, entity, char):
        from divinehours.extractors.entities import decode_entities

        assert decode_entities(f"a{entity}b") == f"a{char}b"

    def test_unknown_entity_left_alone(self):
        from divinehours.extractors.entities import decode_entities

        assert decode_entities("&hellip;") == "&hellip;"

    def test_escaped_apostrophe_decodes_fully(self):
        from divinehours.extractors.entities import decode_entities

        assert decode_entities("Lord&amp;#x27;s") == "Lord's"

    def test_does_not_trim(self):
        from divinehours.extractors.entities import decode_entities

        assert decode_entities("  x  ") == "  x  "


# ---------------------------------------------------------------------------
# Container isolation
# ---------------------------------------------------------------------------

class TestIsolateMainContent:
    def test_returns_region_inside_container(self):
        from divinehours.extractors.container import isolate_main_content

        html = f"<nav>menu</nav>{CONTAINER_OPEN}<h1>Office</h1>{CONTAINER_CLOSE}<footer>foot</footer>"
        assert isolate_main_content(html) == "<h1>Office</h1>"

    def test_whitespace_between_closing_tags(self):
        from divinehours.extractors.container import isolate_main_content

        html = (
            '<main><div><div><div><div class="p-2 max-w-4xl  mx-auto">\n<h1>X</h1>\n'
            "</div>\n  </div>\n</div>\n</div>\n</main>"
        )
        assert isolate_main_content(html) == "<h1>X</h1>"

    def test_missing_container_returns_input_unchanged(self):
        from divinehours.extractors.container import isolate_main_content

        html = "<html><body><h1>Office</h1></body></html>"
        assert isolate_main_content(html) == html

    def test_container_without_main_falls_back(self):
        from divinehours.extractors.container import isolate_main_content

        html = '<div class="max-w-4xl mx-auto"><h1>X</h1></div></div></div></div>'
        assert isolate_main_content(html) == html

    def test_empty_input(self):
        from divinehours.extractors.container import isolate_main_content

        assert isolate_main_content("") == ""


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------

class TestExtractHeader:
    def test_title_and_subtitle(self):
        from divinehours.extractors.header import extract_header

        header = extract_header('<h1 class="big"> Midday </h1>\n  <p class="sub">Prayers &amp; Psalms</p>')
        assert header.title == "Midday"
        assert header.subtitle == "Prayers & Psalms"

    def test_missing_title_uses_default(self):
        from divinehours.extractors.header import extract_header
        from divinehours.settings import DEFAULT_TITLE

        header = extract_header("<p>No heading here</p>")
        assert header.title == DEFAULT_TITLE
        assert header.subtitle == ""

    def test_subtitle_must_follow_heading(self):
        from divinehours.extractors.header import extract_header

        header = extract_header("<h1>Vespers</h1><div>x</div><p>Not a subtitle</p>")
        assert header.title == "Vespers"
        assert header.subtitle == ""

    def test_title_with_nested_markup_falls_back(self):
        from divinehours.extractors.header import extract_header
        from divinehours.settings import DEFAULT_TITLE

        header = extract_header("<h1><span>Compline</span></h1>")
        assert header.title == DEFAULT_TITLE

    def test_entities_decoded(self):
        from divinehours.extractors.header import extract_header

        header = extract_header("<h1>The Lord&rsquo;s Day</h1>")
        assert header.title == "The Lord's Day"


# ---------------------------------------------------------------------------
# Section splitting and fields
# ---------------------------------------------------------------------------

class TestSplitSections:
    def test_preamble_discarded(self):
        from divinehours.extractors.sections import split_sections

        region = "<h1>T</h1>" + section_html("One", "a") + section_html("Two", "b")
        chunks = split_sections(region)
        assert len(chunks) == 2
        assert "<h1>" not in chunks[0]
        assert "One" in chunks[0]
        assert "Two" in chunks[1]

    def test_no_marker_no_chunks(self):
        from divinehours.extractors.sections import split_sections

        assert split_sections("<h1>Only a title</h1>") == []


class TestExtractSectionFields:
    def test_title_subheader_and_blocks(self):
        from divinehours.extractors.sections import extract_section_fields

        chunk = section_html("The Psalm", "first", "second", subheader="Psalm 23")
        fields = extract_section_fields(chunk)
        assert fields is not None
        assert fields.title == "The Psalm"
        assert fields.subheader == "Psalm 23"
        assert fields.blocks == ["first", "second"]

    def test_raw_content_with_subheader(self):
        from divinehours.extractors.sections import RawSection

        raw = RawSection(title="T", subheader="Psalm 23", blocks=["a", "b"])
        assert raw.raw_content == "**Psalm 23**\n\na\n\nb"

    def test_raw_content_without_subheader(self):
        from divinehours.extractors.sections import RawSection

        raw = RawSection(title="T", subheader="", blocks=["a", "b"])
        assert raw.raw_content == "a\n\nb"

    def test_no_blocks(self):
        from divinehours.extractors.sections import extract_section_fields

        fields = extract_section_fields(section_html("Silence"))
        assert fields is not None
        assert fields.blocks == []
        assert fields.raw_content == ""

    def test_missing_heading_skipped(self):
        from divinehours.extractors.sections import extract_section_fields

        assert extract_section_fields(section_html("", "orphan")) is None

    def test_blank_heading_skipped(self):
        from divinehours.extractors.sections import extract_section_fields

        assert extract_section_fields(section_html("&nbsp;", "orphan")) is None

    def test_block_keeps_inner_markup(self):
        from divinehours.extractors.sections import extract_section_fields

        fields = extract_section_fields(section_html("T", "one<br/>two"))
        assert fields is not None
        assert fields.blocks == ["one<br/>two"]


# ---------------------------------------------------------------------------
# Content normalization
# ---------------------------------------------------------------------------

class TestNormalizeContent:
    def test_reflow_example(self):
        from divinehours.extractors.normalize import normalize_content

        assert normalize_content("Line one\nLine two\n\nLine three") == "Line one Line two\n\nLine three"

    def test_br_becomes_line_break_then_reflows(self):
        from divinehours.extractors.normalize import normalize_content

        assert normalize_content("a<br>b<br/><br />c") == "a b\n\nc"

    def test_tags_stripped(self):
        from divinehours.extractors.normalize import normalize_content

        assert normalize_content('<span class="x">Glory</span> be <em>to God</em>') == "Glory be to God"

    def test_entities_decoded(self):
        from divinehours.extractors.normalize import normalize_content

        assert normalize_content("&ldquo;Peace&rdquo; &amp; grace&mdash;always") == '"Peace" & grace—always'

    def test_excess_blank_lines_capped(self):
        from divinehours.extractors.normalize import normalize_content

        result = normalize_content("one\n\n\n\n\n\ntwo")
        assert result == "one\n\ntwo"
        assert "\n\n\n" not in result

    def test_lines_and_text_trimmed(self):
        from divinehours.extractors.normalize import normalize_content

        assert normalize_content("  \n\n  first  \n\n\t second \t\n\n  ") == "first\n\nsecond"

    def test_line_trim_is_horizontal_only(self):
        from divinehours.extractors.normalize import normalize_content

        assert normalize_content("first\n\n\x0bsecond \t") == "first\n\n\x0bsecond"

    def test_carriage_returns_treated_as_newlines(self):
        from divinehours.extractors.normalize import normalize_content

        assert normalize_content("a\r\nb\r\n\r\nc") == "a b\n\nc"

    def test_psalm_sections_collapse_like_prose(self):
        from divinehours.extractors.normalize import normalize_content

        raw = "The Lord is my shepherd;\nI shall not want."
        assert normalize_content(raw, "The Psalm") == normalize_content(raw, "A Reading")
        assert normalize_content(raw, "The Psalm") == "The Lord is my shepherd; I shall not want."

    def test_emphasis_markers_survive(self):
        from divinehours.extractors.normalize import normalize_content

        assert normalize_content("**Psalm 23**\n\nThe Lord") == "**Psalm 23**\n\nThe Lord"

    def test_empty(self):
        from divinehours.extractors.normalize import normalize_content

        assert normalize_content("") == ""


class TestIsProseSection:
    @pytest.mark.parametrize(
        "title",
        [
            "A Reading",
            "a reading from the gospel",
            "The Prayer Appointed for the Week",
            "THE CONCLUDING PRAYER OF THE CHURCH",
            "The Collect for Purity",
        ],
    )
    def test_prose_titles(self, title):
        from divinehours.extractors.normalize import is_prose_section

        assert is_prose_section(title)

    @pytest.mark.parametrize("title", ["The Psalm", "The Hymn", "The Call to Prayer", ""])
    def test_other_titles(self, title):
        from divinehours.extractors.normalize import is_prose_section

        assert not is_prose_section(title)


# ---------------------------------------------------------------------------
# Citations
# ---------------------------------------------------------------------------

class TestExtractCitation:
    def test_citation_merge(self):
        from divinehours.extractors.citation import extract_citation

        chunk = section_html("T", "x", citations=("— Ps. 1", "— Ps. 2"))
        assert extract_citation(chunk) == "— Ps. 1 | Ps. 2"

    def test_single_citation(self):
        from divinehours.extractors.citation import extract_citation

        assert extract_citation(section_html("T", citations=("Psalm 95:1",))) == "— Psalm 95:1"

    @pytest.mark.parametrize("prefix", ["—", "–", "-", "--", "— "])
    def test_leading_dashes_stripped(self, prefix):
        from divinehours.extractors.citation import extract_citation

        chunk = section_html("T", citations=(f"{prefix}John 3:16",))
        assert extract_citation(chunk) == "— John 3:16"

    def test_mdash_entity_and_comment_artifacts_removed(self):
        from divinehours.extractors.citation import extract_citation

        chunk = section_html("T", citations=("&mdash;<!-- --> Isaiah 40:31",))
        assert extract_citation(chunk) == "— Isaiah 40:31"

    def test_markup_and_newlines_flattened(self):
        from divinehours.extractors.citation import extract_citation

        chunk = section_html("T", citations=("— <em>The Book of\nCommon Prayer</em> &amp; Psalter",))
        assert extract_citation(chunk) == "— The Book of Common Prayer & Psalter"

    def test_empty_fragments_dropped(self):
        from divinehours.extractors.citation import extract_citation

        chunk = section_html("T", citations=("—", "  ", "— Ps. 3"))
        assert extract_citation(chunk) == "— Ps. 3"

    def test_dash_after_leading_whitespace_stripped(self):
        from divinehours.extractors.citation import extract_citation

        chunk = section_html("T", citations=("\n  — Ps. 1\n",))
        assert extract_citation(chunk) == "— Ps. 1"

    def test_no_citation(self):
        from divinehours.extractors.citation import extract_citation

        assert extract_citation(section_html("T", "body")) is None

    def test_only_empty_fragments_is_none(self):
        from divinehours.extractors.citation import extract_citation

        assert extract_citation(section_html("T", citations=("&mdash;",))) is None

    def test_other_paragraphs_ignored(self):
        from divinehours.extractors.citation import extract_citation

        chunk = '<p class="text-sm text-gray-500">not italic</p><p class="italic">not muted</p>'
        assert extract_citation(chunk) is None
