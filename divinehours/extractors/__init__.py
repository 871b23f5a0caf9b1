"""Extraction sub-package: pure, regex-driven stages of the office pipeline."""

from .citation import extract_citation
from .container import isolate_main_content
from .entities import decode_entities
from .header import Header, extract_header
from .normalize import PROSE_SECTIONS, is_prose_section, normalize_content
from .sections import RawSection, extract_section_fields, split_sections

__all__ = [
    "Header",
    "PROSE_SECTIONS",
    "RawSection",
    "decode_entities",
    "extract_citation",
    "extract_header",
    "extract_section_fields",
    "is_prose_section",
    "isolate_main_content",
    "normalize_content",
    "split_sections",
]
