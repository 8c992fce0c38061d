"""
PDF Parser Core Module
"""
from .objects import (
    PDFName, PDFRef, PDFStream, Operator, ObjectEntry, ObjectTable,
    ValueKind, value_kind, value_to_string
)
from .parser import PDFLexer, PDFSyntaxError, parse_objects, parse_value
from .stream_decoder import (
    Inflater, InflateEnvironment, InflateResult, ENVIRONMENT,
    probe_environment, inflate, normalize_filters
)
from .document import (
    FormField, FIELD_TYPES, field_type, find_catalog, find_acroform, collect_acroform_fields,
    get_pages, get_page_streams
)
from .content_stream import (
    ContentStreamParser, TextItem, Section,
    parse_content_stream_text, build_headings_and_sections
)

__all__ = [
    # Objects
    'PDFName', 'PDFRef', 'PDFStream', 'Operator', 'ObjectEntry', 'ObjectTable',
    'ValueKind', 'value_kind', 'value_to_string',
    # Parser
    'PDFLexer', 'PDFSyntaxError', 'parse_objects', 'parse_value',
    # Stream Decoder
    'Inflater', 'InflateEnvironment', 'InflateResult', 'ENVIRONMENT',
    'probe_environment', 'inflate', 'normalize_filters',
    # Document
    'FormField', 'FIELD_TYPES', 'field_type', 'find_catalog', 'find_acroform', 'collect_acroform_fields',
    'get_pages', 'get_page_streams',
    # Content Stream
    'ContentStreamParser', 'TextItem', 'Section',
    'parse_content_stream_text', 'build_headings_and_sections',
]
