"""
LitForm - Lightweight PDF Form Parser

PDF 엔진 없이 순수 Python으로:
- AcroForm 필드 추출 (이름, 타입, 값)
- 폰트 크기로 제목/섹션 추정
- 프롬프트용 요약 생성

사용법:
    from litform import parse_pdf, to_prompt_summary

    result = parse_pdf(pdf_bytes)
    result = parse_pdf_file('form.pdf')

    print(result.raw_text)
    for f in result.form_fields:
        print(f.name, f.type, f.value)

    summary = to_prompt_summary(result)
    json_str = to_json(result)

제한: 암호화, XRef 스트림/Object 스트림, FlateDecode 외 필터 미지원
"""
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from .core import (
    ObjectTable, PDFName, PDFRef, PDFStream, PDFSyntaxError,
    Inflater, InflateEnvironment, ENVIRONMENT, inflate,
    FormField, TextItem, Section,
    parse_objects, find_catalog, find_acroform, collect_acroform_fields,
    get_pages, get_page_streams,
    parse_content_stream_text, build_headings_and_sections,
)

__version__ = '0.1.0'
__all__ = [
    # 통합 API
    'parse_pdf', 'parse_pdf_file', 'ParseResult',
    'to_prompt_summary', 'to_markdown', 'to_json', 'to_dict',
    # Core
    'ObjectTable', 'PDFName', 'PDFRef', 'PDFStream', 'PDFSyntaxError',
    'Inflater', 'InflateEnvironment', 'ENVIRONMENT', 'inflate',
    'FormField', 'TextItem', 'Section',
    'parse_objects', 'parse_content_stream_text', 'build_headings_and_sections',
]

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

SUMMARY_MAX_SECTIONS = 10
SUMMARY_MAX_CONTENT = 200


# =============================================================================
# ParseResult
# =============================================================================

@dataclass(frozen=True)
class ParseResult:
    """파싱 결과"""
    raw_text: str = ""
    titles: List[str] = field(default_factory=list)
    sections: List[Section] = field(default_factory=list)
    form_fields: List[FormField] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    page_count: int = 0

    def to_dict(self) -> dict:
        """외부 인터페이스 형태 (camelCase)"""
        fields = []
        for f in self.form_fields:
            item = {'name': f.name, 'type': f.type}
            if f.value is not None:
                item['value'] = f.value
            fields.append(item)

        return {
            'rawText': self.raw_text,
            'titles': list(self.titles),
            'sections': [{'title': s.title, 'content': s.content} for s in self.sections],
            'formFields': fields,
            'warnings': list(self.warnings),
            'pageCount': self.page_count,
        }


# =============================================================================
# parse_pdf()
# =============================================================================

def parse_pdf(data: Union[bytes, bytearray, memoryview],
              inflater: Optional[Inflater] = None) -> ParseResult:
    """
    PDF 바이트 파싱

    깨진 객체나 해제 실패는 예외 대신 warnings에 기록됨

    Args:
        data: PDF 데이터
        inflater: FlateDecode 어댑터 (기본: 환경 감지)

    Returns:
        ParseResult

    Raises:
        TypeError: 바이트로 다룰 수 없는 입력
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"PDF data must be bytes-like, got {type(data).__name__}")
    data = bytes(data)

    logger.debug("Starting PDF parsing (%d bytes)", len(data))
    table, warnings = parse_objects(data, inflater)

    # Catalog & AcroForm
    form_fields: List[FormField] = []
    catalog = find_catalog(table)
    if catalog:
        acroform = find_acroform(table, catalog[1])
        if acroform is not None:
            form_fields = collect_acroform_fields(table, acroform)
    else:
        logger.debug("No catalog found, skipping AcroForm extraction")

    # 페이지 텍스트
    text_items: List[TextItem] = []
    pages = get_pages(table)
    for page_num, page in enumerate(pages, 1):
        streams = get_page_streams(table, page)
        logger.debug("Processing page %d (%d content streams)", page_num, len(streams))
        for stream in streams:
            text_items.extend(parse_content_stream_text(stream.data))

    # 제목/섹션
    titles, sections = build_headings_and_sections(text_items)
    raw_text = '\n'.join(item.text for item in text_items)

    logger.debug(
        "Parsing complete: %d chars, %d titles, %d sections, %d fields, %d warnings",
        len(raw_text), len(titles), len(sections), len(form_fields), len(warnings)
    )

    return ParseResult(
        raw_text=raw_text,
        titles=titles,
        sections=sections,
        form_fields=form_fields,
        warnings=list(warnings),
        page_count=len(pages),
    )


def parse_pdf_file(filepath: Union[str, Path], inflater: Optional[Inflater] = None) -> ParseResult:
    """
    PDF 파일 파싱

    Example:
        result = parse_pdf_file('application.pdf')
    """
    with open(filepath, 'rb') as f:
        data = f.read()
    return parse_pdf(data, inflater=inflater)


# =============================================================================
# 출력 변환 함수
# =============================================================================

def to_prompt_summary(result: ParseResult,
                      max_sections: int = SUMMARY_MAX_SECTIONS,
                      max_content: int = SUMMARY_MAX_CONTENT) -> str:
    """
    프롬프트용 요약

    Title: A | B
    Sections:
    - 섹션 제목: 본문 (max_content자 초과 시 …)
    Form fields:
    - 이름 [타입] = 값
    """
    lines = []

    if result.titles:
        lines.append(f"Title: {' | '.join(result.titles)}")

    if result.sections:
        lines.append("Sections:")
        for s in result.sections[:max_sections]:
            content = s.content[:max_content] + ('…' if len(s.content) > max_content else '')
            lines.append(f"- {s.title}: {content}")

    if result.form_fields:
        lines.append("Form fields:")
        for f in result.form_fields:
            lines.append(f"- {f.name} [{f.type}]" + (f" = {f.value}" if f.value else ""))

    summary = "\n".join(lines)
    logger.debug("Generated summary: %d characters", len(summary))
    return summary


def to_markdown(result: ParseResult, filename: str = "") -> str:
    """
    ParseResult를 마크다운으로 변환

    Args:
        result: parse_pdf() 결과
        filename: 제목이 없을 때 쓸 파일명

    Returns:
        str: 마크다운 문자열
    """
    lines = []

    # 제목
    title = result.titles[0] if result.titles else (Path(filename).stem if filename else "Document")
    lines.append(f"# {title}")
    lines.append("")

    # 섹션
    for s in result.sections:
        lines.append(f"## {s.title}")
        lines.append("")
        if s.content:
            lines.append(s.content)
            lines.append("")

    # 폼 필드
    if result.form_fields:
        lines.append("## Form fields")
        lines.append("")
        lines.append("| Name | Type | Value |")
        lines.append("| --- | --- | --- |")
        for f in result.form_fields:
            cells = [c.replace('|', '\\|') for c in (f.name, f.type, f.value or '')]
            lines.append(f"| {' | '.join(cells)} |")
        lines.append("")

    # 경고
    if result.warnings:
        lines.append("> **Warnings**")
        for w in result.warnings:
            lines.append(f"> - {w}")
        lines.append("")

    return "\n".join(lines)


def to_json(result: ParseResult, indent: int = 2) -> str:
    """ParseResult를 JSON으로 변환"""
    return json.dumps(result.to_dict(), ensure_ascii=False, indent=indent)


def to_dict(result: ParseResult) -> dict:
    """ParseResult를 딕셔너리로 변환"""
    return result.to_dict()
