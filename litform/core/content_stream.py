"""
PDF Content Stream 텍스트 추출

Content Stream의 텍스트 출력 연산자만 해석하고 나머지는 버림

주요 연산자:
- BT/ET: 텍스트 블록 시작/끝
- Tf: 폰트 크기 (폰트 이름은 무시)
- Tj, TJ, ', ": 텍스트 출력
- T*, Td, TD: 줄바꿈 신호로만 사용

추출한 텍스트 항목은 폰트 크기로 제목/섹션으로 묶음
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from .objects import Operator
from .parser import PDFLexer

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZE = 12.0
HEADING_TOLERANCE = 0.1
SUBHEADING_RATIO = 0.8
DEFAULT_SECTION_TITLE = "Document"

# 인라인 이미지 데이터 끝 (BI ... ID <binary> EI)
INLINE_IMAGE_END = re.compile(r'\sEI(?=[\s%/\[<(]|$)')
WHITESPACE_RUN = re.compile(r'\s+')


@dataclass(frozen=True)
class TextItem:
    """추출된 텍스트 항목"""
    text: str               # 실제 텍스트
    font_size: float        # 폰트 크기


@dataclass(frozen=True)
class Section:
    """제목 + 본문"""
    title: str
    content: str


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ContentStreamParser:
    """Content Stream 파서 - 텍스트 추출"""

    def __init__(self, default_font_size: float = DEFAULT_FONT_SIZE):
        self.default_font_size = default_font_size
        self.text_items: List[TextItem] = []
        self.in_text = False
        self.font_size = default_font_size
        self.line: List[str] = []

    def parse(self, data: bytes) -> List[TextItem]:
        """Content Stream 파싱해서 텍스트 항목 추출"""
        lexer = PDFLexer(data.decode('latin-1'))

        self.text_items = []
        self.in_text = False
        self.font_size = self.default_font_size
        self.line = []

        # 스택 기반 파싱 (피연산자 → 연산자)
        operands: List[Any] = []

        while True:
            lexer.skip_whitespace()
            if lexer.at_end():
                break

            try:
                token = lexer.read_object()
            except (ValueError, RecursionError) as e:
                logger.debug("Skipping malformed operand at %d: %s", lexer.pos, e)
                operands = []
                continue

            if isinstance(token, Operator):
                self._execute_operator(token.name, operands, lexer)
                operands = []
            else:
                operands.append(token)

        self._flush()

        items = []
        for item in self.text_items:
            text = WHITESPACE_RUN.sub(' ', item.text).strip()
            if text:
                items.append(TextItem(text, item.font_size))

        logger.debug("Extracted %d text items from content stream (%d bytes)", len(items), len(data))
        return items

    def _execute_operator(self, op: str, operands: List[Any], lexer: PDFLexer):
        """연산자 실행"""

        # 인라인 이미지: 바이너리 데이터는 토큰화하지 않음
        if op == 'ID':
            self._skip_inline_image(lexer)
            return

        # 텍스트 블록
        if op == 'BT':
            self.in_text = True
            return
        if op == 'ET':
            self.in_text = False
            self._flush()
            return

        if not self.in_text:
            return

        # 폰트 설정: /F1 12 Tf
        if op == 'Tf':
            if operands and _is_number(operands[-1]):
                self.font_size = float(operands[-1])

        # 텍스트 출력
        elif op == 'Tj':  # (string) Tj
            if operands:
                self._show_text(operands[-1])

        elif op == 'TJ':  # [(string) num (string) ...] TJ
            if operands and isinstance(operands[-1], list):
                for element in operands[-1]:
                    # 커닝 숫자는 무시
                    self._show_text(element)

        elif op == "'":  # (string) ' (= T* string Tj)
            self._flush()
            if operands:
                self._show_text(operands[-1])

        elif op == '"':  # aw ac (string) " - 간격 값은 읽기만 함
            self._flush()
            if operands:
                self._show_text(operands[-1])

        # 위치 이동 = 줄바꿈
        elif op in ('T*', 'Td', 'TD'):
            self._flush()

    def _show_text(self, value: Any):
        if isinstance(value, str):
            self.line.append(value)

    def _flush(self):
        """현재 줄을 텍스트 항목으로"""
        if self.line:
            self.text_items.append(TextItem(''.join(self.line), self.font_size))
            self.line = []

    def _skip_inline_image(self, lexer: PDFLexer):
        match = INLINE_IMAGE_END.search(lexer.text, lexer.pos + 1)
        lexer.restore(match.end() if match else lexer.length)


def parse_content_stream_text(data: bytes) -> List[TextItem]:
    """페이지 content stream 하나에서 텍스트 항목 추출"""
    return ContentStreamParser().parse(data)


def build_headings_and_sections(items: List[TextItem]) -> Tuple[List[str], List[Section]]:
    """
    폰트 크기로 제목/섹션 구성

    가장 큰 크기(h1)와 두 번째 크기(h2, 없으면 h1의 80%)가 제목 단계.
    제목 크기 항목은 새 섹션을 시작하고, 나머지는 현재 섹션 본문에 줄 단위로 추가.
    섹션이 없을 때 나온 본문은 'Document' 섹션에 들어감.

    Returns:
        (titles, sections) - titles는 첫 섹션 제목 하나
    """
    if not items:
        return [], []

    sizes = sorted({item.font_size for item in items}, reverse=True)
    h1_size = sizes[0]
    h2_size = sizes[1] if len(sizes) > 1 else h1_size * SUBHEADING_RATIO
    logger.debug("Font sizes: %s (H1: %s, H2: %s)", sizes, h1_size, h2_size)

    sections: List[Section] = []
    title: Optional[str] = None
    content: List[str] = []

    for item in items:
        is_heading = (item.font_size >= h1_size - HEADING_TOLERANCE
                      or item.font_size >= h2_size - HEADING_TOLERANCE)
        if is_heading:
            if title is not None:
                sections.append(Section(title, '\n'.join(content)))
            title, content = item.text, []
        else:
            if title is None:
                title = DEFAULT_SECTION_TITLE
            content.append(item.text)

    if title is not None:
        sections.append(Section(title, '\n'.join(content)))

    titles = [sections[0].title] if sections else []
    logger.debug("Built %d sections with %d titles", len(sections), len(titles))
    return titles, sections
