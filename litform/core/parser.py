"""
PDF Parser - 객체 테이블 구성

목표:
1. 기본 객체 타입 파싱 (dict, array, string, number, name, ref)
2. 파일 전체에서 'N G obj ... endobj' 구간 스캔 (XRef 테이블 없이)
3. stream 데이터 분리 및 FlateDecode 해제
4. 깨진 객체는 경고로 기록하고 원본 텍스트로 보존
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from .objects import ObjectEntry, ObjectTable, Operator, PDFName, PDFRef, PDFStream
from .stream_decoder import FLATE, Inflater, normalize_filters

logger = logging.getLogger(__name__)


class PDFSyntaxError(ValueError):
    """객체 하나의 구문 오류 - 해당 객체에서만 처리됨"""


# 객체 헤더: "12 0 obj"
OBJ_HEADER = re.compile(r'(\d+)\s+(\d+)\s+obj\b')
# 'stream' 키워드 (endstream, /Substream 등은 제외)
STREAM_KEYWORD = re.compile(r'(?<![A-Za-z/])stream\b')

HEX_DIGITS = '0123456789ABCDEFabcdef'
OCTAL_DIGITS = '01234567'

ESCAPES = {
    'n': '\n', 'r': '\r', 't': '\t',
    'b': '\b', 'f': '\f',
    '(': '(', ')': ')', '\\': '\\',
}


def decode_pdf_string(raw: str) -> str:
    """FE FF BOM이면 UTF-16BE, 아니면 Latin-1 그대로"""
    if raw[:2] == '\xfe\xff':
        return raw[2:].encode('latin-1').decode('utf-16-be', errors='replace')
    return raw


class PDFLexer:
    """
    PDF 토크나이저 - Latin-1로 디코딩한 텍스트 위에서 동작

    Latin-1은 바이트와 문자가 1:1이라 문자열 위치 == 바이트 오프셋
    """

    # 구분자 문자
    WHITESPACE = ' \t\n\r\x00\x0c'
    DELIMITERS = '()<>[]{}/%'

    def __init__(self, text: str, pos: int = 0):
        self.text = text
        self.pos = pos
        self.length = len(text)

    def at_end(self) -> bool:
        return self.pos >= self.length

    def peek(self, count: int = 1) -> str:
        return self.text[self.pos:self.pos + count]

    def save(self) -> int:
        """현재 위치 스냅샷 (백트래킹용)"""
        return self.pos

    def restore(self, pos: int):
        self.pos = pos

    def skip_whitespace(self):
        """공백 문자와 주석 스킵"""
        while self.pos < self.length:
            ch = self.text[self.pos]
            if ch in self.WHITESPACE:
                self.pos += 1
            elif ch == '%':
                # 주석 스킵 (줄 끝까지)
                while self.pos < self.length and self.text[self.pos] not in '\r\n':
                    self.pos += 1
            else:
                break

    def read_object(self) -> Any:
        """
        값 하나 읽기

        Returns:
            int/float, bool, None, str, PDFName, PDFRef, list, dict 또는 Operator.
            입력 끝이면 None (at_end()로 null과 구분)
        """
        self.skip_whitespace()
        if self.pos >= self.length:
            return None

        ch = self.text[self.pos]

        if ch == '/':
            return self._read_name()

        if ch == '(':
            return self._read_literal_string()

        if ch == '<':
            if self.peek(2) == '<<':
                return self._read_dict()
            return self._read_hex_string()

        if ch == '[':
            return self._read_array()

        if ch in '-+.0123456789':
            return self._read_number_or_ref()

        if ch in '\'"':
            # 텍스트 출력 연산자 ' 와 "
            self.pos += 1
            return Operator(ch)

        if ch.isalpha():
            return self._read_keyword()

        # 짝이 없는 구분자 등 - 한 글자 소비하고 연산자로 넘김
        self.pos += 1
        return Operator(ch)

    def _read_name(self) -> PDFName:
        """Name 읽기: /Type, /F1, /A#20B"""
        self.pos += 1  # '/' 스킵
        name = []

        while self.pos < self.length:
            ch = self.text[self.pos]
            if ch in self.WHITESPACE or ch in self.DELIMITERS:
                break

            # #XX 이스케이프 처리
            hex_val = self.text[self.pos + 1:self.pos + 3]
            if ch == '#' and len(hex_val) == 2 and all(c in HEX_DIGITS for c in hex_val):
                name.append(chr(int(hex_val, 16)))
                self.pos += 3
                continue

            name.append(ch)
            self.pos += 1

        return PDFName(''.join(name))

    def _read_literal_string(self) -> str:
        """리터럴 문자열 읽기: (Hello (nested) World)"""
        self.pos += 1  # '(' 스킵
        result = []
        depth = 1  # 괄호 중첩 추적

        while self.pos < self.length:
            ch = self.text[self.pos]

            if ch == '\\':
                # 이스케이프 시퀀스
                self.pos += 1
                if self.pos >= self.length:
                    break
                esc = self.text[self.pos]

                if esc in ESCAPES:
                    result.append(ESCAPES[esc])
                    self.pos += 1
                elif esc in OCTAL_DIGITS:
                    # 8진수 이스케이프 (최대 3자리)
                    octal = ''
                    while len(octal) < 3 and self.pos < self.length and self.text[self.pos] in OCTAL_DIGITS:
                        octal += self.text[self.pos]
                        self.pos += 1
                    result.append(chr(int(octal, 8) & 0xFF))
                elif esc in '\r\n':
                    # 줄 연속
                    if esc == '\r' and self.peek(2)[1:] == '\n':
                        self.pos += 1
                    self.pos += 1
                else:
                    result.append(esc)
                    self.pos += 1
            elif ch == '(':
                depth += 1
                result.append(ch)
                self.pos += 1
            elif ch == ')':
                depth -= 1
                self.pos += 1
                if depth == 0:
                    break
                result.append(ch)
            else:
                result.append(ch)
                self.pos += 1

        return decode_pdf_string(''.join(result))

    def _read_hex_string(self) -> str:
        """16진수 문자열 읽기: <48656C6C6F>"""
        self.pos += 1  # '<' 스킵
        digits = []

        while self.pos < self.length:
            ch = self.text[self.pos]
            self.pos += 1
            if ch == '>':
                break
            if ch in HEX_DIGITS:
                digits.append(ch)

        # 홀수 길이면 0 추가
        if len(digits) % 2 == 1:
            digits.append('0')

        raw = bytes.fromhex(''.join(digits)).decode('latin-1')
        return decode_pdf_string(raw)

    def _read_array(self) -> list:
        """Array 읽기: [1 2 (a) /B]"""
        self.pos += 1  # '[' 스킵
        result = []

        while True:
            self.skip_whitespace()
            if self.pos >= self.length:
                break
            if self.text[self.pos] == ']':
                self.pos += 1
                break
            result.append(self.read_object())

        return result

    def _read_dict(self) -> Dict[str, Any]:
        """Dictionary 읽기: << /Type /Catalog >>"""
        self.pos += 2  # '<<' 스킵
        result = {}

        while True:
            self.skip_whitespace()
            if self.pos >= self.length:
                break
            if self.peek(2) == '>>':
                self.pos += 2
                break

            if self.text[self.pos] != '/':
                raise PDFSyntaxError(
                    f"Malformed dict: key must be name at position {self.pos}"
                )

            key = self._read_name().name

            # 값 없이 닫힌 경우: << /Key >>
            self.skip_whitespace()
            if self.peek(2) == '>>':
                result[key] = None
                continue

            result[key] = self.read_object()

        return result

    def _read_number(self) -> str:
        start = self.pos
        while self.pos < self.length and self.text[self.pos] in '-+.0123456789':
            self.pos += 1
        return self.text[start:self.pos]

    def _read_number_or_ref(self) -> Any:
        """숫자 또는 참조 (12 0 R) 읽기"""
        token = self._read_number()

        # 정수 또는 실수 판별
        try:
            number = float(token) if '.' in token else int(token)
        except ValueError:
            return 0

        if not isinstance(number, int) or number < 0:
            return number

        # Reference 체크: int int R
        saved = self.save()
        self.skip_whitespace()
        gen_start = self.pos
        while self.pos < self.length and self.text[self.pos].isdigit():
            self.pos += 1
        gen = self.text[gen_start:self.pos]

        if gen:
            self.skip_whitespace()
            after = self.text[self.pos + 1:self.pos + 2]
            if self.peek() == 'R' and (not after or after in self.WHITESPACE or after in self.DELIMITERS):
                self.pos += 1
                return PDFRef(number, int(gen))

        # Reference가 아니면 위치 복원
        self.restore(saved)
        return number

    def _read_keyword(self) -> Any:
        """키워드 읽기: true, false, null, 그 외는 연산자 (BT, Tf, T*, obj ...)"""
        start = self.pos
        while self.pos < self.length and (self.text[self.pos].isalnum() or self.text[self.pos] == '*'):
            self.pos += 1
        word = self.text[start:self.pos]

        if word == 'true':
            return True
        elif word == 'false':
            return False
        elif word == 'null':
            return None
        return Operator(word)


def parse_value(text: str) -> Any:
    """문자열에서 값 하나 파싱"""
    return PDFLexer(text).read_object()


def _find_stream(text: str, pos: int) -> Optional[Tuple[int, int]]:
    """
    dict 바로 뒤의 'stream' 키워드 확인

    Returns:
        (data_start, endstream_pos) 또는 None
    """
    match = STREAM_KEYWORD.match(text, pos)
    if not match:
        return None

    data_start = match.end()
    # 'stream' 뒤의 EOL 하나 스킵 (\r\n, \n 또는 \r)
    if text.startswith('\r\n', data_start):
        data_start += 2
    elif text[data_start:data_start + 1] in ('\n', '\r'):
        data_start += 1

    endstream = text.find('endstream', data_start)
    if endstream == -1:
        return None

    return data_start, endstream


def _stream_bytes(data: bytes, stream_dict: Dict[str, Any], data_start: int, endstream: int) -> bytes:
    """stream 데이터 추출: /Length가 직접 정수면 우선, 아니면 endstream 기준"""
    length = stream_dict.get('Length')
    if isinstance(length, int) and not isinstance(length, bool) and 0 <= length <= endstream - data_start:
        return data[data_start:data_start + length]

    # 끝의 EOL 제거
    end = endstream
    if data[end - 2:end] == b'\r\n' and end - 2 >= data_start:
        end -= 2
    elif data[end - 1:end] in (b'\n', b'\r') and end - 1 >= data_start:
        end -= 1
    return data[data_start:end]


def parse_objects(data: bytes, inflater: Optional[Inflater] = None) -> Tuple[ObjectTable, List[str]]:
    """
    PDF 전체를 스캔해서 객체 테이블 구성

    Args:
        data: PDF 파일 바이트
        inflater: FlateDecode 어댑터 (기본: 환경에서 감지한 방법)

    Returns:
        (객체 테이블, 경고 목록)
    """
    inflater = inflater or Inflater()
    warnings: List[str] = []
    table = ObjectTable()
    text = data.decode('latin-1')  # 1:1 위치 매핑

    headers = list(OBJ_HEADER.finditer(text))
    logger.debug("Found %d PDF objects to parse (%d bytes)", len(headers), len(data))

    for match in headers:
        obj_id = f"{int(match.group(1))} {int(match.group(2))}"
        header_end = match.end()

        endobj = text.find('endobj', header_end)
        if endobj == -1:
            logger.debug("Skipping object %s - no endobj found", obj_id)
            continue

        # 스트림 데이터에 'endobj'가 있어도 dict는 그 앞에서 끝남
        span = text[header_end:endobj]
        lexer = PDFLexer(span)
        try:
            value = lexer.read_object()
        except (ValueError, RecursionError) as e:
            message = f"Failed to parse dict for obj {obj_id}: {e}"
            logger.warning(message)
            warnings.append(message)
            keyword = STREAM_KEYWORD.search(span)
            table.add(ObjectEntry(obj_id, raw=span[:keyword.start() if keyword else len(span)].strip()))
            continue

        dict_text = span[:lexer.pos].strip()

        if not isinstance(value, dict):
            # dict가 아닌 객체 (숫자, 배열 등)는 값과 원본만 보존
            logger.debug("Object %s is not a dictionary (%s)", obj_id, type(value).__name__)
            table.add(ObjectEntry(obj_id, value=value, raw=dict_text))
            continue

        # 문자열 안의 'stream'은 dict와 함께 이미 읽혔으므로 dict 바로 뒤만 확인
        lexer.skip_whitespace()
        bounds = _find_stream(text, header_end + lexer.pos)

        stream = None
        if bounds:
            data_start, endstream = bounds
            raw_data = _stream_bytes(data, value, data_start, endstream)
            stream = _decode_stream(obj_id, value, raw_data, inflater, warnings)

        table.add(ObjectEntry(obj_id, dictionary=value, stream=stream, raw=dict_text))

    logger.debug("Completed parsing %d objects, %d warnings", len(table), len(warnings))
    return table, warnings


def _decode_stream(obj_id: str, stream_dict: Dict[str, Any], raw_data: bytes,
                   inflater: Inflater, warnings: List[str]) -> PDFStream:
    """필터 적용 - FlateDecode만 해제, 실패하면 원본 유지"""
    filters = normalize_filters(stream_dict.get('Filter'))
    logger.debug("Object %s stream: %d bytes, filters: %s",
                 obj_id, len(raw_data), ', '.join(filters) or 'none')

    if FLATE in filters:
        result = inflater.inflate(raw_data)
        if not result.ok:
            message = f"Failed to Flate-decode stream {obj_id}: all decompression methods failed"
            logger.warning(message)
            warnings.append(message)
        return PDFStream(stream_dict, result.data, filters, decoded=result.ok)

    if filters:
        message = f"Unsupported stream filter on {obj_id}: {', '.join(filters)}"
        logger.warning(message)
        warnings.append(message)

    return PDFStream(stream_dict, raw_data, filters)
