"""
PDF 문서 모델 해석

객체 테이블에서:
1. Catalog 찾기 (/Type /Catalog)
2. AcroForm → /Fields → /Kids 재귀 탐색 → 평탄한 필드 목록
3. 페이지 (/Type /Page)의 content stream 수집
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set, Tuple

from .objects import ObjectTable, PDFRef, PDFStream, as_name, value_to_string

logger = logging.getLogger(__name__)

# /FT → 필드 타입
FIELD_TYPES = {
    'Btn': 'Button/Checkbox/Radio',
    'Tx': 'Text',
    'Ch': 'Choice',
    'Sig': 'Signature',
}


@dataclass(frozen=True)
class FormField:
    """AcroForm 필드"""
    name: str
    type: str
    value: Optional[str] = None


def find_catalog(table: ObjectTable) -> Optional[Tuple[str, Dict[str, Any]]]:
    """파일 순서대로 첫 번째 /Type /Catalog 반환 (id, dict)"""
    for entry in table:
        if entry.dictionary is None:
            continue
        if as_name(entry.dictionary.get('Type')) == 'Catalog':
            logger.debug("Found catalog at object %s", entry.id)
            return entry.id, entry.dictionary

    logger.debug("No catalog found in %d objects", len(table))
    return None


def find_acroform(table: ObjectTable, catalog: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Catalog의 /AcroForm을 dict로 resolve (직접 또는 참조)"""
    acroform = table.resolve_dict(catalog.get('AcroForm'))
    if acroform is not None:
        return acroform
    logger.debug("No AcroForm found in catalog")
    return None


def field_type(ft: Any) -> str:
    """/FT 이름 → 필드 타입 문자열"""
    name = as_name(ft)
    if not name:
        return 'Unknown'
    return FIELD_TYPES.get(name, f"/{name}")


def _as_field_dict(table: ObjectTable, node: Any, seen: Set[str]) -> Optional[Dict[str, Any]]:
    """필드 노드(참조 또는 inline dict)를 dict로. 이미 방문한 참조면 None"""
    if isinstance(node, PDFRef):
        if node.key in seen:
            return None
        seen.add(node.key)
        entry = table.get(node)
        return entry.dictionary if entry else None
    if isinstance(node, dict):
        return node
    return None


def _field_value(table: ObjectTable, value: Any) -> Optional[str]:
    resolved = table.resolve(value)
    if isinstance(resolved, PDFStream):
        # 리치 텍스트 스트림 등은 값으로 쓰지 않음
        return None
    return value_to_string(resolved)


def collect_acroform_fields(table: ObjectTable, acroform: Dict[str, Any]) -> List[FormField]:
    """
    AcroForm 필드 수집

    - 필드 이름은 노드 자신의 /T만 사용 (부모 이름과 이어붙이지 않음)
    - 값은 /V, 없으면 /AS (체크박스/라디오 현재 상태)
    - 이름 없는 노드는 기록하지 않지만 /Kids는 탐색
    - 방문한 참조는 다시 들어가지 않음 (순환 /Kids 대비)
    """
    out: List[FormField] = []
    seen: Set[str] = set()

    fields = table.resolve_array(acroform.get('Fields')) or []
    logger.debug("Found %d AcroForm fields to process", len(fields))

    # 명시적 스택으로 순서를 유지하며 깊이 우선 탐색
    stack = list(reversed(fields))

    while stack:
        field_dict = _as_field_dict(table, stack.pop(), seen)
        if field_dict is None:
            continue

        name = value_to_string(field_dict.get('T')) or ''
        ftype = field_type(field_dict.get('FT'))

        value = _field_value(table, field_dict.get('V'))
        if not value and field_dict.get('AS') is not None:
            value = value_to_string(field_dict.get('AS'))

        if name:
            logger.debug("Found form field: %r [%s] = %r", name, ftype, value)
            out.append(FormField(name, ftype, value or None))

        kids = table.resolve_array(field_dict.get('Kids'))
        if kids:
            stack.extend(reversed(kids))

    logger.debug("Extracted %d form fields total", len(out))
    return out


def get_pages(table: ObjectTable) -> List[Dict[str, Any]]:
    """모든 /Type /Page dict (파일 순서)"""
    return [
        entry.dictionary for entry in table
        if entry.dictionary is not None and as_name(entry.dictionary.get('Type')) == 'Page'
    ]


def get_page_streams(table: ObjectTable, page: Dict[str, Any]) -> List[PDFStream]:
    """페이지 /Contents → 스트림 목록 (단일 스트림 또는 스트림 참조 배열)"""
    contents = table.resolve(page.get('Contents'))

    if isinstance(contents, PDFStream):
        return [contents]

    streams = []
    if isinstance(contents, list):
        for item in contents:
            if not isinstance(item, PDFRef):
                continue
            entry = table.get(item)
            if entry and entry.stream is not None:
                streams.append(entry.stream)
    return streams
