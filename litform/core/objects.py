"""
PDF 값 모델

PDF 객체는 닫힌 태그 유니온으로 표현:
- Number (int/float), Boolean (bool), Null (None), String (str)
- Name (PDFName), Reference (PDFRef)
- Array (list), Dictionary (dict)

토크나이저는 위 값 외에 연산자(Operator)도 반환함 (content stream 용)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class PDFName:
    """이름 객체 (예: /Type). 같은 글자의 문자열과는 다른 값"""
    name: str

    def __str__(self):
        return f"/{self.name}"


@dataclass(frozen=True)
class PDFRef:
    """간접 참조 (예: 1 0 R) - 데이터를 직접 갖지 않음"""
    obj_num: int
    gen_num: int

    @property
    def key(self) -> str:
        """객체 테이블 키: "obj gen" """
        return f"{self.obj_num} {self.gen_num}"

    def __str__(self):
        return f"{self.obj_num} {self.gen_num} R"


@dataclass(frozen=True)
class Operator:
    """bare keyword (BT, Tf, Tj, obj ...) - 해석은 호출자 몫"""
    name: str

    def __str__(self):
        return self.name


PDFValue = Union[int, float, bool, None, str, PDFName, PDFRef, list, dict]


class ValueKind(Enum):
    """값 종류"""
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    STRING = "string"
    NAME = "name"
    REFERENCE = "reference"
    ARRAY = "array"
    DICTIONARY = "dictionary"
    OPERATOR = "operator"


def value_kind(value: Any) -> ValueKind:
    """
    값을 종류별로 분류

    유니온 밖의 값이면 TypeError - 조용히 None을 돌려주지 않음
    """
    # bool은 int의 하위 클래스라서 먼저 검사
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if value is None:
        return ValueKind.NULL
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, PDFName):
        return ValueKind.NAME
    if isinstance(value, PDFRef):
        return ValueKind.REFERENCE
    if isinstance(value, list):
        return ValueKind.ARRAY
    if isinstance(value, dict):
        return ValueKind.DICTIONARY
    if isinstance(value, Operator):
        return ValueKind.OPERATOR
    raise TypeError(f"Not a PDF value: {value!r}")


def value_to_string(value: Any) -> Optional[str]:
    """필드 값 표시용 문자열 변환"""
    kind = value_kind(value)
    if kind == ValueKind.STRING:
        return value
    if kind == ValueKind.NAME:
        return str(value)
    if kind == ValueKind.BOOLEAN:
        return "true" if value else "false"
    if kind == ValueKind.NUMBER:
        return str(value)
    if kind == ValueKind.ARRAY:
        # 다중 선택 Choice 필드: [(A) (B)]
        parts = [value_to_string(v) for v in value if value_kind(v) in _SCALAR_KINDS]
        parts = [p for p in parts if p]
        return ", ".join(parts) if parts else None
    # NULL, REFERENCE, DICTIONARY, OPERATOR
    return None


_SCALAR_KINDS = (ValueKind.STRING, ValueKind.NAME, ValueKind.NUMBER, ValueKind.BOOLEAN)


def as_name(value: Any) -> Optional[str]:
    """PDFName이면 식별자 텍스트, 아니면 None"""
    if isinstance(value, PDFName):
        return value.name
    return None


@dataclass
class PDFStream:
    """스트림: 메타데이터 dict + 바이트 데이터 (해제 성공 시 해제된 데이터)"""
    dictionary: Dict[str, Any]
    data: bytes
    filters: List[str] = field(default_factory=list)
    decoded: bool = False


@dataclass
class ObjectEntry:
    """객체 테이블 항목"""
    id: str
    dictionary: Optional[Dict[str, Any]] = None
    stream: Optional[PDFStream] = None
    value: Any = None       # dict가 아닌 최상위 값 (배열, 숫자 등)
    raw: str = ""           # 원본 텍스트 (파싱 실패 시 유일한 내용)


class ObjectTable:
    """
    객체 테이블 - 모든 dict/stream의 유일한 소유자

    다른 컴포넌트는 키(또는 PDFRef)로만 참조하고 항상 여기서 resolve
    """

    def __init__(self):
        self._entries: Dict[str, ObjectEntry] = {}

    def add(self, entry: ObjectEntry):
        # 같은 id가 다시 나오면 (증분 업데이트) 뒤의 정의가 이김
        self._entries[entry.id] = entry

    def get(self, ref: Union[PDFRef, str]) -> Optional[ObjectEntry]:
        key = ref.key if isinstance(ref, PDFRef) else ref
        return self._entries.get(key)

    def resolve(self, value: Any) -> Any:
        """
        참조를 한 단계 따라가서 stream / dict / value 반환

        null 객체나 파싱 실패로 원본 텍스트만 남은 항목은 None
        """
        if not isinstance(value, PDFRef):
            return value
        entry = self.get(value)
        if entry is None:
            return None
        if entry.stream is not None:
            return entry.stream
        if entry.dictionary is not None:
            return entry.dictionary
        return entry.value

    def resolve_dict(self, value: Any) -> Optional[Dict[str, Any]]:
        """dict로 resolve (스트림은 제외)"""
        resolved = self.resolve(value)
        return resolved if isinstance(resolved, dict) else None

    def resolve_array(self, value: Any) -> Optional[list]:
        resolved = self.resolve(value)
        return resolved if isinstance(resolved, list) else None

    def __contains__(self, key) -> bool:
        return self.get(key) is not None

    def __iter__(self):
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)
