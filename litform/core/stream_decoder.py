"""
PDF 스트림 디코딩

지원하는 필터:
1. FlateDecode (zlib) - 세 가지 방법을 순서대로 시도

해제 방법 (순서 고정):
1. streaming  - zlib.decompressobj, 잘린 데이터도 가능한 만큼 해제
2. oneshot    - zlib.decompress
3. raw_deflate - zlib 헤더 없는 deflate (wbits=-15)

모두 실패하면 입력을 그대로 돌려줌 (예외 없음)
"""

import logging
import zlib
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

from .objects import PDFName

logger = logging.getLogger(__name__)

FLATE = 'FlateDecode'

InflateMethod = Tuple[str, Callable[[bytes], bytes]]


@dataclass(frozen=True)
class InflateEnvironment:
    """사용 가능한 압축 해제 기능 (프로세스 시작 시 한 번 계산, 읽기 전용)"""
    streaming: bool = False
    oneshot: bool = False
    raw_deflate: bool = False


def probe_environment() -> InflateEnvironment:
    """현재 인터프리터의 zlib 기능 확인"""
    return InflateEnvironment(
        streaming=hasattr(zlib, 'decompressobj'),
        oneshot=hasattr(zlib, 'decompress'),
        raw_deflate=hasattr(zlib, 'decompress') and hasattr(zlib, 'MAX_WBITS'),
    )


ENVIRONMENT = probe_environment()


@dataclass(frozen=True)
class InflateResult:
    """해제 결과. method가 None이면 모든 방법 실패 (data는 입력 그대로)"""
    data: bytes
    method: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.method is not None


def _inflate_streaming(data: bytes) -> bytes:
    """스트리밍 해제 - 끝이 잘렸거나 뒤에 쓰레기가 붙은 스트림도 처리"""
    d = zlib.decompressobj()
    out = d.decompress(data)
    out += d.flush()
    if not out and data:
        raise zlib.error("streaming inflate produced no output")
    return out


def _inflate_oneshot(data: bytes) -> bytes:
    return zlib.decompress(data)


def _inflate_raw(data: bytes) -> bytes:
    # 일부 PDF는 헤더 없이 raw deflate 사용
    return zlib.decompress(data, -zlib.MAX_WBITS)


def default_methods(environment: InflateEnvironment = ENVIRONMENT) -> List[InflateMethod]:
    """환경에서 사용 가능한 방법만 순서대로"""
    methods = []
    if environment.streaming:
        methods.append(('streaming', _inflate_streaming))
    if environment.oneshot:
        methods.append(('oneshot', _inflate_oneshot))
    if environment.raw_deflate:
        methods.append(('raw_deflate', _inflate_raw))
    return methods


class Inflater:
    """FlateDecode 어댑터"""

    def __init__(self, environment: InflateEnvironment = ENVIRONMENT,
                 methods: Optional[Sequence[InflateMethod]] = None):
        """
        Args:
            environment: 사용 가능한 기능 (기본: 프로세스 시작 시 확인한 값)
            methods: (이름, 함수) 목록 - 지정하면 environment 대신 사용
        """
        self.environment = environment
        self.methods = list(methods) if methods is not None else default_methods(environment)

    def inflate(self, data: bytes) -> InflateResult:
        """순서대로 시도, 처음 성공한 결과 반환. 예외를 던지지 않음"""
        for name, method in self.methods:
            try:
                out = method(data)
            except Exception as e:
                logger.debug("%s inflate failed for %d bytes: %s", name, len(data), e)
                continue
            if len(out) == len(data):
                # 압축이 안 됐을 수도 있음 - 참고용 신호일 뿐
                logger.debug("%s inflate returned %d bytes (same as input)", name, len(out))
            else:
                logger.debug("%s inflate: %d -> %d bytes", name, len(data), len(out))
            return InflateResult(out, name)

        logger.debug("All decompression methods failed, returning raw data (%d bytes)", len(data))
        return InflateResult(data, None)


def inflate(data: bytes, inflater: Optional[Inflater] = None) -> bytes:
    """best-effort 해제: 실패하면 입력 그대로"""
    return (inflater or Inflater()).inflate(data).data


def normalize_filters(value: Any) -> List[str]:
    """
    /Filter 값을 필터 이름 목록으로

    /FlateDecode -> ['FlateDecode']
    [/ASCII85Decode /FlateDecode] -> ['ASCII85Decode', 'FlateDecode']
    """
    if value is None:
        return []
    if isinstance(value, PDFName):
        return [value.name]
    if isinstance(value, list):
        return [f.name if isinstance(f, PDFName) else str(f) for f in value]
    return [str(value)]
