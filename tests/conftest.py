import zlib

import pytest


def build_pdf(objects):
    """
    테스트용 PDF 바이트 생성

    Args:
        objects: [(객체 번호, 본문 bytes)] - 본문은 'obj'와 'endobj' 사이 내용
    """
    out = bytearray(b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n")
    for num, body in objects:
        if isinstance(body, str):
            body = body.encode('latin-1')
        out += f"{num} 0 obj\n".encode('ascii') + body + b"\nendobj\n"
    out += b"trailer\n<< /Root 1 0 R >>\n%%EOF\n"
    return bytes(out)


def stream_body(content, extra=b"", compress=True):
    """스트림 객체 본문: << /Length n [/Filter /FlateDecode] >> stream ... endstream"""
    if isinstance(content, str):
        content = content.encode('latin-1')
    data = zlib.compress(content) if compress else content
    filter_entry = b" /Filter /FlateDecode" if compress else b""
    header = b"<< /Length " + str(len(data)).encode('ascii') + filter_entry + extra + b" >>"
    return header + b"\nstream\n" + data + b"\nendstream"


@pytest.fixture()
def make_pdf():
    return build_pdf


@pytest.fixture()
def make_stream():
    return stream_body


@pytest.fixture()
def form_pdf():
    """Catalog → AcroForm → 텍스트/체크박스 필드, 페이지 하나"""
    content = (
        "BT /F1 24 Tf 72 720 Td (Application Form) Tj ET\n"
        "BT /F1 12 Tf 72 690 Td (Please fill in all fields.) Tj ET\n"
        "BT /F1 18 Tf 72 660 Td (Applicant) Tj ET\n"
        "BT /F1 12 Tf 72 640 Td (Name and e-mail address.) Tj ET\n"
    )
    return build_pdf([
        (1, "<< /Type /Catalog /Pages 2 0 R /AcroForm << /Fields [4 0 R 5 0 R] >> >>"),
        (2, "<< /Type /Pages /Kids [3 0 R] /Count 1 >>"),
        (3, "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 6 0 R >>"),
        (4, "<< /T (name) /FT /Tx /V (Alice) >>"),
        (5, "<< /T (agree) /FT /Btn /AS /Yes >>"),
        (6, stream_body(content)),
    ])
