from litform.core.content_stream import (
    ContentStreamParser, Section, TextItem, build_headings_and_sections, parse_content_stream_text,
)


def _texts(stream):
    return [item.text for item in parse_content_stream_text(stream)]


def test_tj_inside_text_block():
    items = parse_content_stream_text(b"BT /F1 14 Tf 72 700 Td (Hello World) Tj ET")
    assert items == [TextItem('Hello World', 14.0)]


def test_tj_array_ignores_kerning():
    assert _texts(b"BT [(Hel) -20 (lo) 5.5 ( there)] TJ ET") == ['Hello there']


def test_text_outside_bt_is_ignored():
    assert _texts(b"(outside) Tj BT (inside) Tj ET (after) Tj") == ['inside']


def test_default_font_size():
    items = parse_content_stream_text(b"BT (plain) Tj ET")
    assert items[0].font_size == 12.0
    assert ContentStreamParser(default_font_size=9).parse(b"BT (x) Tj ET")[0].font_size == 9


def test_font_size_changes_per_line():
    stream = b"BT /F1 20 Tf (Big) Tj T* /F2 10 Tf (small) Tj ET"
    assert parse_content_stream_text(stream) == [TextItem('Big', 20.0), TextItem('small', 10.0)]


def test_positioning_breaks_lines():
    stream = b"BT (a) Tj (b) Tj 0 -14 Td (c) Tj T* (d) Tj 0 -14 TD (e) Tj ET"
    assert _texts(stream) == ['ab', 'c', 'd', 'e']


def test_quote_operators_start_new_line():
    stream = b"BT (first) Tj (second) ' 1 2 (third) \" ET"
    assert _texts(stream) == ['first', 'second', 'third']


def test_et_ends_line():
    assert _texts(b"BT (one) Tj ET BT (two) Tj ET") == ['one', 'two']


def test_whitespace_is_collapsed_and_blank_items_dropped():
    assert _texts(b"BT (  spaced \t out  ) Tj T* (   ) Tj ET") == ['spaced out']


def test_graphics_operators_are_skipped():
    stream = b"q 1 0 0 1 0 0 cm 0 0 1 RG 0.5 g /Im1 Do Q BT (text) Tj ET"
    assert _texts(stream) == ['text']


def test_inline_image_data_is_skipped():
    stream = b"BI /W 2 /H 1 /BPC 8 /CS /G ID \x00(\xff]) EI BT (after) Tj ET"
    assert _texts(stream) == ['after']


def test_unterminated_text_block_is_flushed():
    assert _texts(b"BT (dangling) Tj") == ['dangling']


def test_malformed_operand_does_not_stop_parsing():
    assert _texts(b"BT << 5 >> (kept) Tj ET") == ['kept']


def test_sections_by_font_size():
    items = [
        TextItem('Title', 24),
        TextItem('body1', 12),
        TextItem('Sub', 18),
        TextItem('body2', 12),
    ]
    titles, sections = build_headings_and_sections(items)

    assert titles == ['Title']
    assert sections == [Section('Title', 'body1'), Section('Sub', 'body2')]


def test_second_size_is_also_a_heading():
    items = [TextItem('H', 20), TextItem('x', 10), TextItem('y', 10), TextItem('z', 8)]
    titles, sections = build_headings_and_sections(items)
    assert [s.title for s in sections] == ['H', 'x', 'y']
    assert sections[-1].content == 'z'


def test_body_lines_are_joined():
    items = [TextItem('T', 20), TextItem('S', 16), TextItem('a', 10), TextItem('b', 10)]
    _, sections = build_headings_and_sections(items)
    assert sections == [Section('T', ''), Section('S', 'a\nb')]


def test_single_font_size_makes_every_item_a_heading():
    items = [TextItem('a', 12), TextItem('b', 12)]
    titles, sections = build_headings_and_sections(items)
    assert titles == ['a']
    assert sections == [Section('a', ''), Section('b', '')]


def test_body_before_first_heading_goes_to_document_section():
    items = [TextItem('intro', 10), TextItem('Heading', 20), TextItem('x', 8)]
    titles, sections = build_headings_and_sections(items)
    # 크기 세 개: 20 / 10 / 8 → 'intro'는 두 번째 크기라 제목 단계
    assert titles == ['intro']

    items = [TextItem('intro', 8), TextItem('Heading', 20), TextItem('Sub', 14)]
    titles, sections = build_headings_and_sections(items)
    assert titles == ['Document']
    assert sections[0] == Section('Document', 'intro')
    assert [s.title for s in sections] == ['Document', 'Heading', 'Sub']


def test_no_items():
    assert build_headings_and_sections([]) == ([], [])
