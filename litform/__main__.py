"""
LitForm CLI

사용법:
    litform form.pdf
    litform form.pdf --summary
    litform form.pdf --json -o result.json
"""

import sys
import argparse
import logging
from pathlib import Path


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='litform',
        description='LitForm - Lightweight PDF Form Parser',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
출력 포맷:
  (기본)        추출한 텍스트
  --summary     프롬프트용 요약
  --markdown    마크다운으로 변환
  --json        JSON으로 변환

예시:
  litform form.pdf
  litform form.pdf --summary
  litform form.pdf --json -o result.json
'''
    )

    parser.add_argument('file', help='PDF 파일 경로')
    parser.add_argument('--summary', '-s', action='store_true', help='프롬프트용 요약')
    parser.add_argument('--markdown', '--md', action='store_true', help='마크다운으로 변환')
    parser.add_argument('--json', '-j', action='store_true', help='JSON으로 변환')
    parser.add_argument('--fields', '-f', action='store_true', help='폼 필드만 출력')
    parser.add_argument('--warnings', '-w', action='store_true', help='경고를 stderr로 출력')
    parser.add_argument('--output', '-o', help='출력 파일')
    parser.add_argument('--verbose', '-v', action='store_true', help='디버그 로그 출력')

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    filepath = Path(args.file)
    if not filepath.exists():
        print(f"오류: 파일을 찾을 수 없습니다: {filepath}", file=sys.stderr)
        return 1

    try:
        from . import parse_pdf, to_prompt_summary, to_markdown, to_json

        data = filepath.read_bytes()
        if not data.startswith(b'%PDF-'):
            print(f"오류: PDF 파일이 아닙니다: {filepath}", file=sys.stderr)
            return 1

        result = parse_pdf(data)

        if args.warnings:
            for w in result.warnings:
                print(f"경고: {w}", file=sys.stderr)

        # 출력 포맷
        if args.fields:
            output = "\n".join(
                f"{f.name}\t{f.type}\t{f.value or ''}" for f in result.form_fields
            )
        elif args.summary:
            output = to_prompt_summary(result)
        elif args.markdown:
            output = to_markdown(result, filename=filepath.name)
        elif args.json:
            output = to_json(result)
        else:
            # 기본: 텍스트
            output = result.raw_text

        # 출력
        if args.output:
            with open(args.output, 'w', encoding='utf-8') as f:
                f.write(output)
            print(f"저장됨: {args.output}", file=sys.stderr)
        else:
            print(output)

    except Exception as e:
        print(f"오류: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
