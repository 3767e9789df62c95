from typing import List

from rpo_insights.models.domain import ParsedTable, Record


def split_csv_line(line: str) -> List[str]:
    """
    따옴표 구간 안의 쉼표는 구분자로 보지 않음
    escape된 따옴표("")는 지원하지 않음 => 따옴표는 항상 구간 상태를 토글
    """
    values = []
    current = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            values.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    values.append("".join(current).strip())

    return [_strip_quotes(value) for value in values]


def _strip_quotes(value: str) -> str:
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value.strip()


def parse_csv(text: str) -> ParsedTable:
    """CSV 원문 -> (header, record 목록)"""
    lines = [line for line in (text or "").split("\n") if line.strip()]
    if not lines:
        return ParsedTable()

    fields = split_csv_line(lines[0])
    records: List[Record] = []

    for line in lines[1:]:
        values = split_csv_line(line)
        # 값이 부족하면 빈 문자열, 초과분은 버림
        record = {
            name: (values[i] if i < len(values) else "")
            for i, name in enumerate(fields)
        }
        records.append(record)

    return ParsedTable(fields=fields, records=records)
