import re
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class HighlightSegment:
    text: str
    matched: bool = False


def highlight(text: str, query: str) -> List[HighlightSegment]:
    """Разбиение текста на фрагменты с отметкой вхождений запроса.

    Запрос ищется без учёта регистра и как обычная строка, а не как регулярное
    выражение: ``highlight("cost (tax)", "(tax")`` находит ``"(tax"``.
    Регистр исходного текста сохраняется.
    """
    if not query:
        return [HighlightSegment(text)]

    pattern = re.compile(f"({re.escape(query)})", re.IGNORECASE)

    # re.split с группой: совпадения оказываются на нечётных позициях
    parts = pattern.split(text)
    return [
        HighlightSegment(part, matched=index % 2 == 1)
        for index, part in enumerate(parts)
        if part
    ]
