from typing import Iterable, Iterator, List, Optional


class TagList:
    """Упорядоченный список уникальных тегов документа.

    Теги сравниваются с учётом регистра, пробелы по краям отбрасываются.
    """

    def __init__(self, tags: Optional[Iterable[str]] = None):
        self._tags: List[str] = []
        for tag in tags or ():
            self.add(tag)

    def add(self, raw: str) -> bool:
        """Добавление тега в конец списка, False если он пустой или уже есть"""
        tag = raw.strip()
        if not tag or tag in self._tags:
            return False
        self._tags.append(tag)
        return True

    def remove(self, value: str) -> bool:
        """Удаление тега, False если такого тега нет"""
        try:
            self._tags.remove(value)
        except ValueError:
            return False
        return True

    def to_list(self) -> List[str]:
        return list(self._tags)

    def __contains__(self, value: object) -> bool:
        return value in self._tags

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._tags))

    def __len__(self) -> int:
        return len(self._tags)

    def __eq__(self, other) -> bool:
        if isinstance(other, TagList):
            return self._tags == other._tags
        if isinstance(other, list):
            return self._tags == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"TagList({self._tags!r})"
