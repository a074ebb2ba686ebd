"""Утилиты для форматирования doc-комментариев генерируемого кода"""

from typing import List, Optional


def flatten_text(text: Optional[str]) -> Optional[str]:
    """Переводы строк в описании заменяются пробелами"""
    if text is None:
        return None
    return text.replace("\n", " ")


def format_doc_comment(groups: List[List[str]], indent: str = "    ") -> str:
    """
    Собирает doc-комментарий из групп строк.

    Каждая строка становится "/// строка", группы разделяются пустой
    строкой комментария "///".

    Args:
        groups: Список групп, каждая группа - список строк
        indent: Отступ перед "///"

    Returns:
        Текст комментария, каждая строка завершается переводом строки

    Examples:
        >>> format_doc_comment([["a"], ["b", "c"]], indent="")
        '/// a\\n///\\n/// b\\n/// c\\n'
    """
    rendered = []
    for group in groups:
        rendered.append("".join(f"{indent}/// {line}\n" for line in group))

    return f"{indent}///\n".join(rendered)
