"""
Исключения генератора

Все ошибки генерации наследуются от GenerationError. Ядро генератора
только выбрасывает исключения; перехватывает их CLI, который печатает
сообщение и завершает процесс с кодом 1. Файлы записываются только после
успешной генерации всего проекта, поэтому частичного вывода не бывает.
"""

from typing import Optional


class GenerationError(Exception):
    """Базовая ошибка генерации"""


class UnknownTypeError(GenerationError):
    """Неизвестная строка типа в документации"""

    def __init__(self, raw_type: str, context: Optional[str] = None):
        self.raw_type = raw_type
        self.context = context
        message = f"Неизвестный тип: {raw_type!r}"
        if context:
            message += f" ({context})"
        super().__init__(message)


class StreamOverrideError(GenerationError):
    """Для ответа типа Stream нет записи в таблице переопределений"""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Stream для {path} не найден в таблице переопределений")


class UnresolvedReferenceError(GenerationError):
    """Ссылка на тип, отсутствующий в реестре"""

    def __init__(self, name: str, context: Optional[str] = None):
        self.name = name
        self.context = context
        message = f"Тип {name!r} отсутствует в реестре"
        if context:
            message += f" ({context})"
        super().__init__(message)


class RecordsLoadError(GenerationError):
    """Не удалось загрузить или разобрать документ с записями"""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Не удалось загрузить записи из {source}: {reason}")


class ConfigError(GenerationError):
    """Некорректная конфигурация генератора"""
