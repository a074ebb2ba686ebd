"""Генератор клиента из записей REST документации"""

from .generator import ClientGenerator, generate_client

__all__ = ["ClientGenerator", "generate_client"]
