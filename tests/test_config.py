"""
Тесты для системы конфигурации
"""

import os
import tempfile

import pytest

from restdoc_codegen.config import CodegenConfig
from restdoc_codegen.exceptions import ConfigError


class TestCodegenConfig:
    """Тесты конфигурации генератора"""

    def test_config_creation(self):
        """Тест создания конфигурации"""
        config = CodegenConfig(records="records.json", dirname="test_client")

        assert config.records == "records.json"
        assert config.dirname == "test_client"
        assert config.base_path == "/admin/realms"

    def test_config_save_and_load(self):
        """Тест сохранения и загрузки конфигурации"""
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = os.path.join(temp_dir, "test_restdoc.toml")

            original_config = CodegenConfig(
                records="https://docs.example.com/records.json",
                stream="stream.toml",
                dirname="example_client",
                api_version="26.0.0",
            )
            original_config.save_to_file(config_path)

            loaded_config = CodegenConfig.from_file(config_path)

            assert loaded_config is not None
            assert loaded_config.records == "https://docs.example.com/records.json"
            assert loaded_config.stream == "stream.toml"
            assert loaded_config.dirname == "example_client"
            assert loaded_config.api_version == "26.0.0"

    def test_config_search_dir(self, tmp_path):
        """Тест поиска restdoc.toml в указанной директории"""
        CodegenConfig(records="records.json").save_to_file(
            str(tmp_path / "restdoc.toml")
        )

        config = CodegenConfig.from_file(search_dir=str(tmp_path))

        assert config.records == "records.json"
        assert config.dirname == "generated"

    def test_config_file_not_exists(self):
        """Тест загрузки несуществующего конфига"""
        config = CodegenConfig.from_file("nonexistent.toml")
        assert config is None

    def test_broken_config(self, tmp_path):
        """Тест некорректного TOML"""
        config_path = tmp_path / "restdoc.toml"
        config_path.write_text("records = [unclosed", encoding="utf-8")

        with pytest.raises(ConfigError):
            CodegenConfig.from_file(str(config_path))

    def test_config_merge_with_args(self):
        """Тест объединения конфига с аргументами"""
        config = CodegenConfig(records="old.json", dirname="original_client")

        class MockArgs:
            def __init__(self):
                self.records = "new.json"
                self.stream = None
                self.dirname = None
                self.api_version = None
                self.base_path = None

        merged = config.merge_with_args(MockArgs())

        assert merged.records == "new.json"  # Переписан из args
        assert merged.dirname == "original_client"  # Остался из config
        assert merged.base_path == "/admin/realms"

    def test_default_values(self):
        """Тест значений по умолчанию"""
        config = CodegenConfig()

        assert config.records is None
        assert config.dirname is None
        assert config.api_version is None


class TestApiVersion:
    """Тесты выбора версии API для ссылок на документацию"""

    def test_from_config(self):
        config = CodegenConfig(api_version="25.0.1")
        assert config.resolve_api_version({"KEYCLOAK_VERSION": "24.0.0"}) == "25.0.1"

    def test_from_environment(self):
        config = CodegenConfig()
        assert config.resolve_api_version({"KEYCLOAK_VERSION": "24.0.0"}) == "24.0.0"

    def test_default(self):
        assert CodegenConfig().resolve_api_version({}) == "latest"
