from pathlib import Path

import pytest

from data_models.content import CategoryOrder
from utils.config import load_settings, load_yaml


class TestLoadYaml:
    def test_missing_file_is_empty(self, tmp_path):
        assert load_yaml(tmp_path / "missing.yaml") == {}

    def test_empty_file_is_empty(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_yaml(path) == {}

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="must be a mapping"):
            load_yaml(path)


class TestLoadSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CONTENT_BROWSE_STORAGE_PATH", raising=False)
        monkeypatch.delenv("CONTENT_BROWSE_CATEGORY_ORDER", raising=False)

        settings = load_settings()

        assert settings.storage_path == Path(".") / "data"
        assert settings.category_order == CategoryOrder.NAME
        assert settings.footer_articles_per_category == 5
        assert settings.cache_max_age == 3600

    def test_environment_prefix(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CONTENT_BROWSE_STORAGE_PATH", str(tmp_path))
        monkeypatch.setenv("CONTENT_BROWSE_CATEGORY_ORDER", "created")

        settings = load_settings()

        assert settings.storage_path == tmp_path
        assert settings.category_order == CategoryOrder.CREATED

    def test_yaml_overrides(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "base_path: /srv/site\nstorage_path: content\n"
            "footer_articles_per_category: 3\n",
            encoding="utf-8",
        )

        settings = load_settings(path)

        assert settings.storage_path == Path("/srv/site/content")
        assert settings.footer_articles_per_category == 3

    def test_negative_limit_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("footer_articles_per_category: -1\n", encoding="utf-8")

        with pytest.raises(ValueError):
            load_settings(path)
