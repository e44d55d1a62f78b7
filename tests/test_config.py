"""Tests for settings loading and persistence."""

import pytest

from biblizap.config import Settings, save_settings
from biblizap.engine.filters import AbsentFieldPolicy


def write_settings(base_dir, text):
    metadata = base_dir / ".metadata"
    metadata.mkdir(exist_ok=True)
    (metadata / "settings.yaml").write_text(text, encoding="utf-8")


def test_defaults(settings, tmp_path):
    assert settings.product_name == "BibliZap"
    assert settings.export_dir == tmp_path / "exports"
    assert settings.page_sizes == [10, 50, 100, 500]
    assert settings.default_page_size == 10
    assert settings.window_radius == 2
    assert settings.absent_field_policy is AbsentFieldPolicy.EXCLUDE
    assert (tmp_path / ".metadata").is_dir()


def test_singleton(settings):
    assert Settings.load() is settings
    assert Settings() is settings


def test_reads_yaml(tmp_path):
    write_settings(tmp_path, (
        "product_name: Zap\n"
        "export_dir: out\n"
        "page_sizes: [25, 5]\n"
        "default_page_size: 25\n"
        "window_radius: 1\n"
        "absent_field_policy: PASS\n"
        "log_level: debug\n"
    ))
    settings = Settings.reload(tmp_path)
    assert settings.product_name == "Zap"
    assert settings.export_dir == tmp_path / "out"
    assert settings.page_sizes == [5, 25]
    assert settings.default_page_size == 25
    assert settings.window_radius == 1
    assert settings.absent_field_policy is AbsentFieldPolicy.PASS
    assert settings.log_level == "DEBUG"


def test_invalid_values_fall_back(tmp_path):
    write_settings(tmp_path, (
        "page_sizes: [10, -1]\n"
        "default_page_size: 7\n"
        "window_radius: -3\n"
        "absent_field_policy: sometimes\n"
    ))
    settings = Settings.reload(tmp_path)
    assert settings.page_sizes == [10, 50, 100, 500]
    assert settings.default_page_size == 10
    assert settings.window_radius == 2
    assert settings.absent_field_policy is AbsentFieldPolicy.EXCLUDE


def test_unreadable_yaml_is_ignored(tmp_path):
    write_settings(tmp_path, "page_sizes: [10\n")
    assert Settings.reload(tmp_path).page_sizes == [10, 50, 100, 500]


def test_copies_example_files(tmp_path):
    example = tmp_path / ".metadata.example"
    example.mkdir()
    (example / "settings.yaml").write_text("product_name: FromExample\n", encoding="utf-8")
    settings = Settings.reload(tmp_path)
    assert (tmp_path / ".metadata" / "settings.yaml").exists()
    assert settings.product_name == "FromExample"


def test_update(settings):
    settings.update(window_radius=3)
    assert Settings.load().window_radius == 3
    with pytest.raises(AttributeError):
        settings.update(colour="blue")


def test_save_settings_round_trip(settings, tmp_path):
    settings.update(absent_field_policy=AbsentFieldPolicy.PASS, default_page_size=50)
    save_settings(settings.metadata_dir / "settings.yaml", settings)
    reloaded = Settings.reload(tmp_path)
    assert reloaded.absent_field_policy is AbsentFieldPolicy.PASS
    assert reloaded.default_page_size == 50
    assert reloaded.export_dir == tmp_path / "exports"


def test_save_settings_keeps_nested_export_dir(settings, tmp_path):
    settings.update(export_dir=tmp_path / "out" / "biblizap")
    save_settings(settings.metadata_dir / "settings.yaml", settings)
    assert Settings.reload(tmp_path).export_dir == tmp_path / "out" / "biblizap"


def test_save_settings_keeps_outside_export_dir(settings, tmp_path):
    outside = tmp_path.parent / "shared-exports"
    settings.update(export_dir=outside)
    save_settings(settings.metadata_dir / "settings.yaml", settings)
    assert Settings.reload(tmp_path).export_dir == outside
