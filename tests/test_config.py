from pathlib import Path

import pytest

from writeup_export.config import AppConfig, get_cached_config, load_config, load_layered_config


def test_package_defaults_load(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = load_config()
    assert isinstance(config, AppConfig)
    assert config.page.size == "A4"
    assert config.page.margin_mm == 20
    assert config.branding.creator == "ModelMix AI"


def test_load_config_overlays_file(tmp_path: Path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
        page: {size: letter, margin_mm: 25}
        branding: {attribution: Exported by Acme}
        dates: {format: "%Y-%m-%d"}
        """,
        encoding="utf-8",
    )

    config = load_config(config_path)
    assert config.page.size == "LETTER"
    assert config.page.margin_mm == 25
    assert config.branding.attribution == "Exported by Acme"
    assert config.branding.creator == "ModelMix AI"
    assert config.dates.format == "%Y-%m-%d"


def test_invalid_page_size(tmp_path: Path):
    config_path = tmp_path / "bad.yaml"
    config_path.write_text("page: {size: B7}\n", encoding="utf-8")

    with pytest.raises(Exception):
        load_config(config_path)


def test_environment_override(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("WRITEUP_EXPORT_MARGIN_MM", "15")
    monkeypatch.setenv("WRITEUP_EXPORT_OUTPUT_DIR", "custom")

    data, sources = load_layered_config()

    assert data["page"]["margin_mm"] == 15.0
    assert data["output"]["directory"] == "custom"
    assert "env:WRITEUP_EXPORT_*" in sources


def test_config_file_from_environment(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    overlay = tmp_path / "overlay.yaml"
    overlay.write_text("branding: {creator: Someone Else}\n", encoding="utf-8")
    monkeypatch.setenv("WRITEUP_EXPORT_CONFIG", str(overlay))

    assert load_config().branding.creator == "Someone Else"


def test_cached_config_is_reused():
    get_cached_config.cache_clear()
    assert get_cached_config() is get_cached_config()
