"""
Tests for config loading — native_package.yml parsing and discovery.
"""

import textwrap
from pathlib import Path

import pytest

from native_package.core.config.loader import (
    CONFIG_FILE,
    ConfigError,
    find_config_file,
    load_spec,
    parse_spec,
)
from native_package.core.models.package import ArchKey, PackageType


class TestFindConfigFile:
    def test_finds_in_current_dir(self, config_file: Path):
        assert find_config_file(config_file.parent) == config_file.resolve()

    def test_walks_up(self, config_file: Path):
        nested = config_file.parent / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == config_file.resolve()

    def test_not_found(self, tmp_path: Path):
        empty = tmp_path / "empty"
        empty.mkdir()
        # tmp_path's ancestors never hold a native_package.yml
        assert find_config_file(empty) is None


class TestLoadSpec:
    def test_load(self, config_file: Path):
        spec = load_spec(config_file)
        assert spec.installed is True
        deb = spec.package_urls.entry(PackageType.DEB)
        assert deb.name == "foo"
        assert deb.url_for(ArchKey.IA64) == "http://x/foo.deb"
        assert deb.url_for(ArchKey.ARM) == "http://x/foo_armhf.deb"
        assert spec.package_urls.entry(PackageType.APK).urls == {}

    def test_auto_detect_from_cwd(self, config_file: Path, monkeypatch):
        monkeypatch.chdir(config_file.parent)
        spec = load_spec()
        assert spec.package_urls.configured_types() == [
            PackageType.DEB, PackageType.RPM, PackageType.APK,
        ]

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_spec(tmp_path / CONFIG_FILE)

    def test_no_file_anywhere(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ConfigError, match="No native_package.yml found"):
            load_spec()

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text("package_urls: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_spec(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_spec(path)

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text("")
        spec = load_spec(path)
        assert spec.installed is True
        assert spec.package_urls.configured_types() == []

    def test_bad_installed_flag(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text("installed: maybe\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_spec(path)

    def test_aliases_and_removal(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text(textwrap.dedent("""\
            package_urls:
              rpm:
                name: foo
                x86_64: http://x/foo.x86_64.rpm
            installed: false
        """))
        spec = load_spec(path)
        assert spec.installed is False
        rpm = spec.package_urls.entry(PackageType.RPM)
        assert rpm.url_for(ArchKey.IA64) == "http://x/foo.x86_64.rpm"


class TestParseSpec:
    def test_none_is_empty_document(self):
        assert parse_spec(None).installed is True

    def test_package_urls_not_a_mapping(self):
        with pytest.raises(ConfigError, match="<document>"):
            parse_spec({"package_urls": ["deb", "rpm"]})

    def test_source_in_message(self):
        with pytest.raises(ConfigError, match="inline"):
            parse_spec("deb", source="inline")
