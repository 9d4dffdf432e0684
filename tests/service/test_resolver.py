"""
Tests for artifact resolution — lookups, defaulting, filenames.
"""

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from native_package.core.models.package import (
    ArchKey,
    PackageConfig,
    PackageType,
)
from native_package.core.services.native_package.resolver.artifact import (
    artifact_filename,
    resolve,
)


class TestResolve:
    def test_install_resolves_url_and_name(self, package_config):
        t = resolve(package_config, PackageType.DEB, ArchKey.IA64, want_install=True)
        assert t.url == "http://x/foo.deb"
        assert t.name == "foo"
        assert t.package_type is PackageType.DEB
        assert t.arch_key is ArchKey.IA64

    def test_remove_never_resolves_url(self, package_config):
        t = resolve(package_config, PackageType.DEB, ArchKey.IA64, want_install=False)
        assert t.url is None
        assert t.name == "foo"

    def test_missing_arch_url_is_none(self, package_config):
        t = resolve(package_config, PackageType.APK, ArchKey.ARM, want_install=True)
        assert t.url is None
        assert t.name == "bar"

    def test_missing_type_entry(self):
        cfg = PackageConfig.model_validate({"deb": {"name": "foo", "ia64": "http://x/foo.deb"}})
        t = resolve(cfg, PackageType.RPM, ArchKey.IA64, want_install=True)
        assert t.url is None
        assert t.name is None

    def test_missing_name(self):
        cfg = PackageConfig.model_validate({"rpm": {"ia64": "http://x/foo.rpm"}})
        t = resolve(cfg, PackageType.RPM, ArchKey.IA64, want_install=True)
        assert t.url == "http://x/foo.rpm"
        assert t.name is None

    @pytest.mark.parametrize("ptype, akey", [
        (PackageType.UNSUPPORTED, ArchKey.IA64),
        (PackageType.DEB, ArchKey.UNSUPPORTED),
        (PackageType.UNSUPPORTED, ArchKey.UNSUPPORTED),
    ])
    @pytest.mark.parametrize("want_install", [True, False])
    def test_unsupported_never_looks_up(self, ptype, akey, want_install):
        cfg = MagicMock(spec=PackageConfig)
        t = resolve(cfg, ptype, akey, want_install)
        assert t.url is None
        assert t.name is None
        assert cfg.mock_calls == []
        assert not t.supported

    def test_target_is_frozen(self, package_config):
        t = resolve(package_config, PackageType.DEB, ArchKey.IA64, want_install=True)
        with pytest.raises(ValidationError):
            t.url = "http://elsewhere"


class TestArtifactFilename:
    def test_last_path_segment(self):
        assert artifact_filename("http://x/pool/foo_1.0_amd64.deb", PackageType.DEB) == "foo_1.0_amd64.deb"

    def test_query_and_fragment_ignored(self):
        url = "https://cdn.example.com/dl/foo.rpm?token=abc#frag"
        assert artifact_filename(url, PackageType.RPM) == "foo.rpm"

    def test_percent_decoding(self):
        assert artifact_filename("http://x/my%20pkg.apk", PackageType.APK) == "my pkg.apk"

    def test_fallback_when_no_segment(self):
        assert artifact_filename("http://x/", PackageType.DEB) == "package.deb"
        assert artifact_filename("http://x", PackageType.APK) == "package.apk"

    def test_extension_appended_when_missing(self):
        url = "https://releases.example.com/foo/latest/download"
        assert artifact_filename(url, PackageType.DEB) == "download.deb"

    def test_other_extension_kept_and_suffixed(self):
        assert artifact_filename("http://x/foo.tar", PackageType.RPM) == "foo.tar.rpm"

    @pytest.mark.parametrize("url", [
        "http://x/pool/%2E%2E",
        "http://x/pool/..",
        "http://x/pool/a%2F..",
    ])
    def test_dot_segments_fall_back(self, url):
        assert artifact_filename(url, PackageType.DEB) == "package.deb"
