"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from native_package.core.models.package import PackageConfig
from native_package.core.services.native_package.detection.host_facts import HostFacts


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def package_config() -> PackageConfig:
    """package_urls with a full deb entry, an rpm entry, and an apk entry missing arm."""
    return PackageConfig.model_validate({
        "deb": {
            "name": "foo",
            "ia64": "http://x/foo.deb",
            "aarch64": "http://x/foo_arm64.deb",
        },
        "rpm": {
            "name": "foo",
            "ia64": "http://x/foo.x86_64.rpm",
        },
        "apk": {
            "name": "bar",
            "aarch64": "http://x/bar.apk",
        },
    })


@pytest.fixture
def debian_x86_64() -> HostFacts:
    return HostFacts(os_family="Debian", architecture="x86_64", distro_id="debian")


@pytest.fixture
def alpine_armv7() -> HostFacts:
    return HostFacts(os_family="Alpine", architecture="armv7l", distro_id="alpine")


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A native_package.yml in a temp directory."""
    content = textwrap.dedent("""\
        package_urls:
          deb:
            name: foo
            ia64: http://x/foo.deb
            arm: http://x/foo_armhf.deb
          rpm:
            name: foo
            ia64: http://x/foo.x86_64.rpm
          apk:
            name: bar
        installed: true
    """)
    path = tmp_path / "native_package.yml"
    path.write_text(content)
    return path
