import io
import tarfile
from pathlib import Path

import pytest

import goswitch

DISTRIBUTION = "linux-amd64"


def elf_header(e_type: int = 2) -> bytes:
    """Minimal little endian 64 bit ELF header with the given type."""
    header = b"\x7fELF\x02\x01\x01" + b"\0" * 9
    return header + e_type.to_bytes(2, "little") + b"\0" * 46


def build_ordered_archive(entries) -> bytes:
    """Gzip tar of (name, data) entries in order, data None for a directory."""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        for name, data in entries:
            info = tarfile.TarInfo(name)
            info.mode = 0o755
            if data is None:
                info.type = tarfile.DIRTYPE
                tar.addfile(info)
            else:
                info.size = len(data)
                tar.addfile(info, io.BytesIO(data))
    return buf.getvalue()


def build_archive(files: dict, dirs=("go", "go/bin")) -> bytes:
    entries = [(name, None) for name in dirs] + list(files.items())
    return build_ordered_archive(entries)


def go_archive(version: str, exes=("go", "gofmt")) -> bytes:
    files = {f"go/bin/{exe}": elf_header() for exe in exes}
    files["go/VERSION"] = f"go{version}\n".encode()
    files["go/src/README.md"] = b"# Go source\n"
    return build_archive(files, dirs=("go", "go/bin", "go/src"))


class FakeUpstream:
    """Stands in for the go.dev downloads site."""

    def __init__(self, published=(), latest=None) -> None:
        self.distribution = DISTRIBUTION
        self.published = list(published)
        self.latest = latest
        self.archives = {}
        self.index_fetches = 0
        self.archive_fetches = []
        self.fail_download = False
        for version in self.published:
            self.archives[self.url(version)] = go_archive(version)

    @staticmethod
    def url(version: str) -> str:
        return f"https://go.dev/dl/go{version}.{DISTRIBUTION}.tar.gz"

    def fetch_index(self) -> str:
        self.index_fetches += 1
        lines = ["<html><body>"]
        if self.latest:
            lines.append(
                '<a class="download downloadBox" '
                f'href="/dl/go{self.latest}.{DISTRIBUTION}.tar.gz">'
            )
        for n, version in enumerate(self.published):
            cls = "toggleVisible" if n == 0 else "toggle"
            lines.append(f'<div class="{cls}" id="go{version}">')
        lines.append("</body></html>")
        return "\n".join(lines)

    def fetch_archive(self, locator, dest: Path, progress=None) -> None:
        self.archive_fetches.append(locator)
        if self.fail_download:
            raise goswitch.NetworkFailure(f'Failed to fetch "{locator}": boom')
        data = self.archives[locator]
        dest.write_bytes(data)
        if progress:
            progress(len(data), len(data))


@pytest.fixture(autouse=True)
def elf_host(monkeypatch):
    monkeypatch.setattr(goswitch, "HOST", "Linux")


@pytest.fixture
def root(tmp_path) -> Path:
    path = tmp_path / "root"
    path.mkdir()
    return path


@pytest.fixture
def store(root) -> goswitch.VersionStore:
    store = goswitch.VersionStore(root)
    store.create()
    return store


@pytest.fixture
def add_version(store):
    """Lay out an installed version directly on disk."""

    def add(version: str, exes=("go", "gofmt")) -> Path:
        bdir = store.version_dir(version) / "bin"
        bdir.mkdir(parents=True)
        for exe in exes:
            path = bdir / exe
            path.write_bytes(elf_header())
            path.chmod(0o644)
        return store.version_dir(version)

    return add


@pytest.fixture
def switcher(store) -> goswitch.Switcher:
    return goswitch.Switcher(store)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream(published=["1.22.0", "1.21.0", "1.20"], latest="1.22.0")


@pytest.fixture
def installer(store, switcher, upstream) -> goswitch.Installer:
    return goswitch.Installer(store, switcher, goswitch.GoDownloads(upstream))
