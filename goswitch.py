#!/usr/bin/python3
# PYTHON_ARGCOMPLETE_OK
'''
Command line tool to download, install, switch between, and remove
multiple Go toolchain versions from https://go.dev/dl/.

The active version is exposed as symlinks in a shared bin directory
which you add to your PATH. There is no locking, so only run one
instance at a time against the same prefix directory.
'''
from __future__ import annotations

import os
import platform
import re
import shlex
import shutil
import sys
from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Any, Callable, Iterator

import argcomplete
import platformdirs
from packaging.version import parse as parse_version

GO_SITE = 'https://go.dev'
DOWNLOADS_PAGE = f'{GO_SITE}/dl/'
LATEST = 'latest'
TIMEOUT = 60
CHUNK_SIZE = 64 * 1024

# Sample version for documentation/usage examples
SAMPL_VERSION = '1.22.0'

PROG = Path(__file__).stem
CNFFILE = platformdirs.user_config_path(f'{PROG}-flags.conf')

# The link for this executable identifies the active version
PRIMARY_EXE = 'go'

HOST = platform.system()

# Default distributions for various platforms
DISTRIBUTIONS = {
    ('Linux', 'x86_64'): 'linux-amd64',
    ('Linux', 'aarch64'): 'linux-arm64',
    ('Linux', 'armv7l'): 'linux-armv6l',
    ('Linux', 'armv6l'): 'linux-armv6l',
    ('Linux', 'i686'): 'linux-386',
    ('Darwin', 'x86_64'): 'darwin-amd64',
    ('Darwin', 'arm64'): 'darwin-arm64',
    ('FreeBSD', 'amd64'): 'freebsd-amd64',
}

ProgressFunc = Callable[[int, int], None]

class GoswitchError(Exception):
    'Base class for all errors reported to the user'

class NotInstalled(GoswitchError):
    'Version is not installed'

class AlreadyInstalled(GoswitchError):
    'Version is already installed'

class InvalidVersion(GoswitchError):
    'String is not syntactically a version'

class Unavailable(GoswitchError):
    'Version is well formed but has not been published'

class NetworkFailure(GoswitchError):
    'Failed to fetch from upstream'

class ParseFailure(GoswitchError):
    'Upstream page format not recognized'

class IOFailure(GoswitchError):
    'Filesystem or permission error'

class ExtractFailure(GoswitchError):
    'Failed to unpack a release archive'

def get_version() -> str:
    'Return the version of this package'
    from importlib.metadata import version
    try:
        ver = version(PROG)
    except Exception:
        ver = 'unknown'

    return ver

def warn(msg: str) -> None:
    'Report a non fatal problem'
    print(f'Warning: {msg}', file=sys.stderr)

def rm_path(path: Path) -> None:
    'Remove the given path'
    if path.is_symlink():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)
    elif path.exists():
        path.unlink()

def is_version(version: str) -> bool:
    'Check if a string is syntactically a Go version, e.g. 1, 1.22, 1.22.0'
    return bool(re.fullmatch(r'\d+(\.\d+(\.\d+)?)?', version, re.ASCII))

# Executable format sniffers. Each takes the first bytes of a file.
ELF_MAGIC = b'\x7fELF'
ELF_TYPES = {2, 3}  # ET_EXEC, ET_DYN
MACHO_MAGICS = {
    b'\xcf\xfa\xed\xfe': 'little',
    b'\xce\xfa\xed\xfe': 'little',
    b'\xfe\xed\xfa\xcf': 'big',
    b'\xfe\xed\xfa\xce': 'big',
}
MACHO_EXECUTE = 2
HEADER_SIZE = 32

def is_elf_executable(header: bytes) -> bool:
    'Check for an ELF executable or shared object header'
    if len(header) < 18 or header[:4] != ELF_MAGIC:
        return False

    order = 'little' if header[5] == 1 else 'big'
    return int.from_bytes(header[16:18], order) in ELF_TYPES

def is_macho_executable(header: bytes) -> bool:
    'Check for a Mach-O executable header'
    if len(header) < 16 or not (order := MACHO_MAGICS.get(header[:4])):
        return False

    return int.from_bytes(header[12:16], order) == MACHO_EXECUTE

SNIFFERS = {
    'Darwin': is_macho_executable,
}

def is_executable(path: Path) -> bool:
    'Check if path is a binary runnable on this host, by its header'
    sniff = SNIFFERS.get(HOST, is_elf_executable)
    try:
        with path.open('rb') as fp:
            header = fp.read(HEADER_SIZE)
    except OSError:
        return False

    return sniff(header)

class Progress:
    'Render a progress bar on stderr'
    WIDTH = 40

    def __init__(self, label: str, enabled: bool = True) -> None:
        self.label = label
        self.enabled = enabled
        self._last = ''

    def __enter__(self) -> Progress:
        return self

    def __exit__(self, *exc: Any) -> None:
        # Clear the bar once finished
        if self.enabled and self._last:
            sys.stderr.write('\r' + ' ' * len(self._last) + '\r')
            sys.stderr.flush()

    def update(self, done: int, total: int) -> None:
        'Show done out of total, total <= 0 means unknown'
        if not self.enabled:
            return

        if total > 0:
            pct = min(done * 100 // total, 100)
            filled = pct * self.WIDTH // 100
            bar = '#' * filled + '-' * (self.WIDTH - filled)
            line = f'{self.label} [{bar}] {pct:3d}%'
        else:
            line = f'{self.label} {done // 1024} KiB'

        if line != self._last:
            self._last = line
            sys.stderr.write('\r' + line)
            sys.stderr.flush()

class Upstream:
    'Network access to the Go downloads site'
    def __init__(self, distribution: str) -> None:
        self.distribution = distribution
        self._index: str | None = None

    def fetch_index(self) -> str:
        'Fetch the downloads page, only once per run'
        from urllib.request import urlopen
        if self._index is None:
            try:
                with urlopen(DOWNLOADS_PAGE, timeout=TIMEOUT) as url:
                    self._index = url.read().decode('utf-8', 'replace')
            except Exception as e:
                raise NetworkFailure(
                        f'Failed to fetch "{DOWNLOADS_PAGE}": {e}') from e

        return self._index

    def fetch_archive(self, locator: str, dest: Path,
                      progress: ProgressFunc | None = None) -> None:
        'Download a release archive to dest'
        from urllib.request import urlopen
        try:
            with urlopen(locator, timeout=TIMEOUT) as url, \
                    dest.open('wb') as fp:
                size = int(url.headers.get('Content-Length') or -1)
                done = 0
                while chunk := url.read(CHUNK_SIZE):
                    fp.write(chunk)
                    done += len(chunk)
                    if progress:
                        progress(done, size)

            if 0 < size != done:
                raise OSError(f'got {done} of {size} bytes')
        except Exception as e:
            # Never keep a partial download
            rm_path(dest)
            raise NetworkFailure(f'Failed to fetch "{locator}": {e}') from e

class GoDownloads:
    'Knows which Go versions have been published upstream'
    def __init__(self, upstream: Upstream) -> None:
        self.upstream = upstream
        self._latest: tuple[str, str] | None = None

    def locator(self, version: str) -> str:
        'Return the archive URL for a version'
        return f'{DOWNLOADS_PAGE}go{version}.{self.upstream.distribution}'\
                '.tar.gz'

    def is_published(self, version: str) -> bool:
        'Check the downloads page lists this version'
        marker = r'<div class="toggle(?:Visible)?" id="go' \
                + re.escape(version) + r'">'
        return bool(re.search(marker, self.upstream.fetch_index()))

    def resolve_latest(self) -> tuple[str, str]:
        '''
        Return (version, locator) of the latest release.

        The result is kept for the rest of the run so that every caller
        sees the same version that was downloaded.
        '''
        if self._latest is None:
            dist = re.escape(self.upstream.distribution)
            pattern = r'<a\s+class="download downloadBox"\s+' \
                    rf'href="(/dl/go(\d+\.\d+(?:\.\d+)?)\.{dist}\.tar\.gz)">'
            if not (match := re.search(pattern, self.upstream.fetch_index())):
                raise ParseFailure('Failed to find latest '
                                   f'{self.upstream.distribution} release '
                                   f'on "{DOWNLOADS_PAGE}".')

            self._latest = match.group(2), GO_SITE + match.group(1)

        return self._latest

class VersionStore:
    'The installed versions on disk'
    def __init__(self, root: Path) -> None:
        self.root = root
        self.bin_dir = root / 'bin'
        self.versions_dir = root / 'version'
        self.cache_dir = root / 'cache'

    def create(self) -> None:
        'Create the store subdirectories'
        for path in (self.bin_dir, self.versions_dir, self.cache_dir):
            path.mkdir(exist_ok=True)

    def clean_cache(self) -> None:
        'Remove all downloaded archives'
        if not self.cache_dir.is_dir():
            return

        for path in self.cache_dir.iterdir():
            try:
                rm_path(path)
            except OSError as e:
                warn(f'Failed to remove "{path}": {e}')

    def version_dir(self, version: str) -> Path:
        return self.versions_dir / version

    def cache_entry(self, version: str) -> Path:
        return self.cache_dir / version

    def staging_dir(self, version: str) -> Path:
        return self.versions_dir / f'.{version}-tmp'

    def list(self) -> list[str]:
        'Return installed versions, newest first'
        if not self.versions_dir.is_dir():
            return []

        try:
            names = [p.name for p in self.versions_dir.iterdir()
                     if p.is_dir() and not p.is_symlink()
                     and is_version(p.name)]
        except OSError as e:
            raise IOFailure(f'Failed to read "{self.versions_dir}": {e}') \
                    from e

        return sorted(names, key=parse_version, reverse=True)

    def is_installed(self, version: str) -> bool:
        return self.version_dir(version).is_dir()

    def remove(self, version: str) -> None:
        'Remove a version'
        vdir = self.version_dir(version)
        if not vdir.is_dir():
            raise NotInstalled(f'Go version {version} is not installed.')

        try:
            shutil.rmtree(vdir)
        except OSError as e:
            raise IOFailure(f'Failed to remove version {version}: {e}') from e

    def executables_of(self, version: str) -> list[Path]:
        'Return the runnable binaries a version provides'
        bdir = self.version_dir(version) / 'bin'
        try:
            entries = sorted(bdir.iterdir())
        except OSError as e:
            raise IOFailure(f'Failed to read "{bdir}": {e}') from e

        return [p for p in entries if is_executable(p)]

class Resolver:
    'Work out which version the active links point at'
    def __init__(self, store: VersionStore) -> None:
        self.store = store

    def current(self) -> str | None:
        'Return the active version, or None if no version is active'
        link = self.store.bin_dir / PRIMARY_EXE
        try:
            if not link.exists():
                return None

            target = os.readlink(link)
        except OSError as e:
            raise IOFailure(f'Failed to read "{link}" link: {e}') from e

        # Link is <root>/version/<id>/bin/<exe>
        return Path(target).parent.parent.name

def replace_link(source: Path, link: Path) -> None:
    'Atomically point link at source, and make source runnable'
    tmp = link.with_name(f'.{link.name}-tmp')
    rm_path(tmp)
    tmp.symlink_to(source)
    try:
        tmp.replace(link)
    except OSError:
        rm_path(tmp)
        raise

    os.chmod(link, 0o755)

class Switcher:
    'Activate and remove versions, keeping the links consistent'
    def __init__(self, store: VersionStore,
                 resolver: Resolver | None = None) -> None:
        self.store = store
        self.resolver = resolver or Resolver(store)

    def links(self) -> Iterator[Path]:
        'Iterate over the links in the shared bin dir, except our own'
        if not self.store.bin_dir.is_dir():
            return

        for path in self.store.bin_dir.iterdir():
            if path.is_symlink() and path.name != PROG \
                    and not path.name.startswith('.'):
                yield path

    def is_managed(self, link: Path) -> bool:
        'Check if a link points into the version store'
        return self.store.versions_dir in Path(os.readlink(link)).parents

    def switch_to(self, version: str) -> None:
        '''
        Point the shared bin links at the given version.

        The new executables are all found before any link is touched.
        Every link is attempted, and any failures are reported together.
        '''
        if not self.store.is_installed(version):
            raise NotInstalled(f'Go version {version} is not installed.')

        exes = self.store.executables_of(version)
        if not exes:
            raise IOFailure(f'Go version {version} provides no executables.')

        self.store.bin_dir.mkdir(parents=True, exist_ok=True)
        errors = []
        for exe in exes:
            try:
                replace_link(exe, self.store.bin_dir / exe.name)
            except OSError as e:
                errors.append(f'{exe.name}: {e}')

        # Remove links to another version that this one does not provide
        names = {exe.name for exe in exes}
        try:
            for link in list(self.links()):
                if link.name not in names and self.is_managed(link):
                    link.unlink()
        except OSError as e:
            errors.append(str(e))

        if errors:
            raise IOFailure(f'Failed to switch to version {version}: '
                            + '; '.join(errors))

    def auto_switch(self) -> str | None:
        'Activate the only installed version, returns it if switched'
        versions = self.store.list()
        if len(versions) != 1:
            return None

        self.switch_to(versions[0])
        return versions[0]

    def clear(self) -> None:
        'Remove all version links from the shared bin dir'
        try:
            for link in list(self.links()):
                if is_executable(link) or self.is_managed(link):
                    link.unlink()
        except OSError as e:
            raise IOFailure('Failed to remove links in '
                            f'"{self.store.bin_dir}": {e}') from e

    def uninstall(self, version: str) -> str | None:
        '''
        Remove a version.

        If it was active, the links are removed first. Returns the version
        automatically switched to afterwards, if any.
        '''
        if not is_version(version):
            raise InvalidVersion(f'Invalid Go version "{version}": use '
                                 f'"{PROG} list" to view installed versions.')

        if not self.store.is_installed(version):
            raise NotInstalled(f'Go version {version} is not installed.')

        if self.resolver.current() == version:
            self.clear()

        self.store.remove(version)

        try:
            return self.auto_switch()
        except GoswitchError as e:
            warn(f'Failed to auto-switch after uninstall: {e}')

        return None

def strip_prefix(name: str, prefix: str) -> str:
    'Strip leading prefix dir from an archive entry name'
    if not prefix:
        return name

    if name == prefix:
        return ''

    return name[len(prefix) + 1:] if name.startswith(prefix + '/') else name

def extract(archive: Path, target: Path,
            progress: ProgressFunc | None = None) -> None:
    'Extract a gzip tar into target, stripping its top level directory'
    import tarfile
    import zlib
    try:
        with tarfile.open(archive, 'r:gz') as tar:
            members = tar.getmembers()
            target.mkdir(parents=True, exist_ok=True)

            # Prefix is the first directory entry, entries before it are
            # extracted as they are
            prefix = ''
            for count, member in enumerate(members, 1):
                if not prefix and member.isdir():
                    prefix = member.name

                if name := strip_prefix(member.name, prefix):
                    member.name = name
                    if member.islnk():
                        member.linkname = strip_prefix(member.linkname,
                                                       prefix)
                    tar.extract(member, target, filter='data')

                if progress:
                    progress(count, len(members))
    except (tarfile.TarError, OSError, EOFError, zlib.error) as e:
        raise ExtractFailure(f'Failed to extract "{archive}": {e}') from e

class Installer:
    'Download, extract, and register versions'
    def __init__(self, store: VersionStore, switcher: Switcher,
                 downloads: GoDownloads, show_progress: bool = False) -> None:
        self.store = store
        self.switcher = switcher
        self.downloads = downloads
        self.show_progress = show_progress

    def install(self, version: str, activate: bool = False) -> str:
        '''
        Install a version, or "latest". Returns the installed version.

        Once installed, switch to it if activate is set, otherwise switch
        only if it is the sole installed version. A failure to switch is
        reported but does not fail the install.
        '''
        if version == LATEST:
            version, locator = self.downloads.resolve_latest()
            if self.store.is_installed(version):
                raise AlreadyInstalled(
                        f'Latest Go version {version} is already installed.')
        else:
            if not is_version(version):
                raise InvalidVersion(
                        f'Invalid Go version "{version}": use a specific '
                        f'version (e.g. {SAMPL_VERSION}) or "{LATEST}".')

            # No need to go to the network if we already have it
            if self.store.is_installed(version):
                raise AlreadyInstalled(
                        f'Go version {version} is already installed.')

            if not self.downloads.is_published(version):
                raise Unavailable(f'Go version {version} is not available, '
                                  f'see {DOWNLOADS_PAGE} for versions.')

            locator = self.downloads.locator(version)

        self.fetch(version, locator)
        print(f'Go version {version} is now installed.')
        self.activate(version, activate)
        return version

    def fetch(self, version: str, locator: str) -> None:
        'Download and unpack a version into the store'
        cache = self.store.cache_entry(version)
        tmpdir = self.store.staging_dir(version)
        self.store.cache_dir.mkdir(parents=True, exist_ok=True)
        rm_path(cache)

        try:
            with Progress(f'Downloading {version}',
                          self.show_progress) as bar:
                self.downloads.upstream.fetch_archive(locator, cache,
                                                      bar.update)
            rm_path(tmpdir)
            with Progress(f'Extracting {version}', self.show_progress) as bar:
                extract(cache, tmpdir, bar.update)

            if not any(is_executable(p) for p in (tmpdir / 'bin').glob('*')):
                raise ExtractFailure(f'Archive for version {version} '
                                     'contains no executables.')

            # Only a fully extracted version appears in the store
            try:
                tmpdir.replace(self.store.version_dir(version))
            except OSError as e:
                raise IOFailure(
                        f'Failed to install version {version}: {e}') from e
        finally:
            rm_path(tmpdir)
            rm_path(cache)

    def activate(self, version: str, use: bool) -> None:
        'Switch after install, explicitly or automatically'
        try:
            if use:
                self.switcher.switch_to(version)
            elif self.switcher.auto_switch() != version:
                return
        except GoswitchError as e:
            warn(f'Failed to switch to version {version}: {e}')
        else:
            print(f'Go environment is using version {version}.')

def installed_versions(prefix: str, parsed_args: Namespace,
                       **kwargs: Any) -> list[str]:
    'Shell completer for installed versions'
    store = VersionStore(Path(parsed_args.prefix_dir).expanduser())
    try:
        versions = store.list()
    except GoswitchError:
        return []

    return [v for v in versions if v.startswith(prefix)]

class COMMAND:
    'Base class for all commands'
    commands = []

    @classmethod
    def add(cls, parent) -> None:
        'Append parent command to internal list'
        cls.commands.append(parent)

def get_title(desc: str) -> str:
    'Return single title line from description'
    res = []
    for line in desc.splitlines():
        line = line.strip()
        res.append(line)
        if line.endswith('.'):
            return ' '. join(res)

    sys.exit('Must end description with a full stop.')

def main() -> str | None:
    'Main code'
    distro_default = DISTRIBUTIONS.get((HOST, platform.machine()))
    distro_help = distro_default or '?unknown?'
    prefix_dir = f'~/.{PROG}'

    # Parse arguments
    opt = ArgumentParser(description=__doc__,
            epilog='Some commands offer aliases as shown in brackets above. '
                f'Add "{prefix_dir}/bin" to your PATH to use the active '
                'version. Note you can set default starting global options '
                f'in {CNFFILE}.')

    # Set up main/global arguments
    opt.add_argument('-P', '--prefix-dir', default=prefix_dir,
                     help='specify prefix dir for storing versions. It must '
                     'already exist. Default is "%(default)s"')
    opt.add_argument('-D', '--distribution',
                     help='Go download distribution. '
                     f'Default is "{distro_help}" for this host')
    opt.add_argument('-q', '--quiet', action='store_true',
                     help='do not show download and extract progress')
    cmd = opt.add_subparsers(title='Commands', dest='cmdname')

    # Add each command ..
    for cls in COMMAND.commands:
        name = cls.__name__[1:]

        if hasattr(cls, 'doc'):
            desc = cls.doc.strip()
        elif cls.__doc__:
            desc = cls.__doc__.strip()
        else:
            return f'Must define a docstring for command class "{name}".'

        aliases = cls.aliases if hasattr(cls, 'aliases') else []
        title = get_title(desc)
        cmdopt = cmd.add_parser(name, description=desc, help=title,
                                aliases=aliases)

        # Set up this commands own arguments, if it has any
        if hasattr(cls, 'init'):
            cls.init(cmdopt)

        # Set the function to call
        cmdopt.set_defaults(func=cls.run, name=name, parser=cmdopt,
                            standalone=getattr(cls, 'standalone', False))

    # Command arguments are now defined, so we can set up argcomplete
    argcomplete.autocomplete(opt)

    # Merge in default args from user config file. Then parse the
    # command line.
    cnffile = CNFFILE.expanduser()
    if cnffile.is_file():
        with cnffile.open() as fp:
            lines = [re.sub(r'#.*$', '', line).strip() for line in fp]
        cnflines = ' '.join(lines).strip()
    else:
        cnflines = ''

    args = opt.parse_args(shlex.split(cnflines) + sys.argv[1:])

    if 'func' not in args:
        opt.print_help()
        return None

    if args.standalone:
        return args.func(args)

    distribution = args.distribution or distro_default
    if not distribution:
        sys.exit('Unknown system + machine distribution. Please specify '
                'using -D/--distribution option.')

    # Nothing can proceed without the prefix dir
    root = Path(args.prefix_dir).expanduser().resolve()
    if not root.is_dir():
        sys.exit(f'Missing "{root}" directory. Please create it, or '
                 'specify another using -P/--prefix-dir option.')

    # Keep some useful info in the namespace passed to the command
    args._store = VersionStore(root)
    args._store.create()
    args._store.clean_cache()
    args._downloads = GoDownloads(Upstream(distribution))
    args._resolver = Resolver(args._store)
    args._switcher = Switcher(args._store, args._resolver)
    args._installer = Installer(args._store, args._switcher,
                                args._downloads,
                                not args.quiet and sys.stderr.isatty())

    try:
        return args.func(args)
    except GoswitchError as e:
        return str(e)

@COMMAND.add
class _install(COMMAND):
    doc = f'Download and install a Go version from {DOWNLOADS_PAGE}.'
    aliases = ['download']

    @staticmethod
    def init(parser: ArgumentParser) -> None:
        parser.add_argument('-u', '--use', action='store_true',
                            help='switch to this version once installed')
        parser.add_argument('version',
                            help=f'version to install, e.g. {SAMPL_VERSION}, '
                            f'or "{LATEST}" for the most recent release')

    @staticmethod
    def run(args: Namespace) -> str | None:
        args._installer.install(args.version, args.use)
        return None

@COMMAND.add
class _uninstall(COMMAND):
    'Remove an installed Go version.'
    aliases = ['remove']

    @staticmethod
    def init(parser: ArgumentParser) -> None:
        parser.add_argument('version', help='version to remove') \
                .completer = installed_versions  # type: ignore

    @staticmethod
    def run(args: Namespace) -> str | None:
        switched = args._switcher.uninstall(args.version)
        print(f'Go version {args.version} was uninstalled.')
        if switched:
            print(f'Go environment is using version {switched}.')

        return None

@COMMAND.add
class _use(COMMAND):
    'Switch the active Go version.'
    aliases = ['set']

    @staticmethod
    def init(parser: ArgumentParser) -> None:
        parser.add_argument('version',
                            help=f'installed version to use, or "{LATEST}"') \
                .completer = installed_versions  # type: ignore

    @staticmethod
    def run(args: Namespace) -> str | None:
        version = args.version
        if version == LATEST:
            version, _ = args._downloads.resolve_latest()
        elif not is_version(version):
            raise InvalidVersion(f'Invalid Go version "{version}".')

        if not args._store.is_installed(version):
            if args._downloads.is_published(version):
                raise NotInstalled(f'Go version {version} is not installed, '
                                   f'use "{PROG} install {version}" to '
                                   'download it.')

            raise Unavailable(f'Go version {version} is not available, '
                              f'see {DOWNLOADS_PAGE} for versions.')

        args._switcher.switch_to(version)
        print(f'Go environment is using version {version}.')
        return None

@COMMAND.add
class _list(COMMAND):
    'List installed Go versions, newest first.'
    aliases = ['show']

    @staticmethod
    def run(args: Namespace) -> str | None:
        if not (versions := args._store.list()):
            print(f'Use "{PROG} install <version>" to add Go versions.')
            return None

        active = args._resolver.current()
        print('Installed Go versions:')
        for version in versions:
            app = ' (active)' if version == active else ''
            print(f'{version}{app}')

        return None

@COMMAND.add
class _version(COMMAND):
    doc = f'Show {PROG} version and the active Go version.'

    @staticmethod
    def run(args: Namespace) -> str | None:
        print(f'{PROG}: {get_version()}')
        if (version := args._resolver.current()) is None:
            print(f'Use "{PROG} install <version>" to add Go versions.')
        else:
            print(f'go: {version}')

        return None

@COMMAND.add
class _completion(COMMAND):
    'Print shell completion code, e.g. eval "$(goswitch completion bash)".'
    standalone = True

    @staticmethod
    def init(parser: ArgumentParser) -> None:
        parser.add_argument('shell',
                            choices=('bash', 'zsh', 'fish', 'tcsh',
                                     'powershell'),
                            help='shell to generate completion code for')

    @staticmethod
    def run(args: Namespace) -> str | None:
        print(argcomplete.shellcode([PROG], shell=args.shell))
        return None

if __name__ == '__main__':
    sys.exit(main())
