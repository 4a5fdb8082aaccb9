"""Read-only view that joins numbered fragments into whole virtual files."""

from __future__ import annotations

import errno
import os
import stat
from dataclasses import dataclass, field
from datetime import datetime

CHUNK_SIZE = 1024
MAX_NAMES = 256

USAGE = "Usage: baymax -orelics=<dir> -ologfile=<file> <mountpoint>"


@dataclass(frozen=True)
class FileAttributes:
    """Attributes reported for an entry of the virtual tree."""

    mode: int
    nlink: int
    size: int = 0


@dataclass
class BaymaxOptions:
    """Settings taken from the command line, plus the arguments left over."""

    relics_dir: str
    log_path: str
    args: list[str] = field(default_factory=list)


def _read_only(path: str) -> OSError:
    return OSError(errno.EROFS, os.strerror(errno.EROFS), path)


def _is_fragment_suffix(suffix: str) -> bool:
    return len(suffix) == 3 and all(ch in "0123456789" for ch in suffix)


class RelicStore:
    """Virtual files ``name`` assembled from ``name.000``, ``name.001``, ..."""

    def __init__(self, relics_dir: str, log_path: str) -> None:
        self.relics_dir = relics_dir
        self.log_path = log_path

    def _fragment(self, name: str, index: int) -> str:
        return f"{self.relics_dir}/{name}.{index:03d}"

    def log_activity(self, message: str) -> None:
        """Append a timestamped line to the activity log; failures are ignored."""
        try:
            with open(self.log_path, "a", encoding="utf-8") as log:
                log.write(f"[{datetime.now():%Y-%m-%d %H:%M:%S}] {message}\n")
        except OSError:
            pass

    def virtual_size(self, name: str) -> int:
        """Sum the sizes of consecutive fragments of ``name``."""
        total = 0
        index = 0
        while True:
            try:
                total += os.stat(self._fragment(name, index)).st_size
            except OSError:
                return total
            index += 1

    def getattr(self, path: str) -> FileAttributes:
        """Return the attributes of ``path``; raise FileNotFoundError if absent."""
        if path == "/":
            return FileAttributes(stat.S_IFDIR | 0o755, 2)
        name = path[1:]
        if os.path.exists(self._fragment(name, 0)):
            return FileAttributes(stat.S_IFREG | 0o644, 1, self.virtual_size(name))
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)

    def readdir(self, path: str) -> list[str]:
        """List the root: ``.``, ``..`` and each distinct fragment prefix."""
        if path != "/":
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        names: list[str] = []
        for entry in sorted(os.listdir(self.relics_dir)):
            base, dot, suffix = entry.rpartition(".")
            if not dot or not base or not _is_fragment_suffix(suffix):
                continue
            if base not in names and len(names) < MAX_NAMES:
                names.append(base)
        return [".", "..", *names]

    def open(self, path: str) -> None:
        """Check that ``path`` can be opened and record the read in the log."""
        if path == "/":
            raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), path)
        name = path[1:]
        if not os.path.exists(self._fragment(name, 0)):
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        self.log_activity(f"READ: {name}")

    def read(self, path: str, size: int, offset: int) -> bytes:
        """Return up to ``size`` bytes of the virtual file starting at ``offset``."""
        name = path[1:]
        total = self.virtual_size(name)
        if offset >= total:
            return b""
        size = min(size, total - offset)

        index, offset_in_fragment = divmod(offset, CHUNK_SIZE)
        pieces: list[bytes] = []
        got = 0
        while got < size:
            try:
                with open(self._fragment(name, index), "rb") as fragment:
                    fragment.seek(offset_in_fragment)
                    piece = fragment.read(size - got)
            except OSError:
                break
            pieces.append(piece)
            got += len(piece)
            offset_in_fragment = 0
            index += 1
        return b"".join(pieces)

    def create(self, path: str, mode: int) -> None:
        """Refuse: the store is read-only."""
        raise _read_only(path)

    def write(self, path: str, data: bytes, offset: int) -> int:
        """Refuse: the store is read-only."""
        raise _read_only(path)

    def truncate(self, path: str, size: int) -> None:
        """Refuse: the store is read-only."""
        raise _read_only(path)

    def unlink(self, path: str) -> None:
        """Refuse: the store is read-only."""
        raise _read_only(path)


def parse_options(argv: list[str]) -> BaymaxOptions:
    """Pull ``relics=`` and ``logfile=`` out of ``-o`` options.

    Other arguments and unknown ``-o`` options are kept in order. Raises
    ValueError with a usage message when either setting is missing.
    """
    settings: dict[str, str] = {}
    rest: list[str] = []
    args = iter(argv)
    for arg in args:
        if arg == "-o":
            spec = next(args, None)
            if spec is None:
                raise ValueError("missing argument after -o")
        elif arg.startswith("-o"):
            spec = arg[2:]
        else:
            rest.append(arg)
            continue
        unknown = []
        for item in spec.split(","):
            key, eq, value = item.partition("=")
            if eq and key in ("relics", "logfile"):
                settings[key] = value
            elif item:
                unknown.append(item)
        if unknown:
            rest.append("-o" + ",".join(unknown))

    if "relics" not in settings or "logfile" not in settings:
        raise ValueError(USAGE)
    return BaymaxOptions(settings["relics"], settings["logfile"], rest)