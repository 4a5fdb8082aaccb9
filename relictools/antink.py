"""Pass-through view of a host directory that flags suspicious file names."""

from __future__ import annotations

import os
from datetime import datetime

HOST_DIR = "/it24_host"
LOG_PATH = "/var/log/it24.log"

_DANGEROUS_WORDS = ("nafis", "kimcun")
_LOWER = "abcdefghijklmnopqrstuvwxyz"
_UPPER = _LOWER.upper()
_ROTATED = _LOWER[13:] + _LOWER[:13] + _UPPER[13:] + _UPPER[:13]
_STR_TABLE = str.maketrans(_LOWER + _UPPER, _ROTATED)
_BYTES_TABLE = bytes.maketrans((_LOWER + _UPPER).encode(), _ROTATED.encode())


def is_dangerous_file(filename: str) -> bool:
    """True when the name contains a flagged word, ignoring case."""
    lowered = filename.lower()
    return any(word in lowered for word in _DANGEROUS_WORDS)


def reverse_filename(filename: str) -> str:
    """Return the name spelled backwards."""
    return filename[::-1]


def rot13(text: str | bytes) -> str | bytes:
    """Rotate ASCII letters by 13 places; other characters are unchanged."""
    if isinstance(text, str):
        return text.translate(_STR_TABLE)
    return bytes(text).translate(_BYTES_TABLE)


class AntinkView:
    """Serves the files of ``host_dir`` and records every access in a log."""

    def __init__(self, host_dir: str = HOST_DIR, log_path: str = LOG_PATH) -> None:
        self.host_dir = host_dir
        self.log_path = log_path

    def _full(self, path: str) -> str:
        return f"{self.host_dir}{path}"

    def write_log(self, action: str, path: str) -> None:
        """Append ``[time] ACTION: path``; failures are ignored."""
        try:
            with open(self.log_path, "a", encoding="utf-8") as log:
                log.write(f"[{datetime.now():%Y-%m-%d %H:%M:%S}] {action}: {path}\n")
        except OSError:
            pass

    def getattr(self, path: str) -> os.stat_result:
        """Return ``lstat`` of the host file; the lookup is logged either way."""
        try:
            return os.lstat(self._full(path))
        finally:
            self.write_log("GETATTR", path)

    def readdir(self, path: str) -> list[str]:
        """List a host directory, showing flagged names reversed."""
        names = [".", "..", *sorted(os.listdir(self._full(path)))]
        shown = []
        for name in names:
            if is_dangerous_file(name):
                shown.append(reverse_filename(name))
                self.write_log("DANGER_DETECTED", name)
            else:
                shown.append(name)
        return shown

    def open(self, path: str, flags: int = os.O_RDONLY) -> None:
        """Check the host file opens with ``flags``; the attempt is logged."""
        try:
            fd = os.open(self._full(path), flags)
        finally:
            self.write_log("OPEN", path)
        os.close(fd)

    def read(self, path: str, size: int, offset: int) -> bytes:
        """Read from the host file; text of safe ``.txt`` files comes back rot13'd."""
        fd = os.open(self._full(path), os.O_RDONLY)
        try:
            data = os.pread(fd, size, offset)
        finally:
            os.close(fd)
        if data and not is_dangerous_file(path) and ".txt" in path:
            head, nul, tail = data.partition(b"\0")
            data = rot13(head) + nul + tail
        self.write_log("READ", path)
        return data