"""Turn hexadecimal text dumps into binary image files."""

from __future__ import annotations

import argparse
import os
import shutil
import sys
import urllib.request
import zipfile
from datetime import datetime
from itertools import takewhile
from pathlib import Path

ZIP_FILE = "anomali.zip"
EXTRACT_FOLDER = "anomali"
IMAGE_DIR = "image"
LOG_FILE = "conversion.log"

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_WHITESPACE = " \t\n\r\v\f"


def create_directory(dirname: str | os.PathLike) -> None:
    """Create ``dirname`` (mode 0700) unless something already exists there."""
    if not os.path.exists(dirname):
        os.mkdir(dirname, 0o700)


def parse_byte(high: str, low: str) -> int:
    """Read a byte written as up to two hex digits, skipping leading whitespace."""
    text = (high + low).lstrip(_WHITESPACE)
    digits = "".join(takewhile(lambda ch: ch in _HEX_DIGITS, text))
    if not digits:
        raise ValueError(f"not a hexadecimal byte: {high + low!r}")
    return int(digits, 16)


def output_filename(
    basename: str, ext: str, when: datetime, image_dir: str = IMAGE_DIR
) -> str:
    """Return the path of the image written for ``basename`` at ``when``."""
    return f"{image_dir}/{basename}_image_{when:%Y-%m-%d_%H:%M:%S}.{ext}"


def log_conversion(
    log_path: str | os.PathLike, basename: str, image_filename: str, when: datetime
) -> None:
    """Append a line recording one successful conversion."""
    try:
        with open(log_path, "a", encoding="utf-8") as log:
            log.write(
                f"[{when:%Y-%m-%d}][{when:%H:%M:%S}]: Successfully converted "
                f"hexadecimal text {basename} to {image_filename}.\n"
            )
    except OSError:
        pass


def convert_hex_file(
    filepath: str | os.PathLike,
    basename: str,
    image_dir: str = IMAGE_DIR,
    log_path: str | os.PathLike = LOG_FILE,
) -> str:
    """Decode the hex text in ``filepath`` into a PNG file and return its path."""
    text = Path(filepath).read_bytes().decode("latin-1")
    when = datetime.now()
    out_path = output_filename(basename, "png", when, image_dir)

    data = bytearray()
    chars = iter(text)
    for high, low in zip(chars, chars):
        try:
            data.append(parse_byte(high, low))
        except ValueError:
            continue

    Path(out_path).write_bytes(bytes(data))
    log_conversion(log_path, basename, os.path.basename(out_path), when)
    print(f"[✔] Image saved as: {out_path}")
    return out_path


def convert_folder(
    folder: str | os.PathLike,
    image_dir: str = IMAGE_DIR,
    log_path: str | os.PathLike = LOG_FILE,
) -> list[str]:
    """Convert every regular ``.txt`` file in ``folder``; return the images written."""
    create_directory(image_dir)
    with os.scandir(folder) as entries:
        candidates = sorted(
            (entry for entry in entries if entry.is_file(follow_symlinks=False)),
            key=lambda entry: entry.name,
        )

    written = []
    for entry in candidates:
        if ".txt" not in entry.name:
            continue
        basename = entry.name.split(".", 1)[0]
        print(f"Converting {entry.name}...")
        try:
            written.append(convert_hex_file(entry.path, basename, image_dir, log_path))
        except OSError as exc:
            print(f"Failed to convert {entry.name}: {exc}", file=sys.stderr)
    return written


def _extract_flat(archive: str | os.PathLike, dest: str | os.PathLike) -> None:
    """Extract all files of ``archive`` into ``dest``, dropping their directories."""
    with zipfile.ZipFile(archive) as zf:
        for info in zf.infolist():
            if info.is_dir():
                continue
            name = os.path.basename(info.filename)
            if not name:
                continue
            with zf.open(info) as src, open(os.path.join(dest, name), "wb") as dst:
                shutil.copyfileobj(src, dst)


def main(argv: list[str] | None = None) -> int:
    """Fetch the archive, unpack it and convert every hex text file inside."""
    parser = argparse.ArgumentParser(
        prog="hexed", description="Convert hexadecimal text files into images."
    )
    parser.add_argument("--url", help="download the archive from this URL first")
    parser.add_argument("--zip", default=ZIP_FILE, help="archive path")
    parser.add_argument("--extract-dir", default=EXTRACT_FOLDER)
    parser.add_argument("--image-dir", default=IMAGE_DIR)
    parser.add_argument("--log", default=LOG_FILE)
    args = parser.parse_args(argv)

    if args.url:
        print("[1] Downloading zip file...")
        try:
            urllib.request.urlretrieve(args.url, args.zip)
        except (OSError, ValueError):
            print("Failed to download file.", file=sys.stderr)
            return 1

    print(f"[2] Extracting zip file to '{args.extract_dir}/'...")
    try:
        create_directory(args.extract_dir)
        _extract_flat(args.zip, args.extract_dir)
    except (OSError, zipfile.BadZipFile):
        print("Failed to unzip file.", file=sys.stderr)
        return 1

    print("[3] Deleting zip file...")
    try:
        os.remove(args.zip)
    except OSError:
        pass

    print(f"[4] Converting all hex .txt files in '{args.extract_dir}/' to images...")
    try:
        convert_folder(args.extract_dir, args.image_dir, args.log)
    except OSError as exc:
        print(f"Failed to open target folder: {exc}", file=sys.stderr)
        return 1

    print("[✔] All files converted successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())