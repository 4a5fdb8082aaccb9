# relictools

This package has three small tools for working with files on disk:

- **`relictools.hexed`** turns text files of hexadecimal digits into binary
  image files and keeps a conversion log.
- **`relictools.baymax`** provides `RelicStore`. It presents a directory of
  numbered fragments (`name.000`, `name.001`, …) as one read-only file per name.
- **`relictools.antink`** provides `AntinkView`. It presents a host directory
  through a filter. Names that contain the words `nafis` or `kimcun` are shown
  reversed. The contents of other `.txt` files are ROT13-encoded when they are read.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Converting hex text to images

```
relictools-hexed [--url URL] [--zip PATH] [--extract-dir DIR] [--image-dir DIR] [--log FILE]
```

The command does the following, in order:

1. With `--url`, it downloads the archive to the `--zip` path first. The
   default path is `anomali.zip`.
2. It extracts every file in the archive into `--extract-dir`, which defaults
   to `anomali/`. Directories inside the archive are dropped.
3. It deletes the archive.
4. It converts every regular file in the extract directory whose name
   contains `.txt` into a PNG in `--image-dir`, which defaults to `image/`.

Each output file is named `<basename>_image_YYYY-MM-DD_HH:MM:SS.png`. The
basename is the part of the file name before its first dot. Each conversion
adds a line to the `--log` file, which defaults to `conversion.log`. The
command exits with status 1 if the download or the extraction fails, or if
the folder cannot be listed.

The steps can also be called directly:

```python
from relictools.hexed import convert_folder, convert_hex_file, parse_byte

parse_byte("4", "f")      # -> 79
convert_hex_file("anomali/1.txt", "1", "image", "conversion.log")  # returns the PNG path
convert_folder("anomali", "image", "conversion.log")              # returns the paths written
```

The input is read as pairs of characters. A pair that does not begin with a
hex digit (leading whitespace is skipped) is dropped.

## Reading fragmented relics

```python
from relictools.baymax import RelicStore, parse_options

store = RelicStore("relics", "activity.log")
store.readdir("/")                 # [".", "..", *names that have fragments]
store.getattr("/Baymax.jpeg")      # FileAttributes(mode, nlink, size)
store.open("/Baymax.jpeg")         # writes "READ: Baymax.jpeg" to the activity log
data = store.read("/Baymax.jpeg", 4096, 0)
```

- The size of a virtual file is the sum of the sizes of its consecutive
  fragments, counted from `.000`.
- `read` treats fragments as 1024 bytes long when it finds the fragment where
  an offset starts. It then reads on through the following fragments.
- `readdir` lists at most 256 names.
- `getattr` and `open` raise `FileNotFoundError` for unknown names. `open("/")`
  raises `IsADirectoryError`.
- `create`, `write`, `truncate` and `unlink` always raise `OSError` with
  `errno.EROFS`.

`parse_options(argv)` takes the `relics=<dir>` and `logfile=<file>` settings
from `-o` options and returns a `BaymaxOptions`. Other arguments are kept in
`args`. If either setting is missing, it raises `ValueError` with a usage
message.

## Filtered host view

```python
from relictools.antink import AntinkView, is_dangerous_file, reverse_filename, rot13

view = AntinkView("/it24_host", "/var/log/it24.log")
view.readdir("/")                 # flagged names come back reversed
view.read("/notes.txt", 1024, 0)  # ROT13-encoded contents
```

The defaults are `/it24_host` for the host directory and `/var/log/it24.log`
for the log. Each call appends a line of the form `[YYYY-MM-DD HH:MM:SS]
ACTION: path` to the log. The actions logged are `GETATTR`, `OPEN`, `READ`
and `DANGER_DETECTED`. ROT13 applies only to the bytes before the first NUL
byte of each read. `rot13` accepts both `str` and `bytes`.

## What this package does not do

`RelicStore` and `AntinkView` are plain Python objects whose methods answer
filesystem-style calls. The package does not mount them as a filesystem, and
it has no command that starts either view.