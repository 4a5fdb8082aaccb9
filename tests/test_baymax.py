import errno
import stat

import pytest

from relictools.baymax import CHUNK_SIZE, RelicStore, parse_options


@pytest.fixture
def store(tmp_path):
    relics = tmp_path / "relics"
    relics.mkdir()
    return RelicStore(str(relics), str(tmp_path / "activity.log"))


def _split(store, name, payload):
    chunks = [payload[i:i + CHUNK_SIZE] for i in range(0, len(payload), CHUNK_SIZE)]
    for index, chunk in enumerate(chunks):
        with open(f"{store.relics_dir}/{name}.{index:03d}", "wb") as fh:
            fh.write(chunk)


PAYLOAD = bytes((i * 7) % 256 for i in range(CHUNK_SIZE * 3 + 100))


def test_virtual_size_sums_fragments(store):
    _split(store, "Baymax.jpeg", PAYLOAD)
    assert store.virtual_size("Baymax.jpeg") == len(PAYLOAD)
    assert store.virtual_size("missing") == 0


def test_getattr_root_and_file(store):
    _split(store, "a.bin", PAYLOAD)
    root = store.getattr("/")
    assert stat.S_ISDIR(root.mode)
    assert root.nlink == 2
    attrs = store.getattr("/a.bin")
    assert stat.S_ISREG(attrs.mode)
    assert stat.S_IMODE(attrs.mode) == 0o644
    assert attrs.size == len(PAYLOAD)


def test_getattr_missing(store):
    with pytest.raises(FileNotFoundError):
        store.getattr("/ghost")


def test_read_whole_file(store):
    _split(store, "a.bin", PAYLOAD)
    assert store.read("/a.bin", len(PAYLOAD) + 500, 0) == PAYLOAD


@pytest.mark.parametrize("offset,size", [(0, 10), (1000, 100), (1024, 2048), (3000, 5000), (5, 3100)])
def test_read_slices_across_fragments(store, offset, size):
    _split(store, "a.bin", PAYLOAD)
    assert store.read("/a.bin", size, offset) == PAYLOAD[offset:offset + size]


def test_read_past_end(store):
    _split(store, "a.bin", PAYLOAD)
    assert store.read("/a.bin", 10, len(PAYLOAD)) == b""


def test_readdir_unique_prefixes(store, tmp_path):
    _split(store, "a.bin", PAYLOAD)
    _split(store, "b.txt", b"hello")
    (tmp_path / "relics" / "notes.txt").write_text("x")
    (tmp_path / "relics" / "c.01").write_text("x")
    (tmp_path / "relics" / "d.0a1").write_text("x")
    listing = store.readdir("/")
    assert listing[:2] == [".", ".."]
    assert sorted(listing[2:]) == ["a.bin", "b.txt"]


def test_readdir_non_root(store):
    with pytest.raises(FileNotFoundError):
        store.readdir("/sub")


def test_open_logs_read(store, tmp_path):
    _split(store, "a.bin", PAYLOAD)
    store.open("/a.bin")
    line = (tmp_path / "activity.log").read_text().strip()
    assert line.startswith("[")
    assert line.endswith("] READ: a.bin")
    assert store.read("/a.bin", 16, 0) == PAYLOAD[:16]


def test_open_errors(store):
    with pytest.raises(IsADirectoryError):
        store.open("/")
    with pytest.raises(FileNotFoundError):
        store.open("/ghost")


@pytest.mark.parametrize("call", [
    lambda s: s.create("/x", 0o644),
    lambda s: s.write("/x", b"data", 0),
    lambda s: s.truncate("/x", 0),
    lambda s: s.unlink("/x"),
])
def test_modifications_are_read_only(store, call):
    with pytest.raises(OSError) as info:
        call(store)
    assert info.value.errno == errno.EROFS
    assert store.readdir("/") == [".", ".."]
    assert store.virtual_size("x") == 0


def test_parse_options_separate_and_joined():
    opts = parse_options(["-orelics=/r", "-ologfile=/l.log", "/mnt"])
    assert (opts.relics_dir, opts.log_path, opts.args) == ("/r", "/l.log", ["/mnt"])
    opts = parse_options(["-f", "-o", "relics=/r,allow_other,logfile=/l", "/mnt"])
    assert opts.relics_dir == "/r"
    assert opts.log_path == "/l"
    assert opts.args == ["-f", "-oallow_other", "/mnt"]


def test_parse_options_missing():
    with pytest.raises(ValueError):
        parse_options(["-orelics=/r", "/mnt"])