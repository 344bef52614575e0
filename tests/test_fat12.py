import io
import struct

import pytest

from snowtools.fat12 import (
    BootSector,
    DirectoryEntry,
    Fat12Error,
    Fat12Image,
    main,
    render_bytes,
)

BPS = 512
TEST_CONTENT = b"A" * 512 + b"tail\x01"
KERNEL_CONTENT = b"kernel"


def _boot_sector(total_sectors=12):
    packed = struct.pack(
        "<3s8sHBHBHHBHHHIIBBBI11s8s",
        b"\xeb\x3c\x90",
        b"MSWIN4.1",
        BPS,
        1,
        1,
        2,
        16,
        total_sectors,
        0xF0,
        1,
        18,
        2,
        0,
        0,
        0,
        0,
        0x29,
        0x11111111,
        b"NBOS       ",
        b"FAT12   ",
    )
    return packed.ljust(BPS, b"\0")


def _set_fat(fat, cluster, value):
    i = cluster * 3 // 2
    if cluster % 2 == 0:
        fat[i] = value & 0xFF
        fat[i + 1] = (fat[i + 1] & 0xF0) | (value >> 8)
    else:
        fat[i] = (fat[i] & 0x0F) | ((value & 0x0F) << 4)
        fat[i + 1] = value >> 4


def _entry(name, cluster, size):
    return struct.pack(
        "<11sBBBHHHHHHHI", name, 0x20, 0, 0, 0, 0, 0, 0, 0, 0, cluster, size
    )


def _make_image():
    fat = bytearray(BPS)
    _set_fat(fat, 0, 0xFF0)
    _set_fat(fat, 1, 0xFFF)
    _set_fat(fat, 2, 3)
    _set_fat(fat, 3, 0xFFF)
    _set_fat(fat, 4, 0xFFF)
    root = (
        _entry(b"TEST    TXT", 2, len(TEST_CONTENT))
        + _entry(b"KERNEL  BIN", 4, len(KERNEL_CONTENT))
    ).ljust(BPS, b"\0")
    data = bytearray(BPS * 8)
    data[0 : len(TEST_CONTENT)] = TEST_CONTENT
    data[2 * BPS : 2 * BPS + len(KERNEL_CONTENT)] = KERNEL_CONTENT
    return _boot_sector() + bytes(fat) + bytes(fat) + root + bytes(data)


@pytest.fixture
def image():
    return Fat12Image(io.BytesIO(_make_image()))


@pytest.fixture
def image_path(tmp_path):
    path = tmp_path / "floppy.img"
    path.write_bytes(_make_image())
    return path


def test_boot_sector_fields():
    boot = BootSector.from_bytes(_boot_sector())
    assert boot.bytes_per_sector == BPS
    assert boot.fat_count == 2
    assert boot.dir_entry_count == 16
    assert boot.volume_label == b"NBOS       "
    assert boot.system_id == b"FAT12   "


def test_boot_sector_too_short():
    with pytest.raises(Fat12Error) as info:
        BootSector.from_bytes(b"\0" * 10)
    assert info.value.exit_code == -2


def test_directory_entry_round_trip():
    entry = DirectoryEntry.from_bytes(_entry(b"KERNEL  BIN", 4, 6))
    assert entry.name == b"KERNEL  BIN"
    assert entry.first_cluster_low == 4
    assert entry.size == 6


def test_layout(image):
    assert image.root_directory_end == 4
    assert len(image.root_directory) == 16


def test_find_file(image):
    entry = image.find_file("TEST    TXT")
    assert entry is not None and entry.size == len(TEST_CONTENT)
    assert image.find_file(b"KERNEL  BIN").first_cluster_low == 4


def test_find_missing_file(image):
    assert image.find_file("MISSING TXT") is None


def test_next_cluster_even_and_odd(image):
    assert image.next_cluster(2) == 3
    assert image.next_cluster(3) >= 0xFF8
    assert image.next_cluster(4) >= 0xFF8


def test_next_cluster_outside_fat(image):
    with pytest.raises(Fat12Error):
        image.next_cluster(10_000)


def test_read_multi_cluster_file(image):
    assert image.read_file(image.find_file("TEST    TXT")) == TEST_CONTENT


def test_read_single_cluster_file(image):
    assert image.read_file(image.find_file("KERNEL  BIN")) == KERNEL_CONTENT


def test_read_file_with_invalid_cluster(image):
    entry = DirectoryEntry.from_bytes(_entry(b"BROKEN  BIN", 0, 4))
    with pytest.raises(Fat12Error):
        image.read_file(entry)


def test_missing_fat():
    with pytest.raises(Fat12Error) as info:
        Fat12Image(io.BytesIO(_boot_sector()))
    assert info.value.exit_code == -3


def test_missing_root_directory():
    with pytest.raises(Fat12Error) as info:
        Fat12Image(io.BytesIO(_boot_sector() + bytes(BPS * 2)))
    assert info.value.exit_code == -4


def test_render_bytes():
    assert render_bytes(b"Hi\x00\x7f") == "Hi<00><7f>"
    printable = bytes(range(0x20, 0x7F))
    assert render_bytes(printable) == printable.decode("ascii")


def test_main_prints_file(image_path, capsys):
    assert main([str(image_path), "TEST    TXT"]) == 0
    assert capsys.readouterr().out == render_bytes(TEST_CONTENT) + "\n"


def test_main_without_arguments(capsys):
    assert main([]) == -1
    assert "Syntax" in capsys.readouterr().out


def test_main_missing_image(tmp_path, capsys):
    assert main([str(tmp_path / "absent.img"), "TEST    TXT"]) == -1
    assert "Cannot open disk image" in capsys.readouterr().err


def test_main_missing_file(image_path, capsys):
    assert main([str(image_path), "NOPE    TXT"]) == -5
    assert "Could not find file NOPE    TXT!" in capsys.readouterr().err


def test_main_truncated_image(tmp_path):
    path = tmp_path / "short.img"
    path.write_bytes(b"\0" * 10)
    assert main([str(path), "TEST    TXT"]) == -2