"""Reading files out of a FAT12 disk image."""

from __future__ import annotations

import os
import struct
import sys
from dataclasses import dataclass
from typing import BinaryIO, ClassVar

_BOOT_SECTOR = struct.Struct("<3s8sHBHBHHBHHHIIBBBI11s8s")
_DIRECTORY_ENTRY = struct.Struct("<11sBBBHHHHHHHI")

END_OF_CHAIN = 0x0FF8
NAME_LENGTH = 11


class Fat12Error(Exception):
    """Raised when an image cannot be read; carries the tool's exit code."""

    def __init__(self, message: str, exit_code: int = -5) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@dataclass(frozen=True)
class BootSector:
    """The BIOS parameter block and extended boot record of a FAT12 volume."""

    SIZE: ClassVar[int] = _BOOT_SECTOR.size

    boot_jump_instruction: bytes
    oem_identifier: bytes
    bytes_per_sector: int
    sectors_per_cluster: int
    reserved_sectors: int
    fat_count: int
    dir_entry_count: int
    total_sectors: int
    media_descriptor_type: int
    sectors_per_fat: int
    sectors_per_track: int
    heads: int
    hidden_sectors: int
    large_sector_count: int
    drive_number: int
    reserved: int
    signature: int
    volume_id: int
    volume_label: bytes
    system_id: bytes

    @classmethod
    def from_bytes(cls, data: bytes) -> "BootSector":
        """Decode the boot sector from the start of ``data``."""
        if len(data) < _BOOT_SECTOR.size:
            raise Fat12Error("Could not read boot sector!", exit_code=-2)
        return cls(*_BOOT_SECTOR.unpack_from(data))


@dataclass(frozen=True)
class DirectoryEntry:
    """One 32-byte entry of a FAT directory."""

    SIZE: ClassVar[int] = _DIRECTORY_ENTRY.size

    name: bytes
    attributes: int
    reserved: int
    created_time_tenths: int
    created_time: int
    created_date: int
    accessed_date: int
    first_cluster_high: int
    modified_time: int
    modified_date: int
    first_cluster_low: int
    size: int

    @classmethod
    def from_bytes(cls, data: bytes) -> "DirectoryEntry":
        """Decode a directory entry from the start of ``data``."""
        if len(data) < _DIRECTORY_ENTRY.size:
            raise Fat12Error("Directory entry is truncated")
        return cls(*_DIRECTORY_ENTRY.unpack_from(data))


class Fat12Image:
    """A FAT12 image opened for reading: boot sector, FAT and root directory."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        stream.seek(0)
        self.boot_sector = BootSector.from_bytes(stream.read(BootSector.SIZE))
        bps = self.boot_sector.bytes_per_sector
        if bps == 0:
            raise Fat12Error("Could not read boot sector!", exit_code=-2)

        try:
            self.fat = self._read_sectors(
                self.boot_sector.reserved_sectors, self.boot_sector.sectors_per_fat
            )
        except Fat12Error as exc:
            raise Fat12Error("Could not read FAT!", exit_code=-3) from exc

        lba = (
            self.boot_sector.reserved_sectors
            + self.boot_sector.sectors_per_fat * self.boot_sector.fat_count
        )
        size = DirectoryEntry.SIZE * self.boot_sector.dir_entry_count
        sectors = -(-size // bps)
        self.root_directory_end = lba + sectors
        try:
            raw = self._read_sectors(lba, sectors)
        except Fat12Error as exc:
            raise Fat12Error("Could not read root directory!", exit_code=-4) from exc
        self.root_directory = [
            DirectoryEntry.from_bytes(raw[offset : offset + DirectoryEntry.SIZE])
            for offset in range(0, size, DirectoryEntry.SIZE)
        ]

    def _read_sectors(self, lba: int, count: int) -> bytes:
        bps = self.boot_sector.bytes_per_sector
        if lba < 0:
            raise Fat12Error(f"Invalid sector address {lba}")
        wanted = bps * count
        try:
            self._stream.seek(lba * bps)
            data = self._stream.read(wanted)
        except (OSError, ValueError, OverflowError) as exc:
            raise Fat12Error(f"Cannot read sector {lba}") from exc
        if len(data) != wanted:
            raise Fat12Error(f"Short read at sector {lba}")
        return data

    def find_file(self, name: str | bytes) -> DirectoryEntry | None:
        """Return the root-directory entry whose 11-byte name matches, or None."""
        raw = os.fsencode(name) if isinstance(name, str) else bytes(name)
        key = raw[:NAME_LENGTH].ljust(NAME_LENGTH, b"\0")
        return next((entry for entry in self.root_directory if entry.name == key), None)

    def next_cluster(self, cluster: int) -> int:
        """Look up the FAT entry that follows ``cluster`` in its chain."""
        index = cluster * 3 // 2
        if cluster < 0 or index + 2 > len(self.fat):
            raise Fat12Error(f"Cluster {cluster} is outside the FAT")
        word = int.from_bytes(self.fat[index : index + 2], "little")
        return word & 0x0FFF if cluster % 2 == 0 else word >> 4

    def read_file(self, entry: DirectoryEntry) -> bytes:
        """Follow the cluster chain of ``entry`` and return its contents."""
        spc = self.boot_sector.sectors_per_cluster
        cluster = entry.first_cluster_low
        seen: set[int] = set()
        chunks = []
        while True:
            if cluster < 2:
                raise Fat12Error(f"Invalid cluster {cluster} in chain")
            if cluster in seen:
                raise Fat12Error(f"Cluster chain loops at cluster {cluster}")
            seen.add(cluster)
            lba = self.root_directory_end + (cluster - 2) * spc
            chunks.append(self._read_sectors(lba, spc))
            cluster = self.next_cluster(cluster)
            if cluster >= END_OF_CHAIN:
                break
        return b"".join(chunks)[: entry.size]


def render_bytes(data: bytes) -> str:
    """Show printable ASCII as is and every other byte as ``<xx>``."""
    return "".join(
        chr(byte) if 0x20 <= byte < 0x7F else f"<{byte:02x}>" for byte in data
    )


def main(argv: list[str] | None = None) -> int:
    """Print a file from a FAT12 image; returns the process exit code."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 2:
        print("Syntax: fat <disk image> <file name>")
        return -1
    image_path, file_name = args[0], args[1]

    try:
        disk = open(image_path, "rb")
    except OSError:
        print(f"Cannot open disk image {image_path}!", file=sys.stderr)
        return -1

    with disk:
        try:
            image = Fat12Image(disk)
        except Fat12Error as exc:
            print(exc, file=sys.stderr)
            return exc.exit_code

        entry = image.find_file(file_name)
        if entry is None:
            print(f"Could not find file {file_name}!", file=sys.stderr)
            return -5

        try:
            data = image.read_file(entry)
        except Fat12Error:
            print(f"Could not read file {file_name}!", file=sys.stderr)
            return -5

    sys.stdout.write(render_bytes(data) + "\n")
    return 0