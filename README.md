# snowtools

Small utilities for reading FAT12 floppy images and for a compact
`printf` dialect. No third-party dependencies.

## Installation

```
pip install .
```

## Reading a file from a FAT12 image

The `snowtools-fat` command prints a file stored in the root directory
of a FAT12 disk image:

```
snowtools-fat main_floppy.img "TEST    TXT"
```

The file name is given in the on-disk 8.3 form: eleven characters, the
name padded with spaces to eight, followed by the three-character
extension. Printable ASCII bytes are written as they are; every other
byte is shown as `<xx>` in lower-case hexadecimal. A newline follows the
contents.

On failure a message goes to standard error and the command exits with a
non-zero status: a missing argument (the usage line is printed), an image
that cannot be opened, an unreadable boot sector, FAT or root directory,
a file that is not found, or a file whose clusters cannot be read.

From Python:

```python
from snowtools.fat12 import Fat12Image, render_bytes

with open("main_floppy.img", "rb") as disk:
    image = Fat12Image(disk)
    entry = image.find_file("TEST    TXT")
    if entry is not None:
        print(render_bytes(image.read_file(entry)))
```

* `Fat12Image(stream)` reads the boot sector (`boot_sector`), the first
  FAT (`fat`) and the root directory (`root_directory`, a list of
  `DirectoryEntry`) from a binary stream.
* `find_file(name)` takes a `str` or `bytes` name, compares it with the
  11-byte entry names and returns the matching `DirectoryEntry`, or
  `None` when there is none. Names shorter than eleven bytes are padded
  with NUL bytes, not spaces, so give the full padded form.
* `next_cluster(cluster)` returns the 12-bit FAT entry for a cluster.
* `read_file(entry)` follows the cluster chain until an end-of-chain
  marker (`0xFF8` or above) and returns `entry.size` bytes.
* `BootSector.from_bytes` and `DirectoryEntry.from_bytes` decode the raw
  structures.

`Fat12Error` is raised when the boot sector, the FAT, the root directory
or a file's clusters cannot be read, when a cluster number is invalid or
outside the FAT, and when a cluster chain loops. Its `exit_code`
attribute holds the status the command exits with.

## Formatting with `printf`

`snowtools.printf` implements a minimal `printf`:

* conversions `%c`, `%s`, `%d`, `%i`, `%u`, `%x`, `%X`, `%p`, `%o` and `%%`;
* length modifiers `hh`, `h`, `l` and `ll`; numbers are truncated to
  16 bits by default and with `h`/`hh`, to 32 bits with `l` and to
  64 bits with `ll`, and signed conversions read the top bit as the sign;
* hexadecimal digits are always lower case;
* `%c` takes a one-character string or an integer; `%s` takes a string
  or bytes (decoded as Latin-1) and stops at the first NUL;
* unknown conversions are silently dropped; too few arguments raise
  `TypeError`.

```python
from snowtools.printf import format_string, format_number, Length

format_string("%d items, %x hex, %s", -5, 255, "ok")   # '-5 items, ff hex, ok'
format_number(-1, Length.DEFAULT, False, 16)           # 'ffff'
```

`printf(fmt, *args, stream=None)`, `puts(text, stream=None)` and
`putc(c, stream=None)` write to the given text stream, or to standard
output. `puts` adds no newline.

## What it does not do

* Images are only read, never written or created.
* Only the root directory is searched; subdirectories and long file
  names are not supported, and only the low 16 bits of a file's first
  cluster are used.
* Only FAT12 is understood, not FAT16 or FAT32.
* `printf` has no field widths, precision, flags or floating-point
  conversions.