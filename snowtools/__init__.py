"""Read files from FAT12 disk images and format text with a minimal printf."""

__version__ = "0.1.0"
__all__ = ["fat12", "printf"]