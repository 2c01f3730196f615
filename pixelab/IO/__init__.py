# -*- coding: utf-8 -*-
"""
IO Module - Decode and encode images by file extension.

A small registry maps file extensions to format descriptions and codec
families. ``decode`` and ``encode`` pick the reader or writer from the
extension of the path. Codec modules are imported on first use, so
importing ``pixelab.IO`` does not require Pillow.

Dependencies
------------
Pillow

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import importlib
from pathlib import Path
from typing import Dict, Tuple, Union

# pixelab internal
from pixelab.exceptions import UnsupportedFormatError
from pixelab.image import ImageBuffer
from pixelab.IO.base import ImageReader, ImageWriter

# Format registry: extension -> (description, codec family)
_FORMAT_REGISTRY: Dict[str, Tuple[str, str]] = {
    'ppm': ('Portable pixmap', 'PPM'),
    'pgm': ('Portable graymap', 'PPM'),
}

# Codec family -> (module_path, reader class, writer class)
_CODEC_REGISTRY: Dict[str, Tuple[str, str, str]] = {
    'PPM': ('pixelab.IO.pnm', 'PnmReader', 'PnmWriter'),
}


def supported_formats() -> Dict[str, str]:
    """Map every registered extension to its description.

    Examples
    --------
    >>> supported_formats()['ppm']
    'Portable pixmap'
    """
    return {ext: description for ext, (description, _) in _FORMAT_REGISTRY.items()}


def _codec(path: Path, role: int):
    ext = path.suffix.lower().lstrip('.')
    if ext not in _FORMAT_REGISTRY:
        raise UnsupportedFormatError(
            f"Unsupported image format: {path.suffix!r}. "
            f"Supported formats: {sorted(_FORMAT_REGISTRY)}"
        )
    family = _FORMAT_REGISTRY[ext][1]
    entry = _CODEC_REGISTRY[family]
    module = importlib.import_module(entry[0])
    return getattr(module, entry[role])


def decode(path: Union[str, Path]) -> ImageBuffer:
    """Read the image stored at *path*.

    Raises
    ------
    UnsupportedFormatError
        If the extension is not registered.
    ImageIOError
        If the file is missing or cannot be parsed.
    """
    path = Path(path)
    reader_cls = _codec(path, 1)
    with reader_cls(path) as reader:
        return reader.read()


def encode(image: ImageBuffer, path: Union[str, Path]) -> None:
    """Write *image* to *path* in the format named by its extension.

    Raises
    ------
    UnsupportedFormatError
        If the extension is not registered.
    ValidationError
        If the image has an unsupported band count or samples outside
        ``[0, 255]``.
    ImageIOError
        If writing fails.
    """
    path = Path(path)
    writer_cls = _codec(path, 2)
    with writer_cls(path) as writer:
        writer.write(image)


__all__ = [
    'ImageReader',
    'ImageWriter',
    'supported_formats',
    'decode',
    'encode',
]
