# -*- coding: utf-8 -*-
"""
IO Base Classes - Abstract interfaces for image readers and writers.

Concrete codecs inherit from these classes. Readers decode a file into
an ``ImageBuffer``; writers encode an ``ImageBuffer`` into a file. Both
are context managers.

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
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Union

# pixelab internal
from pixelab.exceptions import ImageIOError
from pixelab.image import ImageBuffer


class ImageReader(ABC):
    """
    Abstract base class for image readers.

    Attributes
    ----------
    filepath : Path
        Path to the image file.
    metadata : Dict[str, Any]
        Format metadata collected while opening the file.
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        """
        Initialize the image reader.

        Parameters
        ----------
        filepath : Union[str, Path]
            Path to the image file.

        Raises
        ------
        ImageIOError
            If the file does not exist.
        """
        self.filepath = Path(filepath)
        if not self.filepath.is_file():
            raise ImageIOError(f"File not found: {self.filepath}")
        self.metadata: Dict[str, Any] = {}

    @abstractmethod
    def read(self) -> ImageBuffer:
        """
        Decode the whole file.

        Returns
        -------
        ImageBuffer
            Decoded image, indexed ``[x][y][band]``.
        """
        pass

    def close(self) -> None:
        """Release resources. Default implementation does nothing."""
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False


class ImageWriter(ABC):
    """
    Abstract base class for image writers.

    Attributes
    ----------
    filepath : Path
        Path where the image will be written.
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        self.filepath = Path(filepath)

    @abstractmethod
    def write(self, image: ImageBuffer) -> None:
        """
        Encode *image* into ``filepath``.

        Raises
        ------
        ValidationError
            If the image cannot be represented by the format.
        ImageIOError
            If writing fails.
        """
        pass

    def close(self) -> None:
        """Release resources. Default implementation does nothing."""
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
