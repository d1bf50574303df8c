"""
Catalog of target image formats offered by the conversion service.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .errors import ErrorCode, ValidationError


@dataclass(frozen=True)
class TargetFormat:
    """A convertible target format: wire identifier plus display label."""

    identifier: str
    label: str

    def __str__(self) -> str:
        return self.identifier


# Order is the order shown to the user
FORMAT_CATALOG: tuple[TargetFormat, ...] = (
    TargetFormat("jpg", "JPEG (.jpg)"),
    TargetFormat("png", "PNG (.png)"),
    TargetFormat("gif", "GIF (.gif)"),
    TargetFormat("bmp", "BMP (.bmp)"),
    TargetFormat("tiff", "TIFF (.tiff)"),
    TargetFormat("webp", "WebP (.webp)"),
)

IMAGE_EXTENSIONS: frozenset[str] = frozenset({"jpg", "jpeg", "png", "gif", "bmp", "tiff", "webp"})

_FORMATS_BY_ID = {fmt.identifier: fmt for fmt in FORMAT_CATALOG}


def iter_formats() -> Iterator[TargetFormat]:
    """Iterate over the catalog in display order."""
    return iter(FORMAT_CATALOG)


def is_supported_format(identifier: str) -> bool:
    """Check whether an identifier names a catalog entry."""
    return identifier in _FORMATS_BY_ID


def get_format(identifier: str) -> TargetFormat:
    """
    Look up a catalog entry by identifier.

    Raises:
        ValidationError: If the identifier is not in the catalog
    """
    try:
        return _FORMATS_BY_ID[identifier]
    except KeyError:
        raise ValidationError(
            code=ErrorCode.UNSUPPORTED_FORMAT,
            user_message=f"Unsupported target format: {identifier}",
            field="target_format",
        ) from None


def file_extension(file_name: str) -> str:
    """
    Return the lower-cased text after the last dot of a file name.

    A name without a dot yields the whole name.
    """
    return file_name.rsplit(".", 1)[-1].lower()


def is_image_extension(extension: str) -> bool:
    """Check whether an extension (without the dot) is a recognized image type."""
    return extension.lower() in IMAGE_EXTENSIONS


def suggest_target_format(file_name: str) -> TargetFormat | None:
    """
    Suggest a default target format for a newly selected file.

    JPEG files written as ``.jpg`` are suggested PNG; every other recognized
    image extension is suggested JPEG. Unrecognized extensions get no
    suggestion.
    """
    extension = file_extension(file_name)
    if not is_image_extension(extension):
        return None
    return _FORMATS_BY_ID["png"] if extension == "jpg" else _FORMATS_BY_ID["jpg"]
