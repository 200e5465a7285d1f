"""Shared fixtures: in-memory images and metadata factories."""

from __future__ import annotations

import io
from typing import Callable
from uuid import uuid4

import pytest
from PIL import Image

from variant_compare.models.image_model import Dimensions, ImageFormat, ImageMetadata
from variant_compare.services.display_registry import DisplayRegistry


def image_bytes(width: int = 64, height: int = 48, fmt: str = "PNG", **save_kwargs: object) -> bytes:
    """Encode a solid-colour image with Pillow."""
    buffer = io.BytesIO()
    mode = "RGB" if fmt in {"JPEG", "BMP"} else "RGBA"
    Image.new(mode, (width, height), (200, 80, 40) if mode == "RGB" else (200, 80, 40, 255)).save(
        buffer, format=fmt, **save_kwargs
    )
    return buffer.getvalue()


@pytest.fixture
def registry() -> DisplayRegistry:
    return DisplayRegistry()


MetadataFactory = Callable[..., ImageMetadata]


@pytest.fixture
def make_metadata(registry: DisplayRegistry) -> MetadataFactory:
    """Build metadata directly, bypassing decoding."""

    def factory(
        *,
        size: int = 100_000,
        width: int = 1920,
        height: int = 1080,
        fmt: str = "jpg",
        name: str | None = None,
    ) -> ImageMetadata:
        return ImageMetadata(
            id=uuid4().hex,
            source=b"",
            display=registry.allocate(Image.new("RGB", (1, 1))),
            dimensions=Dimensions(width, height),
            size_bytes=size,
            format=ImageFormat(fmt),
            name=name or f"variant.{fmt}",
        )

    return factory
