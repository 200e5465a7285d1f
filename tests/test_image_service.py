"""Tests for metadata extraction from uploaded bytes."""

from __future__ import annotations

import asyncio
import io
import time

import pytest
from PIL import Image

from conftest import image_bytes
from variant_compare.config import CompareSettings
from variant_compare.errors import DecodeError, FileTooLarge, UnsupportedFileKind
from variant_compare.models.image_model import ImageFormat
from variant_compare.services.image_service import MetadataExtractor, is_image_like


def _extract(extractor: MetadataExtractor, data: bytes, filename: str):
    return asyncio.run(extractor.extract(data, filename))


def test_extracts_dimensions_size_and_format(registry) -> None:
    data = image_bytes(64, 48, "PNG")
    metadata = _extract(MetadataExtractor(registry), data, "Banner.PNG")

    assert (metadata.dimensions.width, metadata.dimensions.height) == (64, 48)
    assert metadata.size_bytes == len(data)
    assert metadata.format is ImageFormat.PNG
    assert metadata.name == "Banner.PNG"
    assert metadata.source == data
    assert metadata.mode == "RGBA"
    assert metadata.id
    assert registry.active_count == 1
    assert registry.resolve(metadata.display.locator) is not None


def test_each_extraction_gets_unique_id(registry) -> None:
    extractor = MetadataExtractor(registry)
    data = image_bytes()
    first = _extract(extractor, data, "a.png")
    second = _extract(extractor, data, "a.png")
    assert first.id != second.id
    assert first.display.locator != second.display.locator


def test_unknown_extension_is_other_not_error(registry) -> None:
    metadata = _extract(MetadataExtractor(registry), image_bytes(), "upload.bin")
    assert metadata.format is ImageFormat.OTHER


def test_jpeg_extension_variants(registry) -> None:
    extractor = MetadataExtractor(registry)
    data = image_bytes(fmt="JPEG")
    assert _extract(extractor, data, "photo.JPG").format is ImageFormat.JPG
    assert _extract(extractor, data, "photo.jpeg").format is ImageFormat.JPEG


def test_non_image_payload_is_rejected(registry) -> None:
    with pytest.raises(UnsupportedFileKind):
        _extract(MetadataExtractor(registry), b"just some notes", "notes.txt")
    assert registry.active_count == 0


def test_image_like_by_name_or_signature() -> None:
    assert is_image_like(b"", "cover.gif")
    assert is_image_like(image_bytes(), "no_extension")
    assert is_image_like(b"RIFF\x00\x00\x00\x00WEBPVP8 ", "blob")
    assert not is_image_like(b"%PDF-1.4", "doc.pdf")


def test_garbage_with_image_name_is_decode_error(registry) -> None:
    with pytest.raises(DecodeError):
        _extract(MetadataExtractor(registry), b"definitely not a png", "fake.png")
    assert registry.active_count == 0


def test_truncated_image_is_decode_error(registry) -> None:
    data = image_bytes(256, 256, "PNG")
    with pytest.raises(DecodeError):
        _extract(MetadataExtractor(registry), data[: len(data) // 2], "cut.png")
    assert registry.active_count == 0


def test_payload_over_limit_is_rejected(registry) -> None:
    settings = CompareSettings(max_upload_bytes=16)
    with pytest.raises(FileTooLarge) as excinfo:
        _extract(MetadataExtractor(registry, settings), image_bytes(), "big.png")
    assert excinfo.value.limit_bytes == 16
    assert registry.active_count == 0


def test_decode_timeout_maps_to_decode_error(registry, monkeypatch) -> None:
    extractor = MetadataExtractor(registry, CompareSettings(decode_timeout_seconds=0.05))
    original = extractor._decode

    def slow_decode(data: bytes):
        time.sleep(0.3)
        return original(data)

    monkeypatch.setattr(extractor, "_decode", slow_decode)

    with pytest.raises(DecodeError):
        _extract(extractor, image_bytes(), "slow.png")
    assert registry.active_count == 0


def test_exif_orientation_is_applied(registry) -> None:
    exif = Image.Exif()
    exif[0x0112] = 6  # rotate 90° CW on display
    data = image_bytes(40, 20, "JPEG", exif=exif.tobytes())

    metadata = _extract(MetadataExtractor(registry), data, "rotated.jpg")

    assert (metadata.dimensions.width, metadata.dimensions.height) == (20, 40)


def test_preview_is_bounded(registry) -> None:
    extractor = MetadataExtractor(registry, CompareSettings(preview_max_side=16))
    metadata = _extract(extractor, image_bytes(64, 48), "wide.png")

    preview = registry.resolve(metadata.display.locator)
    assert preview.size == (16, 12)
    # исходные размеры не зависят от превью
    assert metadata.dimensions.width == 64


def test_gif_is_decoded(registry) -> None:
    buffer = io.BytesIO()
    Image.new("P", (10, 30)).save(buffer, format="GIF")
    metadata = _extract(MetadataExtractor(registry), buffer.getvalue(), "anim.gif")
    assert metadata.format is ImageFormat.GIF
    assert (metadata.dimensions.width, metadata.dimensions.height) == (10, 30)
