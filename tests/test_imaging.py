import os

import pytest
from PIL import Image

from darkroom.config import BuildConfig
from darkroom.errors import DecodeError
from darkroom.imaging import downscale, load_image, process_image, save_jpg, save_png

from .conftest import gallery_image, pattern, write_image

OLD = 1_000_000_000


def test_downscale_keeps_aspect_ratio():
    assert downscale(Image.new("RGB", (2048, 1536)), 1024).size == (1365, 1024)
    assert downscale(Image.new("RGB", (2048, 1536)), 256).size == (341, 256)


def test_downscale_scales_by_height():
    assert downscale(Image.new("RGB", (1200, 2400)), 1024).size == (512, 1024)


def test_downscale_leaves_narrow_images_alone():
    img = Image.new("RGB", (1024, 700))
    assert downscale(img, 1024) is img
    small = Image.new("RGB", (200, 100))
    assert downscale(small, 256) is small


def test_save_png_forces_extension(tmp_path):
    path = save_png(Image.new("RGBA", (4, 4)), tmp_path / "deep" / "thumb.jpg")
    assert path == tmp_path / "deep" / "thumb.png"
    assert path.exists()
    assert not (tmp_path / "deep" / "thumb.jpg").exists()


def test_save_jpg_forces_extension_and_drops_alpha(tmp_path):
    path = save_jpg(Image.new("RGBA", (4, 4), (10, 20, 30, 128)), tmp_path / "a.png")
    assert path == tmp_path / "a.jpg"
    with Image.open(path) as img:
        assert img.format == "JPEG"
        assert img.mode == "RGB"
    assert not list(tmp_path.glob("*.part"))


def test_load_image_rejects_other_formats(tmp_path):
    path = write_image(tmp_path / "actually.png", fmt="GIF")
    with pytest.raises(DecodeError):
        load_image(path)


def test_load_image_rejects_garbage(tmp_path):
    path = tmp_path / "bad.jpg"
    path.write_bytes(b"nope")
    with pytest.raises(DecodeError):
        load_image(path)


@pytest.fixture
def source(images_dir):
    return write_image(images_dir / "Trip" / "a.png", size=(2048, 1536))


@pytest.fixture
def image(source):
    return gallery_image(source, "Trip/a.png")


def outputs(config, image):
    return config.public_dir / image.thumb, config.public_dir / image.path


def age(*paths):
    for path in paths:
        os.utime(path, (OLD, OLD))


def test_process_writes_both_outputs(config, image):
    result = process_image(image, config)
    thumb, large = outputs(config, image)

    assert not result.skipped and not result.failed
    assert result.written == [thumb, large]
    with Image.open(thumb) as img:
        assert img.format == "PNG"
        assert img.size == (341, 256)
    with Image.open(large) as img:
        assert img.format == "JPEG"
        assert img.size == (1365, 1024)


def test_identity_output_matches_plain_resize(config, image, source):
    process_image(image, config)
    thumb, _ = outputs(config, image)
    with Image.open(source) as img:
        expected = downscale(img.convert("RGB"), 256)
    with Image.open(thumb) as img:
        assert img.convert("RGB").tobytes() == expected.tobytes()


def test_rotated_source_is_upright(config, images_dir):
    src = write_image(images_dir / "Trip" / "r.png", size=(600, 300), orientation=6)
    image = gallery_image(src, "Trip/r.png")
    process_image(image, config)
    thumb, large = outputs(config, image)
    with Image.open(thumb) as img:
        assert img.size == (128, 256)
    with Image.open(large) as img:
        assert img.size == (300, 600)


def test_second_run_does_no_work(config, image):
    process_image(image, config)
    thumb, large = outputs(config, image)
    age(thumb, large)

    result = process_image(image, config)

    assert result.skipped
    assert result.written == []
    assert thumb.stat().st_mtime == OLD
    assert large.stat().st_mtime == OLD


def test_regenerate_rewrites_existing_outputs(config, image):
    process_image(image, config)
    thumb, large = outputs(config, image)
    age(thumb, large)

    config.regenerate = True
    result = process_image(image, config)

    assert not result.skipped
    assert result.written == [thumb, large]
    assert thumb.stat().st_mtime != OLD
    assert large.stat().st_mtime != OLD


def test_only_missing_output_is_written(config, image):
    process_image(image, config)
    thumb, large = outputs(config, image)
    age(large)
    thumb.unlink()

    result = process_image(image, config)

    assert result.written == [thumb]
    assert thumb.exists()
    assert large.stat().st_mtime == OLD


def test_undecodable_source_is_skipped(config, images_dir):
    src = images_dir / "Trip" / "broken.jpg"
    src.parent.mkdir(parents=True)
    src.write_bytes(b"\xff\xd8\xff\xe0 truncated")
    image = gallery_image(src, "Trip/broken.jpg")

    result = process_image(image, config)

    assert result.failed
    assert result.written == []
    thumb, large = outputs(config, image)
    assert not thumb.exists()
    assert not large.exists()


def test_write_failure_is_logged_not_raised(tmp_path, image, caplog):
    blocker = tmp_path / "public"
    blocker.write_text("not a directory")
    config = BuildConfig(images_dir=tmp_path / "images", public_dir=blocker)

    result = process_image(image, config)

    assert not result.failed
    assert result.written == []
    assert len(result.errors) == 2
    assert "Writing" in caplog.text
