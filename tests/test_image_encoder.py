import base64
import io

import pytest
from PIL import Image

from attendance_pro.input_handler import ImageEncoder
from attendance_pro.utils.exceptions import ImageEncodingError


def png_bytes(size=(40, 20), mode="RGB", color=(200, 10, 10)):
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def decode(blob):
    return Image.open(io.BytesIO(base64.b64decode(blob)))


def test_encode_file_path(tmp_path):
    path = tmp_path / "shot.png"
    path.write_bytes(png_bytes())

    image = decode(ImageEncoder().encode(str(path)))

    assert image.format == "PNG"
    assert image.size == (40, 20)


def test_encode_data_url_and_plain_base64():
    raw = base64.b64encode(png_bytes()).decode("ascii")
    encoder = ImageEncoder()

    assert decode(encoder.encode(f"data:image/png;base64,{raw}")).size == (40, 20)
    assert decode(encoder.encode(raw)).size == (40, 20)


def test_transparent_image_is_flattened_to_rgb():
    blob = ImageEncoder().encode(png_bytes(mode="RGBA", color=(0, 0, 0, 0)))
    image = decode(blob)
    assert image.mode == "RGB"
    assert image.getpixel((0, 0)) == (255, 255, 255)


def test_large_image_is_downscaled():
    encoder = ImageEncoder()
    encoder.max_width = 100
    encoder.max_height = 100

    image = decode(encoder.encode(Image.new("RGB", (400, 200))))

    assert image.size == (100, 50)


def test_encode_many_keeps_order():
    encoder = ImageEncoder()
    blobs = encoder.encode_many([png_bytes(size=(10, 10)), png_bytes(size=(30, 10))])
    assert [decode(b).size for b in blobs] == [(10, 10), (30, 10)]


@pytest.mark.parametrize("source", [b"not an image", "definitely-not-base64!!", "data:image/png;base64,"])
def test_unreadable_sources_raise(source):
    with pytest.raises(ImageEncodingError):
        ImageEncoder().encode(source)


def test_to_data_url_round_trips_through_encode():
    encoder = ImageEncoder()
    blob = encoder.encode(png_bytes())
    url = encoder.to_data_url(blob)

    assert url.startswith("data:image/png;base64,")
    assert encoder.encode(url) == blob


def test_very_thin_image_keeps_at_least_one_pixel():
    encoder = ImageEncoder()
    encoder.max_width = 100
    encoder.max_height = 100

    image = decode(encoder.encode(png_bytes(size=(10000, 1))))

    assert image.size == (100, 1)
