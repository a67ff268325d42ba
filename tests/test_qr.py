import pytest

from integrations.qr import attendance_url, qr_image, qr_png
from model.errors import EncodingFailure

BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)

@pytest.mark.parametrize("base,identifier,expected", [
  ("https://checkin.example.org", "42", "https://checkin.example.org/attend?pid=42"),
  ("https://checkin.example.org/", "42", "https://checkin.example.org/attend?pid=42"),
  ("http://localhost:8080", "a b/ç", "http://localhost:8080/attend?pid=a%20b%2F%C3%A7"),
  ("http://x", "it's-(ok)_~*.!", "http://x/attend?pid=it's-(ok)_~*.!"),
  ("http://x", "a&b=c?", "http://x/attend?pid=a%26b%3Dc%3F"),
])
def test_attendance_url_escapes_like_a_uri_component(base, identifier, expected):
  assert attendance_url(base, identifier) == expected

def test_qr_image_is_square_black_and_white():
  image = qr_image("https://checkin.example.org/attend?pid=42", 300)
  assert image.size == (300, 300)
  assert set(image.getdata()) <= {BLACK, WHITE}
  # one module of quiet zone, so the corner is white and the finder pattern sits just inside it
  assert image.getpixel((0, 0)) == WHITE

def test_qr_png_is_png():
  assert qr_png("hello", 120).startswith(b"\x89PNG")

def test_qr_overflow_is_encoding_failure():
  with pytest.raises(EncodingFailure):
    qr_image("x" * 8000, 300)

@pytest.mark.parametrize("width", [0, -5])
def test_qr_needs_positive_width(width):
  with pytest.raises(EncodingFailure):
    qr_image("hello", width)
