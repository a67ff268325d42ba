import io

import pytest
from PIL import Image, ImageChops

from artifacts.badges.badge import Badge
from artifacts.badges.layout import BadgeLayout, VARIANTS
from artifacts.badges.logo import LogoProvider, fit_inside
from artifacts.badges.scene import centered_left
from integrations.qr import qr_image
from model.errors import EncodingFailure
from model.participant import Participant

RED = (255, 0, 0, 255)

def same_pixels(a, b):
  return ImageChops.difference(a.convert("RGBA"), b.convert("RGBA")).getbbox() is None

def test_render_matches_scene_size(config, renderer):
  scene = BadgeLayout(config, "classic").layout("Ada Lovelace")
  image = renderer.render(scene, qr_image("https://checkin.example.org/attend?pid=42", 560))
  assert image.size == (1080, 1500)
  assert image.mode == "RGBA"

def test_qr_is_placed_pixel_exact(config, renderer):
  scene = BadgeLayout(config, "compact").layout("Ada Lovelace")
  slot = scene.slot("qr")
  qr = qr_image("https://checkin.example.org/attend?pid=42", slot.width)

  image = renderer.render(scene, qr)

  placed = image.crop((slot.x, slot.y, slot.x + slot.width, slot.y + slot.height))
  assert same_pixels(placed, qr)

def test_png_output(config, renderer):
  scene = BadgeLayout(config, "compact").layout("Ada Lovelace")
  data = renderer.render_png(scene, qr_image("hello", scene.slot("qr").width))
  assert data.startswith(b"\x89PNG\r\n\x1a\n")
  assert Image.open(io.BytesIO(data)).size == (scene.width, scene.height)

def test_missing_qr_is_fatal(config, renderer):
  scene = BadgeLayout(config, "compact").layout("Ada")
  with pytest.raises(EncodingFailure):
    renderer.render(scene, None)

def test_background_and_card_colors(config, renderer):
  scene = BadgeLayout(config, VARIANTS["compact"].replace(shadow=False)).layout("Ada")
  image = renderer.render(scene, qr_image("x", scene.slot("qr").width))
  card = scene["card"]
  # left of the QR, between header and QR: plain white card
  assert image.getpixel((card.x + 10, scene["qr"].y + 5)) == (255, 255, 255, 255)
  # corner of the canvas, outside the card
  assert image.getpixel((0, 0)) == (0xee, 0xf2, 0xf7, 255)

def test_logo_fitted_and_centered(config, renderer, red_logo_png):
  scene = BadgeLayout(config, "classic").layout("Ada", has_logo=True)
  slot = scene.slot("logo")
  image = renderer.render(scene, qr_image("x", scene.slot("qr").width), red_logo_png)

  # 400x200 into 420x96 -> 192x96, centred in the slot
  width, height = 192, 96
  left = slot.x + centered_left(slot.width, width)
  top = slot.y + centered_left(slot.height, height)
  assert image.getpixel((left + width // 2, top + height // 2)) == RED
  assert image.getpixel((left - 3, top + height // 2)) != RED

def test_undecodable_logo_is_skipped(config, renderer):
  scene = BadgeLayout(config, "classic").layout("Ada", has_logo=True)
  plain = BadgeLayout(config, "classic").layout("Ada", has_logo=False)
  qr = qr_image("x", 560)

  broken = renderer.render(scene, qr, b"definitely not an image")
  expected = renderer.render(plain, qr)
  assert same_pixels(broken, expected)

def test_circular_logo_clips_corners(config, renderer, square_logo_png):
  scene = BadgeLayout(config, "round-logo").layout("Ada", has_logo=True)
  slot = scene.slot("logo")
  image = renderer.render(scene, qr_image("x", 560), square_logo_png)

  assert image.getpixel((slot.x + slot.width // 2, slot.y + slot.height // 2)) == RED
  assert image.getpixel((slot.x + 2, slot.y + 2)) != RED

def test_fit_inside_never_upscales_by_default():
  small = Image.new("RGBA", (50, 20))
  assert fit_inside(small, 420, 96).size == (50, 20)
  assert fit_inside(small, 420, 96, upscale=True).size == (240, 96)
  assert fit_inside(Image.new("RGBA", (1000, 1000)), 420, 96).size == (96, 96)

def test_logo_provider_tries_extensions_in_order(tmp_path, red_logo_png):
  provider = LogoProvider(str(tmp_path))
  assert provider.load() is None

  (tmp_path / "logo.webp").write_bytes(b"webp")
  (tmp_path / "logo.jpg").write_bytes(b"jpg")
  assert provider.load() == b"jpg"

  (tmp_path / "logo.png").write_bytes(red_logo_png)
  assert provider.load() == red_logo_png

def test_badge_writes_png(tmp_path, config, renderer, red_logo_png):
  participant = Participant("42/a", "Ada Lovelace", "", 2)
  badge = Badge(participant, config, variant="compact", logo=red_logo_png, renderer=renderer)

  badge.generate(str(tmp_path))

  path = tmp_path / "card-42_a.png"
  assert path.exists()
  assert Image.open(path).size == (720, 1000)
  assert badge.url() == "https://checkin.example.org/attend?pid=42%2Fa"

def test_long_name_shrinks_to_fit(fonts):
  text, size = fonts.fit("W" * 200, 56, True, 600, 28)
  assert size == 28
  assert text.endswith("…")
  assert fonts.text_width(text, size) <= 600

  text, size = fonts.fit("Ada", 56, True, 600, 28)
  assert (text, size) == ("Ada", 56)
