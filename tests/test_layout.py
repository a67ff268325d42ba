import math

import pytest

from artifacts.badges.layout import BadgeLayout, VARIANTS, footer_caption, layout_badge, get_variant
from artifacts.badges.scene import centered_left, ImageSlot, Rect, Polygon

BELOW_QR = ["name", "legend_pill", "legend", "footer", "footer_caption"]
ABOVE_QR = ["card", "header", "title"]

def vertical_position(primitive):
  return primitive.baseline if hasattr(primitive, "baseline") else primitive.y

def test_classic_geometry(config):
  scene = BadgeLayout(config, "classic").layout("Ada Lovelace")

  assert (scene.width, scene.height) == (1080, 1500)
  assert (scene["card"].x, scene["card"].y, scene["card"].width, scene["card"].height) == (28, 28, 1024, 1444)
  assert scene["header"].bottom == 288
  assert (scene["qr"].x, scene["qr"].y, scene["qr"].width) == (260, 358, 560)
  assert scene["name"].baseline == 1038
  assert scene["legend_pill"].y == 1068
  assert scene["legend_pill"].x == 100
  assert scene["footer"].y == 1362
  assert scene["footer"].bottom == scene["card"].bottom

@pytest.mark.parametrize("qr_size", [300, 420, 560])
@pytest.mark.parametrize("delta", [1, 17, 40, 101])
def test_qr_growth_cascades_downward(config, qr_size, delta):
  base_variant = VARIANTS["classic"].replace(qr_size=qr_size)
  grown_variant = VARIANTS["classic"].replace(qr_size=qr_size + delta)

  base = BadgeLayout(config, base_variant).layout("Ada Lovelace")
  grown = BadgeLayout(config, grown_variant).layout("Ada Lovelace")

  for name in BELOW_QR:
    assert vertical_position(grown[name]) - vertical_position(base[name]) == delta, name
  for name in ABOVE_QR:
    assert vertical_position(grown[name]) == vertical_position(base[name]), name

  assert grown["qr"].y == base["qr"].y
  assert grown["header"].height == base["header"].height
  assert grown.height - base.height == delta

@pytest.mark.parametrize("param", ["header_height", "qr_gap", "name_gap"])
def test_other_gaps_cascade_too(config, param):
  base = BadgeLayout(config, "classic").layout("Ada")
  bumped_variant = VARIANTS["classic"].replace(**{param: VARIANTS["classic"].params[param] + 12})
  bumped = BadgeLayout(config, bumped_variant).layout("Ada")

  for name in ["name", "legend_pill", "footer"]:
    assert vertical_position(bumped[name]) - vertical_position(base[name]) == 12

@pytest.mark.parametrize("total,size,expected", [
  (1080, 560, 260),
  (1081, 560, 261),
  (1080, 561, 260),
  (10, 3, 4),
  (1080, 880, 100),
])
def test_centered_left_rounds_half_up(total, size, expected):
  assert centered_left(total, size) == expected

@pytest.mark.parametrize("variant_name", sorted(VARIANTS))
def test_every_box_is_centered(config, variant_name):
  scene = BadgeLayout(config, variant_name).layout("Ada Lovelace", has_logo=True)
  for primitive in scene.primitives:
    if isinstance(primitive, (Rect, ImageSlot)):
      assert primitive.x == math.floor((scene.width - primitive.width) / 2 + 0.5), primitive.name
  for text in scene.texts():
    assert text.x == scene.width / 2

@pytest.mark.parametrize("variant_name", sorted(VARIANTS))
def test_stacked_elements_do_not_overlap(config, variant_name):
  scene = BadgeLayout(config, variant_name).layout("Ada Lovelace", has_logo=True)
  assert scene["header"].bottom <= scene["qr"].top
  assert scene["qr"].bottom < scene["name"].baseline
  assert scene["name"].baseline < scene["legend_pill"].top
  assert scene["legend_pill"].bottom <= scene["footer"].top
  assert scene["footer"].bottom + VARIANTS[variant_name].margin == scene.height
  assert scene["logo"].bottom <= scene["header"].bottom

def test_compact_variant_size(config):
  scene = BadgeLayout(config, "compact").layout("Ada")
  assert (scene.width, scene.height) == (720, 1000)

def test_logo_slot_omitted_without_shifting(config):
  with_logo = BadgeLayout(config, "classic").layout("Ada", has_logo=True)
  without_logo = BadgeLayout(config, "classic").layout("Ada", has_logo=False)

  assert "logo" in with_logo
  assert "logo" not in without_logo
  assert [n for n in with_logo.names() if n != "logo"] == without_logo.names()
  for name in without_logo.names():
    assert repr(with_logo[name]) == repr(without_logo[name])

def test_round_logo_variant_uses_circular_square_slot(config):
  slot = BadgeLayout(config, "round-logo").layout("Ada", has_logo=True).slot("logo")
  assert slot.circular is True
  assert slot.width == slot.height

def test_festive_diamonds_stay_in_header(config):
  scene = BadgeLayout(config, "festive").layout("Ada")
  diamonds = [p for p in scene.primitives if isinstance(p, Polygon)]
  assert len(diamonds) == 4
  for diamond in diamonds:
    assert scene["header"].top <= diamond.top
    assert diamond.bottom <= scene["header"].bottom

def test_footer_caption_with_and_without_date():
  assert footer_caption("12 Oct 2026", "Evento exclusivo") == "12 Oct 2026 · Evento exclusivo"
  assert footer_caption("", "Evento exclusivo") == "Evento exclusivo"
  assert footer_caption("   ", "Evento exclusivo") == "Evento exclusivo"
  assert footer_caption("12 Oct 2026", "") == "12 Oct 2026"

def test_empty_date_leaves_no_separator(config):
  scene = BadgeLayout(config.replace(event_date=""), "classic").layout("Ada")
  assert scene["footer_caption"].text == "Evento exclusivo para miembros"
  assert "·" not in scene["footer_caption"].text

def test_empty_name_uses_identifier(config):
  scene = layout_badge("   ", config, identifier="42")
  assert scene["name"].text == "ID 42"

def test_long_names_get_a_width_limit(config):
  scene = layout_badge("Ada Augusta King, Countess of Lovelace " * 3, config)
  assert scene["name"].max_width == scene["card"].width - 2 * VARIANTS["classic"].text_padding

def test_title_omitted_without_event_name(config):
  scene = BadgeLayout(config.replace(event_name=""), "classic").layout("Ada")
  assert "title" not in scene

def test_inconsistent_variant_rejected(config):
  with pytest.raises(ValueError):
    BadgeLayout(config, VARIANTS["classic"].replace(legend_width=2000)).layout("Ada")
  with pytest.raises(ValueError):
    BadgeLayout(config, VARIANTS["classic"].replace(logo_height=400)).layout("Ada")

def test_unknown_variant_and_parameter():
  with pytest.raises(ValueError):
    get_variant("poster")
  with pytest.raises(ValueError):
    VARIANTS["classic"].replace(sparkles=True)
