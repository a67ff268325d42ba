from artifacts.badges.scene import BadgeScene, Rect, GradientRect, Polygon, Text, ImageSlot, Shadow, centered_left
from model.participant import display_name_for

# Badge layout. Everything stacked vertically is derived from the variant's
# constants by chaining offsets, top to bottom:
#
#   card_top       = margin
#   header_bottom  = card_top + header_height
#   qr_top         = header_bottom + qr_gap
#   qr_bottom      = qr_top + qr_size
#   name_baseline  = qr_bottom + name_gap
#   legend_top     = name_baseline + legend_gap
#   footer_top     = legend_top + legend_height + footer_gap
#   card_bottom    = footer_top + footer_height
#   canvas_height  = card_bottom + margin
#
# so growing one element pushes everything under it down by the same amount.

COLOR_BACKGROUND = "#eef2f7"
COLOR_CARD = "#ffffff"
COLOR_TITLE = "#ffffff"
COLOR_NAME = "#1f2937"
COLOR_PILL = "#eef1f5"
COLOR_LEGEND = "#4b5563"
COLOR_FOOTER = "#f3f4f6"
COLOR_FOOTER_TEXT = "#6b7280"

DATE_SEPARATOR = " · "

class LayoutVariant:
  """A fixed bundle of geometric constants for one badge style."""

  DEFAULTS = {
    "canvas_width": 1080,
    "margin": 28,
    "corner_radius": 26,
    "header_height": 260,
    "qr_gap": 70,
    "qr_size": 560,
    "name_gap": 120,
    "legend_gap": 30,
    "legend_width": 880,
    "legend_height": 84,
    "legend_radius": 20,
    "legend_baseline": 55,
    "footer_gap": 210,
    "footer_height": 110,
    "footer_text_offset": 10,
    "title_baseline": 214,
    "title_size": 64,
    "name_size": 56,
    "legend_size": 30,
    "footer_size": 30,
    "text_padding": 48,
    "logo_top": 26,
    "logo_width": 420,
    "logo_height": 96,
    "circular_logo": False,
    "diamonds": False,
    "diamond_size": 56,
    "shadow": True,
  }

  def __init__(self, name, **params):
    unknown = set(params) - set(self.DEFAULTS)
    if unknown:
      raise ValueError(f"Unknown layout parameters: {sorted(unknown)}")

    self.name = name
    self.params = dict(self.DEFAULTS)
    self.params.update(params)

  def __getattr__(self, key):
    params = self.__dict__.get("params")
    if params is not None and key in params:
      return params[key]
    raise AttributeError(key)

  def replace(self, **params):
    merged = dict(self.params)
    merged.update(params)
    return LayoutVariant(self.name, **merged)

  def geometry(self):
    return Geometry(self)

  def __repr__(self):
    return f"LayoutVariant({self.name!r})"

class Geometry:
  """Absolute positions derived from a LayoutVariant."""

  def __init__(self, variant):
    v = variant
    self.canvas_width = v.canvas_width

    self.card_left = v.margin
    self.card_top = v.margin
    self.card_width = v.canvas_width - 2 * v.margin

    self.header_bottom = self.card_top + v.header_height
    self.title_baseline = self.card_top + v.title_baseline

    self.qr_top = self.header_bottom + v.qr_gap
    self.qr_bottom = self.qr_top + v.qr_size
    self.qr_left = centered_left(v.canvas_width, v.qr_size)

    self.name_baseline = self.qr_bottom + v.name_gap

    self.legend_top = self.name_baseline + v.legend_gap
    self.legend_bottom = self.legend_top + v.legend_height
    self.legend_left = centered_left(v.canvas_width, v.legend_width)
    self.legend_baseline = self.legend_top + v.legend_baseline

    self.footer_top = self.legend_bottom + v.footer_gap
    self.card_bottom = self.footer_top + v.footer_height
    self.card_height = self.card_bottom - self.card_top
    self.footer_baseline = self.footer_top + v.footer_height / 2 + v.footer_text_offset

    self.canvas_height = self.card_bottom + v.margin

    self.logo_top = self.card_top + v.logo_top
    self.logo_left = centered_left(v.canvas_width, v.logo_width)

    self.center_x = v.canvas_width / 2
    self.text_width = self.card_width - 2 * v.text_padding

  def check(self, variant):
    if self.card_width <= 0:
      raise ValueError(f"{variant.name}: margins leave no room for the card")
    if variant.qr_size > self.card_width:
      raise ValueError(f"{variant.name}: QR ({variant.qr_size}px) is wider than the card ({self.card_width}px)")
    if variant.legend_width > self.card_width:
      raise ValueError(f"{variant.name}: legend ({variant.legend_width}px) is wider than the card ({self.card_width}px)")
    if self.logo_top + variant.logo_height > self.header_bottom:
      raise ValueError(f"{variant.name}: logo slot runs past the header band")
    if self.legend_bottom > self.footer_top:
      raise ValueError(f"{variant.name}: legend overlaps the footer")
    return self

VARIANTS = {
  "classic": LayoutVariant("classic"),
  "compact": LayoutVariant(
    "compact",
    canvas_width=720,
    margin=20,
    corner_radius=20,
    header_height=170,
    qr_gap=44,
    qr_size=360,
    name_gap=84,
    legend_gap=22,
    legend_width=600,
    legend_height=60,
    legend_radius=14,
    legend_baseline=40,
    footer_gap=144,
    footer_height=76,
    footer_text_offset=7,
    title_baseline=140,
    title_size=44,
    name_size=38,
    legend_size=21,
    footer_size=20,
    text_padding=32,
    logo_top=16,
    logo_width=280,
    logo_height=64,
    diamond_size=36,
  ),
  "round-logo": LayoutVariant(
    "round-logo",
    circular_logo=True,
    logo_top=20,
    logo_width=120,
    logo_height=120,
    title_baseline=232,
  ),
  "festive": LayoutVariant("festive", diamonds=True),
}

def get_variant(name_or_variant):
  if isinstance(name_or_variant, LayoutVariant):
    return name_or_variant
  name = name_or_variant or "classic"
  if name not in VARIANTS:
    raise ValueError(f"Unknown layout variant {name!r}; expected one of {sorted(VARIANTS)}")
  return VARIANTS[name]

def footer_caption(event_date, footer_text):
  date = str(event_date or "").strip()
  text = str(footer_text or "").strip()
  if date and text:
    return f"{date}{DATE_SEPARATOR}{text}"
  return date or text

def diamond(cx, cy, size):
  half = size / 2
  return [(cx, cy - half), (cx + half, cy), (cx, cy + half), (cx - half, cy)]

class BadgeLayout:
  """Turns a participant's name plus event branding into a BadgeScene. Pure
  arithmetic; nothing here touches images or fonts."""

  def __init__(self, config, variant=None):
    self.config = config
    self.variant = get_variant(variant if variant is not None else config.layout_variant)

  def layout(self, display_name, has_logo=False):
    v = self.variant
    g = v.geometry().check(v)

    scene = BadgeScene(v.canvas_width, g.canvas_height, COLOR_BACKGROUND)

    shadow = Shadow() if v.shadow else None
    scene.add(Rect("card", g.card_left, g.card_top, g.card_width, g.card_height, COLOR_CARD,
                   radius=v.corner_radius, shadow=shadow))
    scene.add(GradientRect("header", g.card_left, g.card_top, g.card_width, v.header_height,
                           self.config.theme_color, self.config.theme_color_end,
                           radius=v.corner_radius, square_edge="bottom"))

    if v.diamonds:
      self.layout_diamonds(scene, g)

    if self.config.event_name:
      scene.add(Text("title", self.config.event_name, g.center_x, g.title_baseline, v.title_size, COLOR_TITLE,
                     max_width=g.text_width))

    scene.add(Text("name", display_name, g.center_x, g.name_baseline, v.name_size, COLOR_NAME,
                   max_width=g.text_width))

    scene.add(Rect("legend_pill", g.legend_left, g.legend_top, v.legend_width, v.legend_height, COLOR_PILL,
                   radius=v.legend_radius))
    if self.config.legend_text:
      scene.add(Text("legend", self.config.legend_text, g.center_x, g.legend_baseline, v.legend_size, COLOR_LEGEND,
                     max_width=v.legend_width - v.text_padding))

    scene.add(Rect("footer", g.card_left, g.footer_top, g.card_width, v.footer_height, COLOR_FOOTER,
                   radius=v.corner_radius, square_edge="top"))
    caption = footer_caption(self.config.event_date, self.config.footer_text)
    if caption:
      scene.add(Text("footer_caption", caption, g.center_x, g.footer_baseline, v.footer_size, COLOR_FOOTER_TEXT,
                     bold=False, max_width=g.text_width))

    if has_logo:
      scene.add(ImageSlot("logo", "logo", g.logo_left, g.logo_top, v.logo_width, v.logo_height,
                          circular=v.circular_logo))

    scene.add(ImageSlot("qr", "qr", g.qr_left, g.qr_top, v.qr_size, v.qr_size))
    return scene

  def layout_diamonds(self, scene, g):
    v = self.variant
    cy = g.card_top + v.header_height / 2
    inset = v.diamond_size
    small = v.diamond_size * 0.55
    centers = [
      ("diamond_left", g.card_left + inset, cy, v.diamond_size),
      ("diamond_left_small", g.card_left + inset + v.diamond_size * 0.9, cy - v.diamond_size * 0.6, small),
      ("diamond_right", g.card_left + g.card_width - inset, cy, v.diamond_size),
      ("diamond_right_small", g.card_left + g.card_width - inset - v.diamond_size * 0.9, cy + v.diamond_size * 0.6, small),
    ]
    for name, cx, cy_, size in centers:
      scene.add(Polygon(name, diamond(cx, cy_, size), "#ffffff", opacity=0.18))

def layout_badge(display_name, config, variant=None, has_logo=False, identifier=None):
  if identifier is not None:
    display_name = display_name_for(display_name, identifier)
  return BadgeLayout(config, variant).layout(display_name, has_logo=has_logo)
