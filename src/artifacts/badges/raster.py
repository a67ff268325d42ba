import io

from PIL import Image, ImageColor, ImageDraw, ImageFilter

from artifacts.badges.scene import Rect, GradientRect, Polygon, Text, ImageSlot, centered_left
from artifacts.badges.logo import decode_logo, prepare_logo
from artifacts.badges.fonts import FontSet
from model.errors import EncodingFailure
from log.logger import log

def rgba(color, opacity=1.0):
  r, g, b = ImageColor.getrgb(color)[:3]
  return (r, g, b, int(round(255 * opacity)))

def box(x, y, width, height):
  # Pillow boxes include their far edge
  return (x, y, x + width - 1, y + height - 1)

def gradient_strip(start_color, end_color, width, height):
  start = ImageColor.getrgb(start_color)[:3]
  end = ImageColor.getrgb(end_color)[:3]
  row = Image.new("RGBA", (width, 1))
  span = max(width - 1, 1)
  row.putdata([
    tuple(int(round(s + (e - s) * i / span)) for s, e in zip(start, end)) + (255,)
    for i in range(width)
  ])
  return row.resize((width, height), Image.NEAREST)

def shape_mask(width, height, radius, square_edge=None):
  mask = Image.new("L", (width, height), 0)
  draw = ImageDraw.Draw(mask)
  draw.rounded_rectangle(box(0, 0, width, height), radius=radius, fill=255)
  if radius and square_edge == "bottom":
    draw.rectangle(box(0, max(height - radius, 0), width, min(radius, height)), fill=255)
  elif radius and square_edge == "top":
    draw.rectangle(box(0, 0, width, min(radius, height)), fill=255)
  return mask

class RasterRenderer:
  """Paints a BadgeScene with Pillow and overlays the QR code and logo."""

  def __init__(self, fonts=None, upscale_logo=False):
    self.fonts = fonts or FontSet.discover()
    self.upscale_logo = upscale_logo

  def render(self, scene, qr_image, logo=None):
    canvas = Image.new("RGBA", (scene.width, scene.height), rgba(scene.background))
    logo_image = decode_logo(logo)

    for primitive in scene.primitives:
      if isinstance(primitive, GradientRect):
        self.draw_gradient(canvas, primitive)
      elif isinstance(primitive, Rect):
        self.draw_rect(canvas, primitive)
      elif isinstance(primitive, Polygon):
        self.draw_polygon(canvas, primitive)
      elif isinstance(primitive, Text):
        self.draw_text(canvas, primitive)
      elif isinstance(primitive, ImageSlot) and primitive.kind == "logo":
        self.place_logo(canvas, primitive, logo_image)
      elif isinstance(primitive, ImageSlot) and primitive.kind == "qr":
        self.place_qr(canvas, primitive, qr_image)
      else:
        raise ValueError(f"Don't know how to rasterize {primitive!r}")

    return canvas

  def render_png(self, scene, qr_image, logo=None):
    image = self.render(scene, qr_image, logo)
    buffer = io.BytesIO()
    try:
      image.save(buffer, format="PNG", optimize=True)
    except (OSError, ValueError) as exc:
      raise EncodingFailure(f"Unable to encode badge PNG: {exc}") from exc
    return buffer.getvalue()

  def draw_rect(self, canvas, rect):
    if rect.shadow is not None:
      self.draw_shadow(canvas, rect)

    mask = shape_mask(rect.width, rect.height, rect.radius, rect.square_edge)
    fill = Image.new("RGBA", (rect.width, rect.height), rgba(rect.fill))
    canvas.paste(fill, (rect.x, rect.y), mask)

  def draw_shadow(self, canvas, rect):
    shadow = rect.shadow
    layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    ImageDraw.Draw(layer).rounded_rectangle(
      box(rect.x + shadow.dx, rect.y + shadow.dy, rect.width, rect.height),
      radius=rect.radius,
      fill=rgba(shadow.color, shadow.opacity))
    canvas.alpha_composite(layer.filter(ImageFilter.GaussianBlur(shadow.blur)))

  def draw_gradient(self, canvas, rect):
    strip = gradient_strip(rect.start_color, rect.end_color, rect.width, rect.height)
    canvas.paste(strip, (rect.x, rect.y), shape_mask(rect.width, rect.height, rect.radius, rect.square_edge))

  def draw_polygon(self, canvas, polygon):
    layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    ImageDraw.Draw(layer).polygon(polygon.points, fill=rgba(polygon.fill, polygon.opacity))
    canvas.alpha_composite(layer)

  def draw_text(self, canvas, text):
    content, size = self.fonts.fit(text.text, text.size, text.bold, text.max_width, text.min_size)
    if size != text.size or content != text.text:
      log.debug(f"Shrunk {text.name} text to {size}pt: {content!r}")

    font = self.fonts.font(size, text.bold)
    ImageDraw.Draw(canvas).text((text.x, text.baseline), content, font=font, fill=rgba(text.color), anchor="ms")

  def place_logo(self, canvas, slot, logo_image):
    if logo_image is None:
      return

    fitted = prepare_logo(logo_image, slot, upscale=self.upscale_logo)
    left = slot.x + centered_left(slot.width, fitted.width)
    top = slot.y + centered_left(slot.height, fitted.height)
    canvas.alpha_composite(fitted, (left, top))

  def place_qr(self, canvas, slot, qr_image):
    if qr_image is None:
      raise EncodingFailure("Badge has no QR code to place")

    qr = qr_image.convert("RGBA")
    if qr.size != (slot.width, slot.height):
      log.debug(f"Resizing QR from {qr.size} to {slot.width}x{slot.height}")
      qr = qr.resize((slot.width, slot.height), Image.NEAREST)
    canvas.alpha_composite(qr, (slot.x, slot.y))
