from reportlab.lib import colors
from reportlab.lib.units import inch
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from artifacts.badges.scene import Rect, GradientRect, Polygon, Text, ImageSlot, centered_left
from artifacts.badges.logo import decode_logo, prepare_logo
from model.errors import CheckinError
from log.logger import log

BUILTIN_REGULAR = "Helvetica"
BUILTIN_BOLD = "Helvetica-Bold"

def register_fonts(fonts):
  """Registers the FontSet's TrueType files with reportlab. Returns (regular, bold) font names."""
  if fonts is None:
    return BUILTIN_REGULAR, BUILTIN_BOLD

  names = []
  for path, fallback, name in ((fonts.regular_path, BUILTIN_REGULAR, "Badge-Regular"),
                               (fonts.bold_path, BUILTIN_BOLD, "Badge-Bold")):
    if not path:
      names.append(fallback)
      continue
    try:
      if name not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(TTFont(name, path))
      names.append(name)
    except Exception as exc:
      # reportlab raises its own TTFError and plain Exceptions for unreadable fonts
      log.warn(f"Failed to register font {path} with reportlab; using {fallback}", exception=exc)
      names.append(fallback)
  return tuple(names)

def font_size_for_width(text, font_name, start_size, max_width, min_size):
  if max_width is None:
    return text, start_size

  size = start_size
  while size > min_size and pdfmetrics.stringWidth(text, font_name, size) > max_width:
    size -= 1
  if pdfmetrics.stringWidth(text, font_name, size) <= max_width:
    return text, size

  while text and pdfmetrics.stringWidth(text + "…", font_name, size) > max_width:
    text = text[:-1]
  return text.rstrip() + "…", size

class PdfRenderer:
  """Draws BadgeScenes onto PDF pages for printing, one badge per page. Scene
  pixels are scaled so the badge is page_width wide."""

  def __init__(self, fonts=None, page_width=4.25*inch, upscale_logo=False):
    self.fonts = fonts
    self.page_width = page_width
    self.upscale_logo = upscale_logo
    self.regular_font, self.bold_font = register_fonts(fonts)

  def render(self, path_or_file, pages, title="Badges"):
    """pages is an iterable of (scene, qr_image, logo) tuples."""
    pdf = canvas.Canvas(path_or_file)
    pdf.setTitle(title)
    pdf.setCreator("checkin-desk")
    pdf.setProducer("ReportLab")

    count = 0
    for scene, qr_image, logo in pages:
      self.draw_page(pdf, scene, qr_image, logo)
      count += 1

    pdf.save()
    log.debug(f"Wrote {count} badge pages")
    return count

  def render_badges(self, path_or_file, badges, title="Badges"):
    """Renders each Badge on its own page. Badges whose QR or link cannot be built are
    logged and left out. Returns (pages written, badges that failed); no file is
    written when every badge fails."""
    pages = []
    failed = []
    for badge in badges:
      try:
        pages.append(badge.parts())
      except CheckinError as exc:
        failed.append(badge)
        log.error(f"Unable to render badge for {badge.participant.identifier}: {exc.message}", exception=exc)

    if not pages:
      return 0, failed
    return self.render(path_or_file, pages, title), failed

  def draw_page(self, pdf, scene, qr_image, logo=None):
    self.scale = self.page_width / scene.width
    self.scene_height = scene.height
    pdf.setPageSize((scene.width * self.scale, scene.height * self.scale))

    pdf.setFillColor(colors.HexColor(scene.background))
    pdf.rect(0, 0, scene.width * self.scale, scene.height * self.scale, stroke=0, fill=1)

    logo_image = decode_logo(logo)
    for primitive in scene.primitives:
      pdf.saveState()
      if isinstance(primitive, GradientRect):
        self.draw_gradient(pdf, primitive)
      elif isinstance(primitive, Rect):
        self.draw_rect(pdf, primitive)
      elif isinstance(primitive, Polygon):
        self.draw_polygon(pdf, primitive)
      elif isinstance(primitive, Text):
        self.draw_text(pdf, primitive)
      elif isinstance(primitive, ImageSlot) and primitive.kind == "logo":
        if logo_image is not None:
          fitted = prepare_logo(logo_image, primitive, upscale=self.upscale_logo)
          left = primitive.x + centered_left(primitive.width, fitted.width)
          top = primitive.y + centered_left(primitive.height, fitted.height)
          self.draw_image(pdf, fitted, left, top, fitted.width, fitted.height)
      elif isinstance(primitive, ImageSlot) and primitive.kind == "qr":
        self.draw_image(pdf, qr_image.convert("RGB"), primitive.x, primitive.y, primitive.width, primitive.height)
      pdf.restoreState()

    pdf.showPage()

  # scene coordinates grow downward from the top; PDF's grow upward from the bottom
  def px(self, value):
    return value * self.scale

  def py(self, y):
    return (self.scene_height - y) * self.scale

  def rect_path(self, pdf, rect):
    path = pdf.beginPath()
    x, y_bottom = self.px(rect.x), self.py(rect.y + rect.height)
    width, height, radius = self.px(rect.width), self.px(rect.height), self.px(rect.radius)
    path.roundRect(x, y_bottom, width, height, radius)
    if radius and rect.square_edge == "bottom":
      path.rect(x, y_bottom, width, min(radius, height))
    elif radius and rect.square_edge == "top":
      path.rect(x, y_bottom + height - min(radius, height), width, min(radius, height))
    return path

  def draw_rect(self, pdf, rect):
    if rect.shadow is not None:
      shadow = rect.shadow
      pdf.setFillColor(colors.HexColor(shadow.color), alpha=shadow.opacity)
      pdf.roundRect(self.px(rect.x + shadow.dx), self.py(rect.y + shadow.dy + rect.height),
                    self.px(rect.width), self.px(rect.height), self.px(rect.radius), stroke=0, fill=1)

    pdf.setFillColor(colors.HexColor(rect.fill))
    pdf.drawPath(self.rect_path(pdf, rect), stroke=0, fill=1, fillMode=1)

  def draw_gradient(self, pdf, rect):
    pdf.clipPath(self.rect_path(pdf, rect), stroke=0, fill=0, fillMode=1)
    y = self.py(rect.y + rect.height / 2)
    pdf.linearGradient(self.px(rect.x), y, self.px(rect.x + rect.width), y,
                       (colors.HexColor(rect.start_color), colors.HexColor(rect.end_color)),
                       extend=False)

  def draw_polygon(self, pdf, polygon):
    path = pdf.beginPath()
    first, *rest = polygon.points
    path.moveTo(self.px(first[0]), self.py(first[1]))
    for x, y in rest:
      path.lineTo(self.px(x), self.py(y))
    path.close()
    pdf.setFillColor(colors.HexColor(polygon.fill), alpha=polygon.opacity)
    pdf.drawPath(path, stroke=0, fill=1)

  def draw_text(self, pdf, text):
    font_name = self.bold_font if text.bold else self.regular_font
    content, size = font_size_for_width(text.text, font_name, text.size, text.max_width, text.min_size)
    pdf.setFont(font_name, self.px(size))
    pdf.setFillColor(colors.HexColor(text.color))
    pdf.drawCentredString(self.px(text.x), self.py(text.baseline), content)

  def draw_image(self, pdf, image, x, y, width, height):
    pdf.drawImage(ImageReader(image), self.px(x), self.py(y + height),
                  width=self.px(width), height=self.px(height), mask='auto')
