import subprocess

from PIL import ImageFont

from log.logger import log

# preferred families, most wanted first
FONT_FAMILIES = ["Inter", "DejaVu Sans", "Liberation Sans", "Noto Sans"]

def find_font_file(family, bold):
  """Asks fontconfig for a .ttf of family in the given weight. Returns None when there isn't one."""
  style = "Bold" if bold else "Regular"
  try:
    result = subprocess.run(['fc-match', '--format=%{file}', f'{family}:style={style}'],
                            capture_output=True, text=True, check=True)
  except (OSError, subprocess.CalledProcessError):
    return None

  path = result.stdout.strip()
  if not path.lower().endswith(".ttf"):
    return None
  # fc-match always answers; make sure it answered with the family we asked for
  if family.replace(" ", "").lower() not in path.replace("-", "").replace("_", "").lower():
    return None
  return path

class FontSet:
  """Regular and bold TrueType fonts for the raster and PDF renderers."""

  def __init__(self, regular_path=None, bold_path=None):
    self.regular_path = regular_path
    self.bold_path = bold_path
    self._cache = {}

  @classmethod
  def discover(cls, regular_path=None, bold_path=None):
    for family in FONT_FAMILIES:
      if regular_path and bold_path:
        break
      regular_path = regular_path or find_font_file(family, bold=False)
      bold_path = bold_path or find_font_file(family, bold=True)

    if not (regular_path or bold_path):
      log.notice("No TrueType fonts found via fontconfig; falling back on Pillow's built-in font")
    return cls(regular_path, bold_path or regular_path)

  def path(self, bold):
    return self.bold_path if bold and self.bold_path else self.regular_path

  def font(self, size, bold=True):
    key = (int(size), bool(bold))
    if key not in self._cache:
      path = self.path(bold)
      font = None
      if path:
        try:
          font = ImageFont.truetype(path, key[0])
        except OSError as exc:
          log.warn(f"Unable to load font {path}; using Pillow's built-in font", exception=exc)
      self._cache[key] = font or ImageFont.load_default(size=key[0])
    return self._cache[key]

  def text_width(self, text, size, bold=True):
    return self.font(size, bold).getlength(text)

  def fit(self, text, size, bold, max_width, min_size):
    """Largest size from size down to min_size at which text fits max_width.
    Past min_size the text is cut and ends in an ellipsis."""
    if max_width is None:
      return text, size

    while size > min_size and self.text_width(text, size, bold) > max_width:
      size -= 1

    if self.text_width(text, size, bold) <= max_width:
      return text, size

    ellipsis = "…"
    while text and self.text_width(text + ellipsis, size, bold) > max_width:
      text = text[:-1]
    return text.rstrip() + ellipsis, size
