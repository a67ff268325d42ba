import io
import os

from PIL import Image, ImageDraw, ImageChops

from model.errors import AssetMissing
from log.logger import log

LOGO_BASENAMES = ("logo",)
LOGO_EXTENSIONS = ("png", "jpg", "jpeg", "webp")

class LogoProvider:
  """Finds the event logo on disk. Tries each basename/extension pair in order
  and hands back the raw bytes of the first file that exists."""

  def __init__(self, directory, basenames=LOGO_BASENAMES, extensions=LOGO_EXTENSIONS):
    self.directory = directory
    self.basenames = tuple(basenames)
    self.extensions = tuple(extensions)

  def candidates(self):
    for basename in self.basenames:
      for extension in self.extensions:
        yield os.path.join(self.directory, f"{basename}.{extension}")

  def find(self):
    for path in self.candidates():
      if os.path.isfile(path):
        return path
    raise AssetMissing(f"No logo in {self.directory} ({'|'.join(self.extensions)})")

  def load(self):
    try:
      path = self.find()
      with open(path, "rb") as f:
        return f.read()
    except AssetMissing as exc:
      log.warn(exc.message)
      return None
    except OSError as exc:
      log.warn(f"Unable to read logo from {self.directory}", exception=exc)
      return None

class StaticLogoProvider:
  """Serves logo bytes already held in memory."""

  def __init__(self, data):
    self.data = data

  def load(self):
    return self.data

def decode_logo(data):
  """Decodes logo bytes into RGBA. Returns None (with a warning) when they can't be decoded."""
  if data is None:
    return None
  if isinstance(data, Image.Image):
    return data.convert("RGBA")

  try:
    image = Image.open(io.BytesIO(data))
    image.load()
  except (OSError, ValueError, Image.DecompressionBombError) as exc:
    log.warn("Logo could not be decoded; rendering without it", exception=AssetMissing(str(exc)))
    return None
  return image.convert("RGBA")

def fit_inside(image, max_width, max_height, upscale=False):
  """Scales image to fit the box, keeping its aspect ratio. Never enlarges unless upscale is set."""
  scale = min(max_width / image.width, max_height / image.height)
  if not upscale:
    scale = min(scale, 1.0)
  if scale == 1.0:
    return image

  size = (max(1, int(round(image.width * scale))), max(1, int(round(image.height * scale))))
  return image.resize(size, Image.LANCZOS)

def circular_crop(image):
  """Centre-crops to a square and clears everything outside the inscribed circle."""
  side = min(image.width, image.height)
  left = (image.width - side) // 2
  top = (image.height - side) // 2
  square = image.crop((left, top, left + side, top + side)).convert("RGBA")

  mask = Image.new("L", (side, side), 0)
  ImageDraw.Draw(mask).ellipse((0, 0, side - 1, side - 1), fill=255)
  square.putalpha(ImageChops.multiply(square.getchannel("A"), mask))
  return square

def prepare_logo(image, slot, upscale=False):
  if slot.circular:
    image = circular_crop(image)
  return fit_inside(image, slot.width, slot.height, upscale=upscale)
