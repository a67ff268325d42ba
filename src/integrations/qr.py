import io
import urllib.parse

import qrcode
from qrcode.exceptions import DataOverflowError
from qrcode.image.pil import PilImage
from PIL import Image

from model.errors import EncodingFailure

# characters encodeURIComponent leaves alone
URI_COMPONENT_SAFE = "-_.!~*'()"

def attendance_url(base_url, identifier):
  """<base>/attend?pid=<identifier>, escaped the way browsers escape a URI component."""
  base = str(base_url or "").rstrip("/")
  pid = urllib.parse.quote(str(identifier), safe=URI_COMPONENT_SAFE)
  return f"{base}/attend?pid={pid}"

def qr_image(data, width, border=1):
  """Square black-on-white QR symbol for data, scaled to exactly width pixels."""
  if width <= 0:
    raise EncodingFailure(f"QR width must be positive, got {width}")

  try:
    qr = qrcode.QRCode(
      error_correction=qrcode.constants.ERROR_CORRECT_M,
      box_size=1,
      border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)
    modules = qr.make_image(image_factory=PilImage, fill_color="black", back_color="white")
  except (DataOverflowError, ValueError, TypeError) as exc:
    raise EncodingFailure(f"Unable to encode QR code: {exc}") from exc

  # nearest-neighbour keeps module edges sharp
  return modules.convert("RGBA").resize((width, width), Image.NEAREST)

def qr_png(data, width, border=1):
  buffer = io.BytesIO()
  try:
    qr_image(data, width, border).save(buffer, format="PNG")
  except OSError as exc:
    raise EncodingFailure(f"Unable to write QR code PNG: {exc}") from exc
  return buffer.getvalue()
