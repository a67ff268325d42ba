import os
import re

from artifacts.badges.layout import BadgeLayout
from artifacts.badges.logo import decode_logo
from artifacts.badges.raster import RasterRenderer
from integrations.qr import attendance_url, qr_image
from model.errors import InvalidInput
from log.logger import log

class Badge:
  """A participant's badge: the scene, the QR that points at their attendance URL, and the rendered PNG."""

  def __init__(self, participant, config, variant=None, logo=None, renderer=None, base_url=None):
    self.participant = participant
    self.config = config
    self.layout = BadgeLayout(config, variant)
    self.logo = decode_logo(logo)
    self.renderer = renderer
    self.base_url = base_url or config.base_url

  def path(self, directory="artifacts/badges"):
    safe_id = re.sub(r"[^\w\-.]", "_", self.participant.identifier)
    return os.path.join(directory, f"card-{safe_id}.png")

  def url(self):
    if not self.base_url:
      raise InvalidInput("No base URL to build the attendance link from")
    return attendance_url(self.base_url, self.participant.identifier)

  def scene(self):
    return self.layout.layout(self.participant.display_name, has_logo=self.logo is not None)

  def qr(self, scene):
    slot = scene.slot("qr")
    return qr_image(self.url(), slot.width)

  def parts(self):
    scene = self.scene()
    return scene, self.qr(scene), self.logo

  def png(self):
    if self.renderer is None:
      self.renderer = RasterRenderer()
    scene, qr, logo = self.parts()
    return self.renderer.render_png(scene, qr, logo)

  def generate(self, directory="artifacts/badges"):
    path = self.path(directory)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    data = self.png()
    with open(path, "wb") as f:
      f.write(data)
    log.debug(f"Wrote badge for {self.participant.identifier} to {path} ({len(data)} bytes)")
    return self
