from artifacts.badges.badge import Badge
from artifacts.badges.raster import RasterRenderer
from artifacts.badges.layout import get_variant
from log.logger import log

class CheckinDesk:
  """The three operations the web layer calls: render a badge, confirm attendance, list the roster."""

  def __init__(self, roster, config, logo_provider=None, renderer=None, variant=None):
    self.roster = roster
    self.config = config
    self.logo_provider = logo_provider
    self.renderer = renderer
    self.variant = get_variant(variant if variant is not None else config.layout_variant)

  def get_renderer(self):
    if self.renderer is None:
      self.renderer = RasterRenderer()
    return self.renderer

  def load_logo(self):
    if self.logo_provider is None:
      return None
    return self.logo_provider.load()

  def badge_for(self, participant, base_url=None):
    return Badge(participant, self.config,
                 variant=self.variant,
                 logo=self.load_logo(),
                 renderer=self.get_renderer(),
                 base_url=base_url)

  def render_badge(self, identifier, base_url=None):
    participant = self.roster.find_by_identifier(identifier)
    data = self.badge_for(participant, base_url).png()
    log.debug(f"Rendered badge for {participant.identifier} ({len(data)} bytes)")
    return data

  def confirm_attendance(self, identifier):
    return self.roster.confirm_attendance(identifier).web_info()

  def list_participants(self):
    return [participant.web_info() for participant in self.roster.list_all()]
