from artifacts.badges.fonts import FontSet
from artifacts.badges.logo import LogoProvider
from artifacts.badges.raster import RasterRenderer
from datasources.roster_store import MemoryRosterStore
from datasources.sheets.roster_sheet import SheetRosterStore
from model.checkin_desk import CheckinDesk
from model.event_config import EventConfig
from model.roster import Roster
from util.secrets import secret
from log.logger import log

def build_store(roster_csv=None):
  if roster_csv:
    log.notice(f"Using local roster {roster_csv}; attendance marks will not be saved")
    return MemoryRosterStore.from_csv(roster_csv)
  return SheetRosterStore.from_secrets()

def build_fonts():
  return FontSet.discover(secret("font_path", None), secret("font_bold_path", None))

def build_desk(roster_csv=None):
  config = EventConfig.from_secrets()
  log.info(f"Event '{config.event_name}' ({config.event_date or 'no date'}), layout {config.layout_variant}")

  logo_dir = secret("logo_dir", "public")
  return CheckinDesk(
    Roster(build_store(roster_csv)),
    config,
    logo_provider=LogoProvider(logo_dir),
    renderer=RasterRenderer(build_fonts(), upscale_logo=bool(secret("upscale_logo", False))),
  )
