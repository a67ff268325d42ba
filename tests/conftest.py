# Shared pytest fixtures
import io
import os

# keep the suite from writing checkin.log into the working directory
os.environ["CHECKIN_LOG_FILE"] = ""

import pytest
from PIL import Image

from artifacts.badges.fonts import FontSet
from artifacts.badges.raster import RasterRenderer
from datasources.roster_store import MemoryRosterStore
from model.event_config import EventConfig
from model.roster import Roster

@pytest.fixture()
def roster_rows():
  return [
    ["id", "nombre", "asistencia"],
    ["42", "Ada Lovelace", ""],
  ]

@pytest.fixture()
def store(roster_rows):
  return MemoryRosterStore(roster_rows)

@pytest.fixture()
def roster(store):
  return Roster(store)

@pytest.fixture()
def config():
  return EventConfig(
    event_name="Demo Day",
    event_date="12 Oct 2026",
    footer_text="Evento exclusivo para miembros",
    base_url="https://checkin.example.org",
  )

@pytest.fixture(scope="session")
def fonts():
  # Pillow's bundled font keeps rendering independent of the host's fonts
  return FontSet()

@pytest.fixture()
def renderer(fonts):
  return RasterRenderer(fonts)

def png_bytes(image):
  buffer = io.BytesIO()
  image.save(buffer, format="PNG")
  return buffer.getvalue()

@pytest.fixture()
def red_logo_png():
  return png_bytes(Image.new("RGBA", (400, 200), (255, 0, 0, 255)))

@pytest.fixture()
def square_logo_png():
  return png_bytes(Image.new("RGBA", (300, 300), (255, 0, 0, 255)))
