import pytest

from model.event_config import EventConfig, DEFAULT_THEME_COLOR, DEFAULT_LEGEND
from util.secrets import Secrets, secret

@pytest.fixture()
def secrets_file(tmp_path, monkeypatch):
  path = tmp_path / "secrets.yaml"
  path.write_text(
    "event_name: Demo Day\n"
    "event_date: 12 Oct 2026\n"
    "theme_color: '#112233'\n"
    "base_url: https://checkin.example.org/\n"
    "layout_variant: compact\n",
    encoding="utf-8",
  )
  monkeypatch.setenv("CHECKIN_SECRETS", str(path))
  Secrets.reset_shared()
  yield path
  Secrets.reset_shared()

def test_from_secrets(secrets_file):
  config = EventConfig.from_secrets()
  assert config.event_name == "Demo Day"
  assert config.event_date == "12 Oct 2026"
  assert config.theme_color == "#112233"
  assert config.base_url == "https://checkin.example.org"
  assert config.layout_variant == "compact"
  assert config.legend_text == DEFAULT_LEGEND

def test_secret_defaults(secrets_file):
  assert secret("roster_sheet_name", "Hoja 1") == "Hoja 1"
  assert secret("roster_sheet_name") is None

def test_missing_secrets_file(tmp_path, monkeypatch):
  monkeypatch.setenv("CHECKIN_SECRETS", str(tmp_path / "nope.yaml"))
  Secrets.reset_shared()
  with pytest.raises(FileNotFoundError):
    Secrets.shared()
  Secrets.reset_shared()

def test_defaults():
  config = EventConfig()
  assert config.theme_color == DEFAULT_THEME_COLOR
  assert config.layout_variant == "classic"
  assert config.base_url is None
  assert config.event_date == ""

def test_config_is_read_only(config):
  with pytest.raises(AttributeError):
    config.event_name = "Other"

def test_replace_makes_a_new_config(config):
  changed = config.replace(event_date="")
  assert changed.event_date == ""
  assert config.event_date == "12 Oct 2026"
  assert changed.event_name == config.event_name

@pytest.mark.parametrize("color", ["blue", "#12345", "#gggggg", "0b57d0"])
def test_bad_colors_rejected(color):
  with pytest.raises(ValueError):
    EventConfig(theme_color=color)

def test_unknown_variant_rejected():
  with pytest.raises(ValueError):
    EventConfig(layout_variant="poster")
