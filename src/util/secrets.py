import yaml
import os
from log.logger import log

PLACEHOLDER = "___placeholder___"

class Secrets:
  """Reads deployment settings from secrets.yaml (kept out of the repository). Set CHECKIN_SECRETS to point somewhere else."""

  @classmethod
  def shared(cls):
    if not hasattr(cls, "_shared"):
      cls._shared = Secrets()
    return cls._shared

  @classmethod
  def reset_shared(cls):
    if hasattr(cls, "_shared"):
      del cls._shared

  def __init__(self, path=None):
    self.path = path or os.environ.get("CHECKIN_SECRETS", "secrets.yaml")
    self.load()

  def load(self):
    if not os.path.exists(self.path):
      raise FileNotFoundError(f"Cannot find secrets file at {self.path}")

    with open(self.path, "r") as f:
      self.secrets = yaml.safe_load(f) or {}

    if not isinstance(self.secrets, dict):
      raise ValueError(f"Secrets file {self.path} must contain a mapping, not {type(self.secrets).__name__}")

  def get(self, key, default_value=PLACEHOLDER):
    if key not in self.secrets:
      if default_value != PLACEHOLDER:
        log.debug(f"No such key in secrets: {key} (falling back on supplied default)")
        return default_value
      else:
        log.warn(f"No such key in secrets: {key} (no default supplied; falling back on None)")
        return None
    return self.secrets[key]

  def set(self, key, value):
    self.secrets[key] = value
    return self.secrets[key]

def secret(key, default_value=PLACEHOLDER):
  return Secrets.shared().get(key, default_value)

def override_secret(key, value):
  return Secrets.shared().set(key, value)
