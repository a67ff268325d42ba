import subprocess
from importlib import metadata
from pathlib import Path

DISTRIBUTION = "checkin-desk"
# used when running straight from a source checkout
SOURCE_VERSION = "1.0.0"

# src/util/version.py -> project root
PROJECT_DIR = Path(__file__).resolve().parent.parent.parent

class Version:
  def version(self):
    try:
      return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
      return SOURCE_VERSION

  def git_revision(self):
    if not (PROJECT_DIR / ".git").exists():
      return None

    try:
      return subprocess.check_output(
        ["git", "describe", "--always", "--dirty=*"],
        cwd=PROJECT_DIR,
        stderr=subprocess.DEVNULL,
      ).decode('utf-8').strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
      return None

  def hash(self):
    return {"version": self.version(), "git": self.git_revision()}
