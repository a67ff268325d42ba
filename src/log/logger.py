import inspect
import os
import random
from datetime import datetime

from .targets.textfile import Textfile
from .targets.console import Console
from .targets.discord import Discord

class Logger:
  TRACE    = 0
  DEBUG    = 1
  INFO     = 2
  NOTICE   = 3
  WARN     = 4
  ERROR    = 5
  FATAL    = 6

  SEVERITY_NAMES = {
    TRACE:    "TRACE",
    DEBUG:    "DEBUG",
    INFO:     "INFO",
    NOTICE:   "NOTICE",
    WARN:     "WARN",
    ERROR:    "ERROR",
    FATAL:    "FATAL",
  }

  _default = None

  @classmethod
  def default(cls):
    if cls._default is None:
      cls._default = cls()
    return cls._default

  def __init__(self):
    self.targets = []

  def add_target(self, target):
    self.targets.append(target)
    return target

  def caller(self):
    # walk up the stack until we leave this file
    frame = inspect.currentframe()
    try:
      while frame:
        frame = frame.f_back
        if not frame:
          break

        code = frame.f_code
        if code.co_filename == __file__:
          continue

        filename = os.path.basename(code.co_filename)
        return f"{filename}:{frame.f_lineno}"

      return "unknown:0"
    finally:
      del frame

  def logmsg(self, msg, severity=DEBUG, data=None, exception=None):
    timestamp = datetime.now()
    src_reference = self.caller()

    for target in self.targets:
      target.log(timestamp, run_id, src_reference, severity, msg, data, exception)

  def trace(self, msg, data=None, exception=None):
    return self.logmsg(msg, self.TRACE, data, exception)

  def debug(self, msg, data=None, exception=None):
    return self.logmsg(msg, self.DEBUG, data, exception)

  def info(self, msg, data=None, exception=None):
    return self.logmsg(msg, self.INFO, data, exception)

  def notice(self, msg, data=None, exception=None):
    return self.logmsg(msg, self.NOTICE, data, exception)

  def warn(self, msg, data=None, exception=None):
    return self.logmsg(msg, self.WARN, data, exception)

  def error(self, msg, data=None, exception=None):
    return self.logmsg(msg, self.ERROR, data, exception)

  def fatal(self, msg, data=None, exception=None):
    return self.logmsg(msg, self.FATAL, data, exception)

def setup_default_logger():
  default = Logger.default()
  if getattr(default, '_setup_done', False):
    return default

  default.add_target(Console())

  # CHECKIN_LOG_FILE="" turns the text file off (the test suite does this)
  log_path = os.environ.get("CHECKIN_LOG_FILE", "checkin.log")
  if log_path:
    default.add_target(Textfile(log_path))

  webhook = os.environ.get("DISCORD_LOG_WEBHOOK")
  if webhook:
    default.add_target(Discord(webhook).set_severity(Logger.WARN))

  default._setup_done = True
  return default

log = Logger.default()
run_id = f"{random.randint(0, 0xFFFFFFFF):08x}"
setup_default_logger()
