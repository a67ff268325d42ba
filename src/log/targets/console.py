import json
import traceback
import os
import sys
from ..log_target import LogTarget

# ANSI colour codes
RED        = "\033[31m"
GREEN      = "\033[32m"
YELLOW     = "\033[33m"
BLUE       = "\033[34m"
MAGENTA    = "\033[35m"
CYAN       = "\033[36m"
LIGHT_GRAY = "\033[90m"
DARK_GRAY  = "\033[2m"
RESET      = "\033[0m"

SEVERITY_COLORS = {
  "FATAL":    MAGENTA,
  "ERROR":    RED,
  "WARN":     YELLOW,
  "NOTICE":   GREEN,
  "INFO":     None,
  "DEBUG":    LIGHT_GRAY,
  "TRACE":    DARK_GRAY,
}

COLOR_TERMS = ["xterm-256color", "xterm-color", "xterm", "screen", "screen-256color", "screen-color", "xterm-kitty"]

class Console(LogTarget):
  def __init__(self, stream=None):
    super().__init__()
    self.stream = stream

  def color_enabled(self):
    stream = self.stream or sys.stdout
    color_not_banned = os.environ.get("NO_COLOR") is None
    color_supported_by_term = os.environ.get("TERM") in COLOR_TERMS
    return color_not_banned and color_supported_by_term and stream.isatty()

  def log_msg(self, info):
    stream = self.stream or sys.stdout
    severity_str = info["severity_str_short"]
    timestamp_str = info["timestamp_str"]
    src_reference = info["src_reference_short"]
    run_id = info["run_id"]
    msg = info["msg"]

    color_enabled = self.color_enabled()
    if color_enabled:
      timestamp_str = f"{CYAN}{timestamp_str}{RESET}"
      src_reference = f"{GREEN}{src_reference}{RESET}"
      run_id = f"{YELLOW}{run_id}{RESET}"

      color = SEVERITY_COLORS[info["severity_str"]]
      if color:
        severity_str = f"{color}{severity_str}{RESET}"
        msg = f"{color}{msg}{RESET}"

    print("[%s] %s %s %30s -- %s" % (severity_str, run_id, timestamp_str, src_reference, msg), file=stream)

    if info["exception"] is not None:
      exc = info["exception"]
      line = f"Exception {exc.__class__.__name__}: {str(exc)}"
      print(f"{RED}{line}{RESET}" if color_enabled else line, file=stream)
      print(''.join(traceback.format_tb(exc.__traceback__)), file=stream)

    if info["data"] is not None:
      dumped = json.dumps(info["data"], indent=2, default=str)
      print(f"{BLUE}{dumped}{RESET}" if color_enabled else dumped, file=stream)
