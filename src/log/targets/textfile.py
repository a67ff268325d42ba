import os
import json
import threading
import traceback
from ..log_target import LogTarget

class Textfile(LogTarget):
  """Appends records to a file. Each record goes out in one write so that
  request threads never interleave their lines."""

  def __init__(self, path):
    super().__init__()
    self.path = path
    self.lock = threading.Lock()

    dirpath = os.path.dirname(path)
    if dirpath:
      os.makedirs(dirpath, exist_ok=True)
    self.file = open(path, 'a', encoding='utf-8')

  def format(self, info):
    lines = [f"[{info['severity_str']}] {info['run_id']} {info['timestamp_str']} {info['src_reference_short']}: {info['msg']}"]

    exc = info["exception"]
    if exc is not None:
      lines.append(f"Exception {exc.__class__.__name__}: {exc}")
      lines.append(''.join(traceback.format_tb(exc.__traceback__)).rstrip("\n"))

    if info["data"] is not None:
      lines.append(json.dumps(info["data"], indent=2, default=str))

    return "\n".join(line for line in lines if line) + "\n"

  def log_msg(self, info):
    record = self.format(info)
    with self.lock:
      self.file.write(record)
      self.file.flush()
