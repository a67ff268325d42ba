import json
import traceback
import requests
import socket

from ..log_target import LogTarget

class Discord(LogTarget):
  """Posts log lines to a Discord webhook. Meant for warn and above so the check-in staff hear about store outages."""

  def __init__(self, webhook_url, timeout=5):
    super().__init__()
    self.webhook_url = webhook_url
    self.timeout = timeout
    self.hostname = socket.gethostname()

  def log_msg(self, info):
    from ..logger import Logger

    if not self.webhook_url:
      return None

    if info["severity"] >= Logger.NOTICE:
      emphasis = "**"
    else:
      emphasis = ""

    msg = "-# %s[%s] %s@%s %s `%s`%s\n%s%s%s" % (
      emphasis,
      info["severity_str_short"],
      info["run_id"],
      self.hostname,
      info["timestamp_str"],
      info["src_reference_short"],
      emphasis,
      emphasis,
      info["msg"],
      emphasis)
    if info["exception"] is not None:
      exc = info["exception"]
      msg += f"\n### __***Exception***__ `{exc.__class__.__name__}`: `{str(exc)}`\n"
      msg += "```" + ''.join(traceback.format_tb(exc.__traceback__)) + "```"

    if info["data"] is not None:
      msg += json.dumps(info["data"], indent=2, default=str)

    self.send_discord_message(msg)

  def send_discord_message(self, msg):
    try:
      requests.post(self.webhook_url, json={"content": msg[0:2000]}, timeout=self.timeout).raise_for_status()
    except requests.RequestException:
      # logging a failed log post would loop straight back here
      pass
