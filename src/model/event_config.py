import re

DEFAULT_THEME_COLOR = "#0b57d0"
DEFAULT_THEME_COLOR_END = "#174ea6"
DEFAULT_LEGEND = "ESCANEA EL QR PARA REGISTRAR TU ASISTENCIA"
DEFAULT_FOOTER = "Evento exclusivo para miembros"
DEFAULT_VARIANT = "classic"

HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")

class EventConfig:
  """Event branding and addressing, loaded once at startup and handed to whoever needs it. Read-only after construction."""

  FIELDS = ("event_name", "event_date", "theme_color", "theme_color_end", "legend_text", "footer_text", "base_url", "layout_variant")

  def __init__(self, event_name="", event_date="", theme_color=None, theme_color_end=None,
               legend_text=None, footer_text=None, base_url=None, layout_variant=None):
    values = {
      "event_name": str(event_name or "").strip(),
      "event_date": str(event_date or "").strip(),
      "theme_color": theme_color or DEFAULT_THEME_COLOR,
      "theme_color_end": theme_color_end or DEFAULT_THEME_COLOR_END,
      "legend_text": DEFAULT_LEGEND if legend_text is None else str(legend_text),
      "footer_text": DEFAULT_FOOTER if footer_text is None else str(footer_text),
      "base_url": str(base_url).rstrip("/") if base_url else None,
      "layout_variant": layout_variant or DEFAULT_VARIANT,
    }

    for key in ("theme_color", "theme_color_end"):
      if not HEX_COLOR.match(str(values[key])):
        raise ValueError(f"{key} must look like #rrggbb, got {values[key]!r}")

    from artifacts.badges.layout import VARIANTS
    if values["layout_variant"] not in VARIANTS:
      raise ValueError(f"Unknown layout variant {values['layout_variant']!r}; expected one of {sorted(VARIANTS)}")

    for key, value in values.items():
      object.__setattr__(self, key, value)

  def __setattr__(self, key, value):
    raise AttributeError(f"EventConfig is read-only; cannot set {key}")

  @classmethod
  def from_secrets(cls):
    from util.secrets import secret
    return cls(
      event_name=secret("event_name", ""),
      event_date=secret("event_date", ""),
      theme_color=secret("theme_color", None),
      theme_color_end=secret("theme_color_end", None),
      legend_text=secret("legend_text", None),
      footer_text=secret("footer_text", None),
      base_url=secret("base_url", None),
      layout_variant=secret("layout_variant", None),
    )

  def replace(self, **changes):
    values = {key: getattr(self, key) for key in self.FIELDS}
    values.update(changes)
    return EventConfig(**values)

  def __repr__(self):
    return "EventConfig(%s)" % ", ".join(f"{key}={getattr(self, key)!r}" for key in self.FIELDS)
