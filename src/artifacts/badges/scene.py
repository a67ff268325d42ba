import math

def centered_left(total, size):
  """Left offset that centres size inside total, rounding halves up to a whole pixel."""
  return int(math.floor((total - size) / 2.0 + 0.5))

class Shadow:
  def __init__(self, dx=0, dy=16, blur=22, color="#000000", opacity=0.16):
    self.dx = dx
    self.dy = dy
    self.blur = blur
    self.color = color
    self.opacity = opacity

  def __repr__(self):
    return f"Shadow(dx={self.dx}, dy={self.dy}, blur={self.blur}, color={self.color!r}, opacity={self.opacity})"

class Primitive:
  def __init__(self, name):
    self.name = name

  def __repr__(self):
    fields = ", ".join(f"{key}={value!r}" for key, value in vars(self).items() if key != "name")
    return f"{self.__class__.__name__}({self.name!r}, {fields})"

class BoxPrimitive(Primitive):
  def __init__(self, name, x, y, width, height):
    super().__init__(name)
    self.x = x
    self.y = y
    self.width = width
    self.height = height

  @property
  def top(self):
    return self.y

  @property
  def bottom(self):
    return self.y + self.height

  @property
  def left(self):
    return self.x

  @property
  def right(self):
    return self.x + self.width

class Rect(BoxPrimitive):
  """Filled rectangle. square_edge ("top" or "bottom") keeps that edge's corners square when radius > 0."""

  def __init__(self, name, x, y, width, height, fill, radius=0, square_edge=None, shadow=None):
    super().__init__(name, x, y, width, height)
    self.fill = fill
    self.radius = radius
    self.square_edge = square_edge
    self.shadow = shadow

class GradientRect(Rect):
  """Left-to-right two-stop gradient."""

  def __init__(self, name, x, y, width, height, start_color, end_color, radius=0, square_edge=None):
    super().__init__(name, x, y, width, height, start_color, radius, square_edge)
    self.start_color = start_color
    self.end_color = end_color

class Polygon(Primitive):
  def __init__(self, name, points, fill, opacity=1.0):
    super().__init__(name)
    self.points = [tuple(point) for point in points]
    self.fill = fill
    self.opacity = opacity

  @property
  def top(self):
    return min(y for _, y in self.points)

  @property
  def bottom(self):
    return max(y for _, y in self.points)

class Text(Primitive):
  """A line of text centred on x with its baseline at baseline. Renderers shrink
  the size (not below min_size) to stay inside max_width, then truncate."""

  def __init__(self, name, text, x, baseline, size, color, bold=True, max_width=None, min_size=None):
    super().__init__(name)
    self.text = text
    self.x = x
    self.baseline = baseline
    self.size = size
    self.color = color
    self.bold = bold
    self.max_width = max_width
    self.min_size = min_size if min_size is not None else max(8, size // 2)

class ImageSlot(BoxPrimitive):
  """Where a raster (kind "qr" or "logo") is placed. Logos are fitted inside and centred."""

  def __init__(self, name, kind, x, y, width, height, circular=False):
    super().__init__(name, x, y, width, height)
    self.kind = kind
    self.circular = circular

class BadgeScene:
  """Renderer-agnostic description of one badge: canvas size, background and an ordered primitive list (painted first to last)."""

  def __init__(self, width, height, background):
    self.width = width
    self.height = height
    self.background = background
    self.primitives = []

  def add(self, primitive):
    if self.find(primitive.name) is not None:
      raise ValueError(f"Scene already has a primitive named {primitive.name!r}")
    self.primitives.append(primitive)
    return primitive

  def find(self, name):
    for primitive in self.primitives:
      if primitive.name == name:
        return primitive
    return None

  def __getitem__(self, name):
    primitive = self.find(name)
    if primitive is None:
      raise KeyError(name)
    return primitive

  def __contains__(self, name):
    return self.find(name) is not None

  def names(self):
    return [primitive.name for primitive in self.primitives]

  def slot(self, kind):
    for primitive in self.primitives:
      if isinstance(primitive, ImageSlot) and primitive.kind == kind:
        return primitive
    return None

  def texts(self):
    return [primitive for primitive in self.primitives if isinstance(primitive, Text)]
