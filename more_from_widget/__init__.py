"""Related-posts ("More From") block for a host publishing platform."""

__version__ = "1.0.0"

from .config import WidgetSettings  # noqa: E402
from .startup import bootstrap  # noqa: E402
from .widget import MoreFromWidget  # noqa: E402

__all__ = ["__version__", "MoreFromWidget", "WidgetSettings", "bootstrap"]
