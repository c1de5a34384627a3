from .badge import Badge
from .buttons import SmallButton

__all__ = ["Badge", "SmallButton"]
