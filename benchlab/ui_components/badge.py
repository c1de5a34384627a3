from textual.widgets import Static


class Badge(Static):
    """Small coloured pill for complexity levels and HTTP status lines."""

    DEFAULT_CSS = """
    Badge {
        width: auto;
        height: 1;
        padding: 0 1;
        margin-left: 1;
        background: #2b344a;
        color: #dfe4ee;
        text-style: bold;
    }

    Badge.tone-success, Badge.tone-low { background: #1f6f4a; color: #eafff3; }
    Badge.tone-medium { background: #8a6a12; color: #fff8e1; }
    Badge.tone-danger, Badge.tone-high { background: #8c2b33; color: #ffecee; }
    """

    def __init__(self, text: str = "", *, tone: str = "neutral", **kwargs) -> None:
        super().__init__(text, markup=False, **kwargs)
        self.set_tone(tone)
        self.display = bool(text)

    def set_tone(self, tone: str) -> None:
        self.remove_class(*(name for name in self.classes if name.startswith("tone-")))
        self.add_class(f"tone-{tone}")

    def show(self, text: str | None, tone: str = "neutral") -> None:
        self.update(text or "")
        self.set_tone(tone)
        self.display = bool(text)
