from textual.widgets import Button


class SmallButton(Button):
    """Compact action button that can swap its label while a run is pending."""

    DEFAULT_CSS = """
    SmallButton {
        height: 3;
        min-height: 3;
        min-width: 12;
        padding: 0 2;
        border: tall #3a4660;
        background: #1b2335;
        color: #f4f6fb;
        text-style: bold;
        content-align: center middle;
    }

    SmallButton:hover, SmallButton:focus {
        border: tall #f2a541;
    }

    SmallButton.btn-primary {
        background: #f2a541;
        border: tall #f2a541;
        color: #12161f;
    }

    SmallButton.btn-primary:hover {
        background: #f6bc6d;
        border: tall #f6bc6d;
    }

    SmallButton.btn-ghost {
        background: #232c40;
        color: #dfe4ee;
    }

    SmallButton:disabled {
        opacity: 60%;
    }
    """

    VARIANTS = ("primary", "ghost")

    def __init__(self, label: str, *, variant: str = "default", busy_label: str | None = None, **kwargs) -> None:
        super().__init__(label, **kwargs)
        self._idle_label = label
        self._busy_label = busy_label
        self.set_variant(variant)

    def set_variant(self, variant: str) -> None:
        self.remove_class(*(f"btn-{name}" for name in self.VARIANTS))
        if variant in self.VARIANTS:
            self.add_class(f"btn-{variant}")

    def set_busy(self, busy: bool) -> None:
        self.disabled = busy
        if self._busy_label:
            self.label = self._busy_label if busy else self._idle_label
