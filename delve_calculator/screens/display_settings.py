"""Reward display settings screen."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, ScrollableContainer
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Label, Rule, Select, Static

from delve_calculator.models import RewardDisplayMode

MODE_OPTIONS = [
    ("Show", RewardDisplayMode.SHOW),
    ("Grey", RewardDisplayMode.GREY),
    ("Hide", RewardDisplayMode.HIDE),
]


class DisplaySettingsScreen(Screen):
    """Screen for choosing how each reward is displayed.

    'Grey' and 'Hide' also leave the reward out of the 'Any Unique' row.
    """

    CSS = """
    DisplaySettingsScreen {
        layout: vertical;
    }

    #settings-container {
        padding: 1 2;
        height: auto;
    }

    #title {
        text-align: center;
        text-style: bold;
        color: $accent;
        padding: 1;
    }

    .config-row {
        height: 3;
        margin-bottom: 1;
    }

    .config-label {
        width: 30;
        content-align: left middle;
    }

    .config-select {
        width: 20;
    }

    #save-button {
        margin-top: 2;
        width: 100%;
    }
    """

    BINDINGS = [
        Binding("escape", "back", "Back"),
        Binding("enter", "save", "Save"),
    ]

    def compose(self) -> ComposeResult:
        settings = self.app.tracker.settings
        yield Header()

        with ScrollableContainer(id="settings-container"):
            yield Static("Reward Display", id="title")
            yield Static("(Grey or Hide excludes a reward from the 'Any Unique' calculation)")
            yield Rule()

            for item in self.app.tracker.table.items:
                with Horizontal(classes="config-row"):
                    yield Label(f"{item.label}:", classes="config-label")
                    yield Select(
                        MODE_OPTIONS,
                        value=settings.display_mode(item.item_id),
                        allow_blank=False,
                        id=f"display-{item.item_id}",
                        classes="config-select",
                    )

            yield Rule()

            yield Button("Save & Return", id="save-button", variant="success")

        yield Footer()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button press."""
        if event.button.id == "save-button":
            self._save_modes()

    def action_save(self) -> None:
        """Save display modes and return."""
        self._save_modes()

    def action_back(self) -> None:
        """Return without saving."""
        self.app.pop_screen()

    def _save_modes(self) -> None:
        """Save display modes to the settings file and return."""
        settings = self.app.tracker.settings
        for item in self.app.tracker.table.items:
            value = self.query_one(f"#display-{item.item_id}", Select).value
            if isinstance(value, RewardDisplayMode):
                settings.display_modes[item.item_id] = value
        if settings.save():
            self.notify("Display settings saved", timeout=1)
        else:
            self.notify("Could not write settings file", severity="error")
        self.app.pop_screen()
