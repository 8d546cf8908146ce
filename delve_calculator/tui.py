"""TUI for the Delve calculator using Textual."""
from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, ScrollableContainer
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Label, ProgressBar, Rule, Static
from rich.text import Text

from .config import DEFAULT_GAME_MODE
from .logger import setup_logger
from .models import FLOOR_MAX, FLOOR_MIN, OVERFLOW_FLOOR, RewardDisplayMode, StatMode, View
from .screens import DisplaySettingsScreen
from .settings import TrackerSettings
from .tracker import DelveTracker
from .utils import floor_label, format_count, format_luck, luck_bar


class TrackerScreen(Screen):
    """Kill counts plus expected drops or luck for the selected view."""

    CSS = """
    TrackerScreen {
        layout: vertical;
    }

    #tracker-container {
        padding: 1 2;
        height: auto;
    }

    #title {
        text-align: center;
        text-style: bold;
        color: $accent;
    }

    .section-title {
        text-style: bold;
        color: $primary;
        margin-top: 1;
    }

    .tab-row {
        height: 3;
    }

    .tab-row Button {
        margin-right: 1;
    }

    .item-row {
        height: 1;
        margin-bottom: 1;
    }

    .item-label {
        width: 18;
    }

    .item-value {
        width: 12;
        content-align: right middle;
    }

    .greyed {
        color: $text-muted;
    }

    #luck-table {
        height: auto;
    }

    .drop-row {
        height: 3;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("v", "cycle_view", "View"),
        Binding("t", "toggle_mode", "Expected/Luck"),
        Binding("d", "display_settings", "Display"),
        Binding("r", "reset_manual", "Reset manual"),
        Binding("1", "record_floor(1)", "Floor 1", show=False),
        Binding("2", "record_floor(2)", "Floor 2", show=False),
        Binding("3", "record_floor(3)", "Floor 3", show=False),
        Binding("4", "record_floor(4)", "Floor 4", show=False),
        Binding("5", "record_floor(5)", "Floor 5", show=False),
        Binding("6", "record_floor(6)", "Floor 6", show=False),
        Binding("7", "record_floor(7)", "Floor 7", show=False),
        Binding("8", "record_floor(8)", "Floor 8", show=False),
        Binding("plus", "record_floor(9)", "Floor 8+", show=False),
    ]

    def compose(self) -> ComposeResult:
        tracker = self.app.tracker
        yield Header()

        with ScrollableContainer(id="tracker-container"):
            yield Static("", id="title")

            with Horizontal(classes="tab-row"):
                for view in View:
                    yield Button(view.name.title(), id=f"view-{view.value}")
                for mode in StatMode:
                    yield Button(mode.name.title(), id=f"mode-{mode.value}")

            yield Rule()
            yield Static("Kill Counts", classes="section-title")
            yield Static("", id="kills")
            yield Static("(keys 1-8 and + record a completed floor)")

            yield Rule()
            yield Static("", id="stats-title", classes="section-title")
            for item in tracker.table.items:
                with Horizontal(classes="item-row", id=f"row-{item.item_id}"):
                    yield Label(item.label, classes="item-label")
                    yield ProgressBar(total=100, show_eta=False, id=f"bar-{item.item_id}")
                    yield Static("0", id=f"value-{item.item_id}", classes="item-value")
            with Horizontal(classes="item-row", id="row-any"):
                yield Label("Any Unique", classes="item-label")
                yield ProgressBar(total=100, show_eta=False, id="bar-any")
                yield Static("0", id="value-any", classes="item-value")
            yield Static("", id="luck-table")

            yield Rule()
            yield Static("Record Drop", classes="section-title")
            with Horizontal(classes="drop-row"):
                for item in tracker.table.items:
                    yield Button(item.label, id=f"drop-{item.item_id}", variant="primary")
            yield Button("Reset Manual", id="reset-manual-button", variant="error")

        yield Footer()

    def on_mount(self) -> None:
        self.refresh_stats()

    def on_screen_resume(self) -> None:
        self.refresh_stats()

    def refresh_stats(self) -> None:
        """Redraw everything from the tracker."""
        app = self.app
        settings = app.tracker.settings
        profile = app.tracker.get_profile(app.game_mode, settings.active_view)

        self.query_one("#title", Static).update(f"Delve Calculator: {app.game_mode} ({profile.name})")
        for view in View:
            self.query_one(f"#view-{view.value}", Button).variant = (
                "success" if view is settings.active_view else "default"
            )
        for mode in StatMode:
            self.query_one(f"#mode-{mode.value}", Button).variant = (
                "success" if mode is settings.active_mode else "default"
            )

        floors = list(range(FLOOR_MIN, FLOOR_MAX + 1)) + [OVERFLOW_FLOOR]
        kills = "  ".join(f"{floor_label(f)}: {profile.kills_for_floor(f)}" for f in floors)
        self.query_one("#kills", Static).update(f"Total: {format_count(profile.total_kills())}\n{kills}")

        luck_mode = settings.active_mode is StatMode.LUCK
        self.query_one("#stats-title", Static).update("Luck" if luck_mode else "Expected Drops")
        self.query_one("#luck-table", Static).display = luck_mode
        if luck_mode:
            self._show_luck(profile)
        else:
            self._show_expected(profile)

    def _show_expected(self, profile) -> None:
        settings = self.app.tracker.settings
        for progress in self.app.tracker.get_progress(profile):
            suffix = "any" if progress.item_id is None else str(progress.item_id)
            row = self.query_one(f"#row-{suffix}", Horizontal)
            mode = RewardDisplayMode.SHOW if progress.item_id is None else settings.display_mode(progress.item_id)
            row.display = mode is not RewardDisplayMode.HIDE
            row.set_class(mode is RewardDisplayMode.GREY, "greyed")
            self.query_one(f"#bar-{suffix}", ProgressBar).update(progress=progress.percent)
            self.query_one(f"#value-{suffix}", Static).update(f"{progress.whole} ({progress.expected:.2f})")

    def _show_luck(self, profile) -> None:
        settings = self.app.tracker.settings
        for item in self.app.tracker.table.items:
            self.query_one(f"#row-{item.item_id}", Horizontal).display = False
        self.query_one("#row-any", Horizontal).display = False

        report = self.app.tracker.get_luck(profile)
        text = Text()
        for row in list(report.items) + [report.any_unique]:
            mode = RewardDisplayMode.SHOW if row.item_id is None else settings.display_mode(row.item_id)
            if mode is RewardDisplayMode.HIDE:
                continue
            if mode is RewardDisplayMode.GREY:
                style = "dim"
            else:
                style = "green" if row.luck >= 0 else "red"
            text.append(f"{row.label:<18}", style="dim" if mode is RewardDisplayMode.GREY else "")
            text.append(f"{format_luck(row.luck):>7} ", style=style)
            text.append(f"[{luck_bar(row.normalized)}]\n", style=style)
        text.append(f"Scale: ±{report.scale:.2f}", style="dim")
        self.query_one("#luck-table", Static).update(text)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id.startswith("view-"):
            self._set_view(View(button_id[len("view-"):]))
        elif button_id.startswith("mode-"):
            self._set_mode(StatMode(button_id[len("mode-"):]))
        elif button_id.startswith("drop-"):
            item_id = int(button_id[len("drop-"):])
            self.app.tracker.on_drop_obtained(self.app.game_mode, item_id)
            self.refresh_stats()
        elif button_id == "reset-manual-button":
            self.action_reset_manual()

    def _set_view(self, view: View) -> None:
        self.app.tracker.settings.active_view = view
        self.app.tracker.settings.save()
        self.refresh_stats()

    def _set_mode(self, mode: StatMode) -> None:
        self.app.tracker.settings.active_mode = mode
        self.app.tracker.settings.save()
        self.refresh_stats()

    def action_cycle_view(self) -> None:
        views = list(View)
        current = views.index(self.app.tracker.settings.active_view)
        self._set_view(views[(current + 1) % len(views)])

    def action_toggle_mode(self) -> None:
        current = self.app.tracker.settings.active_mode
        self._set_mode(StatMode.LUCK if current is StatMode.EXPECTED else StatMode.EXPECTED)

    def action_record_floor(self, floor: int) -> None:
        if self.app.tracker.on_floor_completed(self.app.game_mode, floor):
            self.notify(f"Floor {floor_label(floor)} recorded", timeout=1)
        self.refresh_stats()

    def action_reset_manual(self) -> None:
        self.app.tracker.reset_manual(self.app.game_mode)
        self.notify("Manual profile reset", timeout=1)
        self.refresh_stats()

    def action_display_settings(self) -> None:
        self.app.push_screen(DisplaySettingsScreen())

    def action_quit(self) -> None:
        self.app.exit()


class DelveCalculatorApp(App):
    """Main TUI application."""

    TITLE = "Delve Calculator"
    CSS = """
    Screen {
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(self, tracker: DelveTracker, game_mode: str = DEFAULT_GAME_MODE):
        super().__init__()
        self.tracker = tracker
        self.game_mode = game_mode

    def on_mount(self) -> None:
        self.push_screen(TrackerScreen())


def main(game_mode: Optional[str] = None):
    """Entry point for the TUI."""
    settings = TrackerSettings.load()
    setup_logger(settings.log_level, log_file=settings.log_path, console=False)
    app = DelveCalculatorApp(DelveTracker.open(settings), game_mode or DEFAULT_GAME_MODE)
    app.run()


if __name__ == "__main__":
    main()
