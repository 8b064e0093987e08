"""Lifepath CLI Application.

A Textual-based terminal interface for living one Lifepath run:
- Main menu
- Dream card selection
- Life screen with wheel spin, scenario, options, status and life log
- Reflection report
"""

from __future__ import annotations

import logging
from typing import Optional

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, OptionList, Rule, Static
from textual.widgets.option_list import Option

from lifepath.engine.errors import NotFound, RequirementNotMet, RunComplete
from lifepath.engine.game_engine import SimulationEngine, create_engine
from lifepath.models.content import IntroProfile, Scenario
from lifepath.models.state import PlayerSnapshot, ScenarioResult
from lifepath.reflection.report import format_report
from lifepath.storage import ContentRepository, get_content_repository

logger = logging.getLogger(__name__)

STAGE_NAMES = {
    1: "Childhood",
    2: "Youth",
    3: "Early career",
    4: "Midlife",
    5: "Later years",
}


# =============================================================================
# Theme and Styles
# =============================================================================

CSS = """
Screen {
    background: $surface;
}

#main-menu {
    align: center middle;
    width: 100%;
    height: 100%;
}

.menu-container {
    width: 64;
    height: auto;
    border: solid green;
    padding: 1 2;
}

.menu-title {
    text-align: center;
    text-style: bold;
    color: $success;
    margin-bottom: 1;
}

.menu-button {
    width: 100%;
    margin: 1 0;
}

.panel-title {
    text-style: bold;
    color: $secondary;
    margin-bottom: 1;
}

#status-bar {
    dock: top;
    height: 1;
    background: $primary-darken-2;
    color: $text;
    padding: 0 1;
}

#life-content {
    height: 1fr;
}

#scenario-panel {
    width: 100%;
    min-height: 6;
    height: auto;
    max-height: 12;
    border: solid $primary;
    padding: 1 1;
}

#bottom-row {
    height: 1fr;
}

#stats-panel {
    width: 32;
    border: solid $primary;
    padding: 0 1;
}

#options-panel {
    width: 1fr;
    border: solid $primary;
    padding: 0 1;
}

#log-panel {
    width: 1fr;
    border: solid $primary;
    padding: 0 1;
}

#wheel-result {
    color: $warning;
    text-style: bold;
}
"""


# =============================================================================
# Screens
# =============================================================================


class MainMenuScreen(Screen):
    """Main menu screen."""

    BINDINGS = [
        Binding("q", "quit", "Quit"),
    ]

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Container(id="main-menu"):
            with Vertical(classes="menu-container"):
                yield Static("LIFEPATH", classes="menu-title")
                yield Static("One life, one dream", classes="menu-title")
                yield Rule()
                yield Button("New Life", id="new-life", classes="menu-button", variant="success")
                yield Button("Quit", id="quit", classes="menu-button", variant="error")
        yield Footer()

    @on(Button.Pressed, "#new-life")
    def start_new_life(self) -> None:
        self.app.push_screen(DreamSelectScreen())

    @on(Button.Pressed, "#quit")
    def quit_app(self) -> None:
        self.app.exit()


class DreamSelectScreen(Screen):
    """Screen for choosing the run's dream card."""

    BINDINGS = [
        Binding("escape", "go_back", "Back"),
    ]

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="main-menu"):
            with Vertical(classes="menu-container"):
                yield Static("CHOOSE YOUR DREAM", classes="menu-title")
                yield Rule()
                yield OptionList(id="dream-list")
                yield Rule()
                yield Button("Back", id="back", variant="default")
        yield Footer()

    def on_mount(self) -> None:
        """Load dream cards when screen mounts."""
        option_list = self.query_one("#dream-list", OptionList)
        cards = self.app.repo.list_dream_cards()
        for card in cards:
            label = card.label + (f" - {card.subtitle}" if card.subtitle else "")
            option_list.add_option(Option(label, id=card.id))
        if not cards:
            self.notify("No dream cards found in content directory", severity="error")

    @on(OptionList.OptionSelected, "#dream-list")
    def dream_selected(self, event: OptionList.OptionSelected) -> None:
        self.app.push_screen(LifeScreen(str(event.option.id)))

    @on(Button.Pressed, "#back")
    def go_back(self) -> None:
        self.app.pop_screen()

    def action_go_back(self) -> None:
        self.app.pop_screen()


class LifeScreen(Screen):
    """Main screen for playing a run."""

    BINDINGS = [
        Binding("escape", "confirm_quit", "Quit Run"),
        Binding("w", "spin", "Spin Wheel"),
        Binding("1", "choose(0)", "Option A", show=False),
        Binding("2", "choose(1)", "Option B", show=False),
        Binding("3", "choose(2)", "Option C", show=False),
        Binding("4", "choose(3)", "Option D", show=False),
    ]

    def __init__(self, dream_card_id: str) -> None:
        super().__init__()
        self.dream_card_id = dream_card_id
        self.engine: Optional[SimulationEngine] = None
        self.scenario: Optional[Scenario] = None
        self.life_log: list[str] = []
        self._quit_armed = False

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("Turn 1", id="status-bar")

        with Vertical(id="life-content"):
            with VerticalScroll(id="scenario-panel"):
                yield Static("", id="scenario-title", classes="panel-title")
                yield Static("Loading...", id="scenario-text")
                yield Static("", id="wheel-result")

            with Horizontal(id="bottom-row"):
                with Vertical(id="stats-panel"):
                    yield Static("STATUS", classes="panel-title")
                    yield Static("", id="stats-text")
                with Vertical(id="options-panel"):
                    yield Static("OPTIONS (1-4 to choose)", classes="panel-title")
                    yield OptionList(id="option-list")
                    yield Button("Spin the wheel", id="spin", variant="primary")
                with VerticalScroll(id="log-panel"):
                    yield Static("LIFE LOG", classes="panel-title")
                    yield Static("", id="log-text")

        yield Footer()

    def on_mount(self) -> None:
        """Start the run when the screen mounts."""
        try:
            self.engine = create_engine(
                self.dream_card_id,
                repo=self.app.repo,
                profile=self.app.profile,
                total_turns=self.app.total_turns,
                random_seed=self.app.random_seed,
            )
        except NotFound as e:
            self.notify(str(e), severity="error")
            self.app.pop_screen()
            return
        self._advance()

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    def _advance(self) -> None:
        """Draw the next scenario and refresh the display."""
        self.scenario = self.engine.next_scenario()
        if not self.engine.available_options(self.scenario):
            self.notify("Every option is out of reach. Time passes quietly.", severity="warning")
            self.scenario = self.engine.neutral_turn()
        self.query_one("#wheel-result", Static).update("")
        self.update_display()

    def update_display(self) -> None:
        """Update all display elements."""
        if not self.engine or not self.scenario:
            return
        snapshot = self.engine.snapshot()

        turn = self.engine.total_turns - snapshot.turns_remaining + 1
        stage_name = STAGE_NAMES.get(snapshot.stage, f"Stage {snapshot.stage}")
        self.query_one("#status-bar", Static).update(
            f"Turn {turn}/{self.engine.total_turns} | Stage {snapshot.stage}: {stage_name} | "
            f"Dream: {self.engine.dream_card.label}"
        )

        self.query_one("#scenario-title", Static).update(self.scenario.title)
        self.query_one("#scenario-text", Static).update(self.scenario.description)
        self.query_one("#stats-text", Static).update(format_snapshot(snapshot))

        option_list = self.query_one("#option-list", OptionList)
        option_list.clear_options()
        for option in self.scenario.options:
            locked = self.engine.is_option_locked(option)
            label = f"[{option.id}] {option.label}" + (" (locked)" if locked else "")
            option_list.add_option(Option(label, id=option.id, disabled=locked))

        self.query_one("#log-text", Static).update("\n".join(reversed(self.life_log[-30:])))

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    @on(Button.Pressed, "#spin")
    def spin_pressed(self) -> None:
        self.action_spin()

    def action_spin(self) -> None:
        if not self.engine:
            return
        roll = self.engine.spin_wheel()
        self.query_one("#wheel-result", Static).update(f"The wheel lands on {roll}.")

    @on(OptionList.OptionSelected, "#option-list")
    def option_selected(self, event: OptionList.OptionSelected) -> None:
        self.choose_option(str(event.option.id))

    def action_choose(self, index: int) -> None:
        if self.scenario and index < len(self.scenario.options):
            self.choose_option(self.scenario.options[index].id)

    def choose_option(self, option_id: str) -> None:
        """Resolve the current scenario with the given option."""
        if not self.engine or not self.scenario:
            return
        try:
            result = self.engine.resolve_scenario(self.scenario.id, option_id)
        except RequirementNotMet as e:
            self.notify(f"Not available yet: {', '.join(e.unmet)}", severity="warning")
            return
        except RunComplete:
            self.app.push_screen(ReportScreen(self.engine, self.app.profile))
            return

        self.life_log.append(format_log_entry(self.scenario, result))
        self._quit_armed = False

        if self.engine.is_complete():
            logger.info(f"Run finished for dream {self.dream_card_id}")
            self.app.push_screen(ReportScreen(self.engine, self.app.profile))
            return
        self._advance()

    def action_confirm_quit(self) -> None:
        if self._quit_armed:
            self.app.pop_screen()
            return
        self._quit_armed = True
        self.notify("Press Escape again to abandon this life", severity="warning")


class ReportScreen(Screen):
    """Screen showing the life reflection report."""

    BINDINGS = [
        Binding("m", "main_menu", "Main Menu"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, engine: SimulationEngine, profile: Optional[IntroProfile] = None) -> None:
        super().__init__()
        self.engine = engine
        self.report = engine.generate_report(profile)

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll():
            yield Static("LIFE REFLECTION", classes="menu-title")
            yield Rule()
            yield Static(format_report(self.report), id="report-text")
            yield Rule()
            yield Button("Main Menu", id="main-menu-btn", variant="default", classes="menu-button")
            yield Button("Quit", id="quit", variant="error", classes="menu-button")
        yield Footer()

    @on(Button.Pressed, "#main-menu-btn")
    def go_to_main_menu(self) -> None:
        # Pop back to main menu (keep base Screen + MainMenuScreen)
        while len(self.app.screen_stack) > 2:
            self.app.pop_screen()

    @on(Button.Pressed, "#quit")
    def quit_app(self) -> None:
        self.app.exit()

    def action_main_menu(self) -> None:
        self.go_to_main_menu()

    def action_quit(self) -> None:
        self.app.exit()


# =============================================================================
# Formatting helpers
# =============================================================================


def format_snapshot(snapshot: PlayerSnapshot) -> str:
    """Visible player status, one value per line."""
    lines = [f"{key.title():<12} {value:>8g}" for key, value in snapshot.attributes.as_dict().items()]
    lines.append("")
    lines.extend(f"{key.title():<12} {value:>8g}" for key, value in snapshot.life_status.as_dict().items())
    lines.append("")
    lines.append(f"Turns left   {snapshot.turns_remaining:>8}")
    if snapshot.is_haggard:
        lines.append("You look haggard.")
    if snapshot.scandal.value != "none":
        lines.append(f"Scandal: {snapshot.scandal.value}")
    return "\n".join(lines)


def format_log_entry(scenario: Scenario, result: ScenarioResult) -> str:
    """One life-log line for a resolved turn."""
    option = scenario.get_option(result.option_id)
    label = option.label if option else result.option_id
    line = f"{scenario.title}: {label} (consistency {result.reflection.consistency_delta:+d})"
    for note in result.reflection.notes:
        line += f"\n  {note}"
    if result.effect.notes:
        line += f"\n  {result.effect.notes}"
    return line


# =============================================================================
# Main Application
# =============================================================================


class LifepathApp(App):
    """Main Lifepath CLI application."""

    TITLE = "Lifepath"
    SUB_TITLE = "A Turn-Based Life Simulation"
    CSS = CSS

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", show=True, priority=True),
    ]

    def __init__(
        self,
        repo: Optional[ContentRepository] = None,
        total_turns: Optional[int] = None,
        random_seed: Optional[int] = None,
        profile: Optional[IntroProfile] = None,
    ) -> None:
        super().__init__()
        self.repo = repo or get_content_repository()
        self.total_turns = total_turns
        self.random_seed = random_seed
        self.profile = profile

    def on_mount(self) -> None:
        """Show main menu when app starts."""
        self.push_screen(MainMenuScreen())


def main() -> None:
    """Entry point for the CLI application.

    For debugging with Textual devtools:
        1. In one terminal: textual console
        2. In another terminal: textual run --dev src/lifepath/cli/app.py
    """
    app = LifepathApp()
    app.run()


if __name__ == "__main__":
    main()
