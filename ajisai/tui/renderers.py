from pathlib import Path

from rich.console import Console

from ajisai.config.models import Config
from ajisai.engine import ApplyResult
from ajisai.tui.enums import UIStyle
from ajisai.tui.sections import UISection
from ajisai.tui.tables import ApplyTable, DoctorTable
from ajisai.utils import compact_home_path, compact_home_paths_in_text


class AjisaiConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_apply_result(self, result: ApplyResult) -> None:
        if result.outcomes:
            self.console.print(
                UISection.wrap(
                    "exports",
                    ApplyTable.outcomes_table(result.outcomes),
                    style=UIStyle.CYAN.value,
                )
            )
        self.console.print(
            ApplyTable.stats_panel(
                written=result.written,
                failed=result.failed,
                skipped=len(result.skipped),
            )
        )
        if result.skipped:
            skipped_text = "\n".join([f"- {item}" for item in result.skipped])
            self.console.print(
                UISection.note("skipped", skipped_text, style=UIStyle.YELLOW.value)
            )
        if result.failures:
            failure_text = "\n".join(
                [f"- {compact_home_paths_in_text(item)}" for item in result.failures]
            )
            self.console.print(
                UISection.note("failures", failure_text, style=UIStyle.RED.value)
            )

    def render_cache_cleaned(self, removed: list[Path]) -> None:
        if not removed:
            self.console.print(
                UISection.note("cache", "Nothing to remove.", style=UIStyle.DIM.value)
            )
            return
        body = "\n".join([f"- {compact_home_path(path)}" for path in removed])
        self.console.print(UISection.note("cache", body, style=UIStyle.GREEN.value))

    def render_doctor(self, config: Config) -> None:
        self.console.print(
            UISection.wrap("workspace", DoctorTable.settings_block(config), style=UIStyle.BLUE.value)
        )
        if config.workspace.imports:
            self.console.print(
                UISection.wrap("imports", DoctorTable.imports_table(config), style=UIStyle.CYAN.value)
            )
        else:
            self.console.print(
                UISection.note("imports", "No packages imported.", style=UIStyle.YELLOW.value)
            )
        self.console.print(
            UISection.wrap(
                "integrations", DoctorTable.integrations_table(config), style=UIStyle.BLUE.value
            )
        )
        if not config.enabled_integrations():
            self.console.print(
                UISection.note(
                    "next",
                    "Enable an integration under workspace.integrations in ajisai.yml.",
                    style=UIStyle.DIM.value,
                )
            )
