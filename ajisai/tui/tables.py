from rich.panel import Panel
from rich.table import Column, Table

from ajisai.agent_id import AgentId, agent_metadata
from ajisai.config.models import Config, GitImport, LocalImport
from ajisai.engine import ExportOutcome
from ajisai.tui.enums import UIStyle
from ajisai.utils import compact_home_path


class ApplyTable:
    @staticmethod
    def stats_panel(written: int, failed: int, skipped: int) -> Panel:
        stats: dict[str, str] = {
            "written": str(written),
            "failed": str(failed),
            "skipped": str(skipped),
        }
        table = Table(show_header=False, box=None)
        for key, value in stats.items():
            table.add_row(f"[bold]{key}[/bold]", value)
        return Panel(
            table,
            title="apply",
            border_style=UIStyle.GREEN.value if failed == 0 else UIStyle.RED.value,
        )

    @staticmethod
    def outcomes_table(outcomes: tuple[ExportOutcome, ...]) -> Table:
        table = Table(
            Column(header="Agent", width=16),
            Column(header="Package", width=20),
            Column(header="Files", width=8, justify="right"),
            Column(header="Status", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for outcome in outcomes:
            if outcome.error is None:
                status = f"[{UIStyle.GREEN.value}]ok[/{UIStyle.GREEN.value}]"
            else:
                status = f"[{UIStyle.RED.value}]failed[/{UIStyle.RED.value}]"
            table.add_row(
                agent_metadata(outcome.agent_id).label,
                outcome.package_name,
                str(len(outcome.written)),
                status,
            )
        return table


class DoctorTable:
    @staticmethod
    def settings_block(config: Config) -> Table:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("config", compact_home_path(config.path) if config.path else "(defaults)")
        table.add_row("namespace", config.namespace)
        table.add_row("cache", compact_home_path(config.cache_dir))
        table.add_row("experimental", "on" if config.settings.experimental else "off")
        if config.package is not None:
            presets = ", ".join(config.package.exports) or "(no exports)"
            table.add_row("package", f"{config.package.name} ({presets})")
        return table

    @staticmethod
    def imports_table(config: Config) -> Table:
        table = Table(
            Column(header="Package", width=20),
            Column(header="Type", width=8),
            Column(header="Source", overflow="fold"),
            Column(header="Presets", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for name, imported in config.workspace.imports.items():
            source = imported.source
            if isinstance(source, GitImport):
                location = source.repository
                if source.revision:
                    location = f"{location}@{source.revision}"
            elif isinstance(source, LocalImport):
                location = source.path
            else:
                location = "?"
            table.add_row(name, source.type.value, location, ", ".join(imported.include))
        return table

    @staticmethod
    def integrations_table(config: Config) -> Table:
        table = Table(
            Column(header="Agent", width=16),
            Column(header="Status", width=10),
            Column(header="Directory", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        enabled = set(config.enabled_integrations())
        for agent_id in AgentId:
            metadata = agent_metadata(agent_id)
            if agent_id in enabled:
                status = f"[{UIStyle.GREEN.value}]enabled[/{UIStyle.GREEN.value}]"
            else:
                status = f"[{UIStyle.YELLOW.value}]disabled[/{UIStyle.YELLOW.value}]"
            table.add_row(metadata.label, status, metadata.project_dir_name)
        return table
