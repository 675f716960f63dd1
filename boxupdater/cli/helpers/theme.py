"""Theme constants for consistent Rich styling across CLI commands."""

from rich.table import Table


class Colors:
    """Standardized color palette for CLI output."""

    SUCCESS = "bold green"
    ERROR = "bold red"
    WARNING = "bold yellow"
    INFO = "bold blue"

    PRIMARY = "cyan"
    SECONDARY = "blue"
    ACCENT = "magenta"
    MUTED = "dim"

    HEADER = "bold cyan"


class Icons:
    """Plain-text icons that render on every terminal."""

    SUCCESS = "✓"
    ERROR = "✗"
    WARNING = "!"
    INFO = "i"


class TableStyles:
    """Predefined table styling templates."""

    @staticmethod
    def create_basic_table(title: str = "") -> Table:
        return Table(
            title=title or None,
            show_header=True,
            header_style=Colors.HEADER,
            border_style=Colors.SECONDARY,
        )

    @staticmethod
    def create_repository_table() -> Table:
        """Create table for configured repositories."""
        table = TableStyles.create_basic_table("Firmware Repositories")
        table.add_column("Name", style=Colors.PRIMARY, no_wrap=True)
        table.add_column("Repository", style=Colors.ACCENT)
        table.add_column("Description")
        table.add_column("Filter", style=Colors.MUTED)
        return table

    @staticmethod
    def create_release_table(title: str) -> Table:
        """Create table for the releases of one repository."""
        table = TableStyles.create_basic_table(title)
        table.add_column("Tag", style=Colors.PRIMARY, no_wrap=True)
        table.add_column("Asset", style=Colors.ACCENT)
        table.add_column("URL", style=Colors.MUTED, overflow="fold")
        return table
