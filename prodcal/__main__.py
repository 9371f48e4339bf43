"""Main entry point for prodcal."""

import logging
import sys
from datetime import date, datetime
from getpass import getpass

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from prodcal.cache import ProductionCalendar
from prodcal.config import DEFAULT_CONFIG_PATH, Config
from prodcal.errors import ConfigNotFoundError, InvalidConfigError, ProdCalError

DATE_FORMATS = ("%Y-%m-%d", "%d.%m.%Y")


def configure() -> None:
    """Interactive configuration setup."""
    # Using sys.stdout.write for interactive prompts is allowed
    sys.stdout.write("prodcal Configuration\n")
    sys.stdout.write("=" * 40 + "\n")
    access_token = getpass("Access token: ")

    config = Config(access_token=access_token)
    config.save()
    sys.stdout.write("\n✓ Configuration saved successfully!\n")
    sys.stdout.write(f"Config file: {DEFAULT_CONFIG_PATH}\n")


def parse_date(value: str) -> date:
    """Parse a date given as YYYY-MM-DD or DD.MM.YYYY."""
    for date_format in DATE_FORMATS:
        try:
            return datetime.strptime(value, date_format).date()
        except ValueError:
            continue
    msg = f"Invalid date {value!r}, expected YYYY-MM-DD or DD.MM.YYYY"
    raise ValueError(msg)


def build_table(calendar: ProductionCalendar, dates: list[date]) -> Table:
    """Query the calendar for each date and collect the answers in a table."""
    table = Table(title="Production calendar")
    table.add_column("Date")
    table.add_column("Weekend")
    table.add_column("Short day")
    table.add_column("Working days", justify="right")
    table.add_column("Holidays", justify="right")
    table.add_column("Hours 40h", justify="right")
    table.add_column("Hours 36h", justify="right")
    table.add_column("Hours 24h", justify="right")

    for target_date in dates:
        table.add_row(
            target_date.isoformat(),
            "yes" if calendar.is_weekend(target_date) else "no",
            "yes" if calendar.is_short_day(target_date) else "no",
            str(calendar.working_days(target_date)),
            str(calendar.holidays(target_date)),
            f"{calendar.working_hours_40h_week(target_date):.1f}",
            f"{calendar.working_hours_36h_week(target_date):.1f}",
            f"{calendar.working_hours_24h_week(target_date):.1f}",
        )
    return table


def load_config() -> Config:
    """Load configuration from the environment, then from the config file."""
    config = Config.from_env() or Config.load()
    if not config:
        msg = "No configuration found, run 'prodcal config' or set PRODCAL_ACCESS_TOKEN"
        raise ConfigNotFoundError(msg)
    if config.log_level.upper() not in logging.getLevelNamesMapping():
        msg = f"Unknown log level {config.log_level!r}"
        raise InvalidConfigError(msg)
    return config


def main() -> None:
    """Main entry point."""
    if len(sys.argv) > 1 and sys.argv[1] == "config":
        configure()
        return

    console = Console()
    try:
        dates = [parse_date(arg) for arg in sys.argv[1:]] or [date.today()]
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(2)

    try:
        config = load_config()
    except (ConfigNotFoundError, InvalidConfigError) as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console)],
    )

    with ProductionCalendar.from_config(config) as calendar:
        try:
            console.print(build_table(calendar, dates))
        except ProdCalError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            sys.exit(1)


if __name__ == "__main__":
    main()
