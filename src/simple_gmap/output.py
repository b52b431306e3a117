"""Output formatting for summaries, rendered maps and settings forms."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .form import FormElement
from .formatter import MapElements
from .urls import element_urls

console = Console()


def print_summary(lines: list[str]) -> None:
    """Print the settings summary."""
    if not lines:
        console.print("[dim]Nothing is displayed with these settings[/dim]")
        return

    for line in lines:
        console.print(f"  {escape(line)}")


def print_elements(elements: MapElements) -> None:
    """Print one panel per rendered address."""
    if not len(elements):
        console.print("[yellow]No addresses to render[/yellow]")
        return

    for vm in elements:
        body = Text()
        body.append("Map type: ", style="bold")
        body.append(f"{vm.map_type} ({vm.static_map_type})\n")
        body.append("Size: ", style="bold")
        body.append(f"{vm.width} x {vm.height}, zoom {vm.zoom}\n")
        body.append("Language: ", style="bold")
        body.append(f"{vm.langcode}\n")
        if vm.include_link:
            body.append("Link text: ", style="bold")
            body.append(f"{vm.link_text}\n")
        if vm.include_text:
            body.append("Address: ", style="bold")
            body.append(f"{vm.address_text}\n")

        for kind, url in element_urls(vm).items():
            body.append(f"{kind}: ", style="cyan")
            body.append(f"{url}\n")

        console.print(Panel(body, title=f"[bold]Item {vm.delta}[/bold]", border_style="blue"))


def print_form(elements: list[FormElement]) -> None:
    """Print the settings form as a table."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Setting", style="cyan")
    table.add_column("Type")
    table.add_column("Title")
    table.add_column("Value")

    for element in elements:
        if element.type == "markup":
            table.add_row("", "", f"[bold]{element.title}[/bold]", "")
            continue
        value = element.default_value
        if element.options:
            value = f"{value} ({element.options.get(str(value), '?')})"
        table.add_row(element.name, element.type, element.title, escape(str(value)))

    console.print(table)


def print_form_issues(field_name: str, issues: list[dict[str, str]]) -> None:
    """Print form validation issues for one field."""
    console.print(f"[bold red]✗ {field_name}[/bold red]")
    for issue in issues:
        label = escape(f"[{issue['issue']}]")
        console.print(f"    {label} {escape(issue['message'])}")
