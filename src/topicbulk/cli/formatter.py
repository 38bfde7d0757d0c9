# src/topicbulk/cli/formatter.py
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from topicbulk.core.engine import RunNotifier
from topicbulk.core.errors import CreationError
from topicbulk.core.models import TopicDefinition

# Initialize the Rich console for high-quality terminal output
console = Console()


class TopicFormatter(RunNotifier):
    """
    TopicFormatter: the visual side of a reconciliation run.
    Renders one line per created topic, the failure line and the final count.
    """

    def __init__(self, out: Console = None):
        self.console = out or console

    def _line(self, markup: str):
        # Long topic names must never be wrapped onto a second line
        self.console.print(markup, soft_wrap=True, highlight=False)

    def print_header(self, subtitle: str, version: str):
        self.console.print(Panel.fit(
            f"[bold cyan]topicbulk {version}[/bold cyan]",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def topic_would_create(self, line_no: int, topic: TopicDefinition) -> None:
        self._line(f"[yellow]Would create topic:[/yellow] {escape(topic.name)}")

    def topic_created(self, line_no: int, topic: TopicDefinition) -> None:
        self._line(f"[green]Created topic:[/green] {escape(topic.name)}")

    def topic_failed(self, line_no: int, topic: TopicDefinition,
                     error: CreationError, created_count: int) -> None:
        detail = f"{error.error_code}: {error.detail}" if error.error_code else error.detail
        self._line(
            f"[bold red]ERROR[/bold red] - Failed to create topic {escape(topic.name)} "
            f"defined at line {line_no}. {escape(detail)}"
        )

    def summary(self, created_count: int, dry_run: bool) -> None:
        if dry_run:
            self._line(f"[bold]Total topics that would be created: {created_count}[/bold]")
        else:
            self._line(f"[bold]Total topics created: {created_count}[/bold]")

    def error(self, message: str):
        """Failures that happen before the engine starts (I/O, parse, snapshot)."""
        self._line(f"[bold red]ERROR[/bold red] - {escape(message)}")
