"""Recommendations panel."""

from textual.app import ComposeResult
from textual.widgets import Static

from ..models.advice import Recommendations


class AdvicePanel(Static):
    """Clothing, activity and health advice for the current conditions."""

    DEFAULT_CSS = """
    AdvicePanel {
        height: auto;
        border: solid $secondary;
        padding: 0 1;
    }
    """

    def compose(self) -> ComposeResult:
        yield Static("[bold]Recommendations[/bold]", id="advice-title")
        yield Static("[dim]No data yet[/dim]", id="advice-body")

    def update_advice(self, recommendations: Recommendations | None) -> None:
        body = self.query_one("#advice-body", Static)
        if recommendations is None:
            body.update("[dim]No data yet[/dim]")
            return

        blocks = []
        for advice in recommendations.as_list():
            tags = " ".join(f"[reverse] {tag} [/reverse]" for tag in advice.tags)
            blocks.append(f"[bold]{advice.title}[/bold]\n{advice.text}\n{tags}")
        body.update("\n\n".join(blocks))
