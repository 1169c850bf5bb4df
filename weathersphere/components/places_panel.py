"""Recent searches and favorite places."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widgets import Label, ListItem, ListView, Static


def escape_markup(text: str) -> str:
    """Escape Rich markup characters in user content."""
    return text.replace("[", r"\[").replace("]", r"\]")


class PlaceItem(ListItem):
    """A single place in the list."""

    def __init__(self, place: str, favorite: bool = False) -> None:
        super().__init__()
        self.place = place
        self.favorite = favorite

    def compose(self) -> ComposeResult:
        star = "[yellow]★[/yellow] " if self.favorite else ""
        yield Label(f"{star}{escape_markup(self.place)}")


class PlacesList(ListView):
    """List view for places with keyboard navigation."""

    BINDINGS = [
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
        Binding("enter", "select_cursor", "Show", show=True),
    ]

    class PlaceSelected(Message):
        """Message sent when a place is selected."""

        def __init__(self, city: str) -> None:
            super().__init__()
            self.city = city

    def action_select_cursor(self) -> None:
        """Handle item selection."""
        if self.highlighted_child and isinstance(self.highlighted_child, PlaceItem):
            # Favorites are stored as "City, Country"; search by the city part
            city = self.highlighted_child.place.split(",")[0].strip()
            self.post_message(self.PlaceSelected(city))


class PlacesPanel(Static):
    """Panel listing favorites first, then recent searches."""

    DEFAULT_CSS = """
    PlacesPanel {
        height: auto;
        max-height: 14;
        border: solid $accent;
        padding: 0 1;
    }
    """

    def compose(self) -> ComposeResult:
        yield Static("[bold]Places[/bold]")
        yield PlacesList(id="places-list")

    def update_places(self, favorites: list[str], recent: list[str]) -> None:
        places_list = self.query_one(PlacesList)
        places_list.clear()
        for place in favorites:
            places_list.append(PlaceItem(place, favorite=True))
        for place in recent:
            places_list.append(PlaceItem(place))
