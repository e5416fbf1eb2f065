"""Route names and the explicit view state handed between screens."""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import quote

ROUTES: Dict[str, str] = {
    "shopping": "/shopping-list",
    "fridge-check": "/fridge-check",
    "archive": "/archive",
    "archive-create": "/archive/new",
    "archive-detail": "/archive/{entryId}",
    "recipe-detail": "/recipes/{recipeId}",
    "recipe-edit": "/recipes/{recipeId}/edit",
}


@dataclass(frozen=True)
class ViewState:
    route: str
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def url(self) -> str:
        template = ROUTES[self.route]
        return template.format(**{k: quote(str(v), safe='') for k, v in self.params.items()})

    def to_dict(self) -> Dict[str, Any]:
        return {"route": self.route, "params": dict(self.params), "url": self.url}


def navigate_to(route_name: str, params: Optional[Dict[str, Any]] = None) -> ViewState:
    """Resolve the next screen. Unknown routes and missing parameters raise KeyError."""
    if route_name not in ROUTES:
        raise KeyError(f"Unknown route: {route_name}")
    state = ViewState(route_name, dict(params or {}))
    _ = state.url  # fail early on a missing path parameter
    return state
