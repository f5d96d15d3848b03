from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ApplicationRecord:
    """One launchable entry of the application menu."""

    name: str
    exec_command: str
    source_path: str
    icon: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    keywords: Optional[str] = None
    terminal: bool = False
    # parse-time only, never persisted
    hidden: bool = field(default=False, compare=False, repr=False)

    def is_displayable(self) -> bool:
        return bool(self.name) and bool(self.exec_command) and not self.hidden

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data.pop("hidden")
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ApplicationRecord":
        """Raises KeyError or TypeError on malformed cache entries."""
        return cls(
            name=data["name"],
            exec_command=data["exec_command"],
            source_path=data["source_path"],
            icon=data.get("icon"),
            description=data.get("description"),
            category=data.get("category"),
            keywords=data.get("keywords"),
            terminal=bool(data.get("terminal", False)),
        )


@dataclass
class AppMenu:
    """The persisted menu: `{"apps": [...]}`."""

    apps: List[ApplicationRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"apps": [app.to_dict() for app in self.apps]}

    @classmethod
    def from_dict(cls, data: Any) -> "AppMenu":
        if not isinstance(data, dict) or not isinstance(data.get("apps"), list):
            raise TypeError("menu cache must be an object with an 'apps' list")
        return cls(apps=[ApplicationRecord.from_dict(app) for app in data["apps"]])
