"""RecentPick domain entity: when a restaurant was last rolled."""
import re
from datetime import datetime, timezone

_EXTRA_FRACTION = re.compile(r"(\.\d{6})\d+")


def format_timestamp(moment: datetime) -> str:
    """RFC3339 text with fixed microsecond precision, so stored values sort lexically."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="microseconds")


def parse_timestamp(text: str) -> datetime:
    if not isinstance(text, str):
        raise ValueError(f"Pick timestamp must be text, got {text!r}")
    # Accept a trailing 'Z' as written by other RFC3339 producers
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    # Nanosecond precision is truncated to what datetime can hold
    text = _EXTRA_FRACTION.sub(r"\1", text)
    moment = datetime.fromisoformat(text)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


class RecentPick:
    def __init__(self, name: str, picked_at: datetime):
        self.name = name
        self.picked_at = picked_at

    def __repr__(self) -> str:
        return f"RecentPick(name={self.name!r}, picked_at={format_timestamp(self.picked_at)!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, RecentPick):
            return NotImplemented
        return self.name == other.name and self.picked_at == other.picked_at

    @staticmethod
    def from_row(row):
        # (restaurants, date) columns of recent_lunch
        return RecentPick(name=row[0], picked_at=parse_timestamp(row[1]))

    def to_dict(self):
        return {"name": self.name, "picked_at": format_timestamp(self.picked_at)}
