"""Restaurant domain entity: unique name plus a price category."""


class Restaurant:
    def __init__(self, name: str = "", category: str = ""):
        self.name = name
        self.category = category

    def __str__(self) -> str:
        return f"{self.name} ({self.category})"

    def __repr__(self) -> str:
        return f"Restaurant(name={self.name!r}, category={self.category!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Restaurant):
            return NotImplemented
        return self.name == other.name and self.category == other.category

    @staticmethod
    def from_row(row):
        # (restaurants, option) columns of lunch_list
        return Restaurant(name=row[0], category=row[1])

    def to_dict(self):
        return {"name": self.name, "category": self.category}
