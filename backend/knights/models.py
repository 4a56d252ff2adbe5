from dataclasses import dataclass

DEFAULT_NAME_PREFIX = 'Knight'


def default_name(position: int) -> str:
    """Positional fallback name, e.g. ``Knight 3`` for the 1-based position 3."""
    return f"{DEFAULT_NAME_PREFIX} {position}"


@dataclass
class Participant:
    id: int
    name: str
    score: int = 0
    # UI mode only: name renders as an input while True
    is_editing: bool = False

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'score': self.score,
            'is_editing': self.is_editing,
        }
