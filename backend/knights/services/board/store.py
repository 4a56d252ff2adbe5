import random
import string
from collections import OrderedDict
from threading import RLock
from typing import Optional

from .scoreboard import ScoreBoard


def generate_board_code(taken, length=4):
    """Generate a short board code not already in ``taken``."""
    while True:
        code = ''.join(random.choices(string.ascii_uppercase + string.digits, k=length))
        if code not in taken:
            return code


class BoardStore:
    """Live boards keyed by code, one per page session.

    Nothing is persisted. Past ``max_boards`` the oldest board is evicted.
    """

    def __init__(self, max_boards: int = 100):
        self.max_boards = max(1, int(max_boards))
        self._boards: 'OrderedDict[str, ScoreBoard]' = OrderedDict()
        self._lock = RLock()

    def init_app(self, app):
        self.max_boards = max(1, int(app.config.get('MAX_BOARDS', self.max_boards)))
        self.clear()
        app.extensions['boards'] = self

    def create(self, confirm=None):
        with self._lock:
            code = generate_board_code(self._boards)
            board = ScoreBoard(confirm=confirm)
            self._boards[code] = board
            while len(self._boards) > self.max_boards:
                self._boards.popitem(last=False)
            return code, board

    def get(self, code: Optional[str]) -> Optional[ScoreBoard]:
        if not code:
            return None
        with self._lock:
            return self._boards.get(code.upper())

    def discard(self, code: Optional[str]) -> bool:
        if not code:
            return False
        with self._lock:
            return self._boards.pop(code.upper(), None) is not None

    def clear(self) -> int:
        with self._lock:
            count = len(self._boards)
            self._boards.clear()
            return count

    def __len__(self):
        return len(self._boards)

    def __contains__(self, code):
        return bool(code) and code.upper() in self._boards
