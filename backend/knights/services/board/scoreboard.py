import itertools
from threading import RLock
from typing import Any, Callable, Dict, List, Optional

from knights.models import Participant, default_name

ConfirmFn = Callable[[str], bool]
Listener = Callable[[str, Dict[str, Any]], None]

RESET_PROMPT = 'Are you sure you want to reset all scores?'
NEW_GAME_PROMPT = 'Start a new game? This will clear all players and scores.'

RENAME_STARTED = 'rename_started'


def _always_confirm(prompt: str) -> bool:
    return True


class ScoreBoard:
    """In-memory state of one score-tracking session.

    Every mutation is total: an id that is not on the board is a silent
    no-op, score decrements clamp at zero and blank names fall back to the
    positional default. Reset and new-game are gated by a confirmation
    predicate ``(prompt) -> bool`` injected at construction or per call.

    ``rename_started`` is published to subscribers after ``begin_rename``
    has updated the state, so a presentation layer can focus the name input
    once it has re-rendered. The board itself never schedules anything.
    """

    def __init__(self, confirm: Optional[ConfirmFn] = None):
        self._participants: List[Participant] = []
        self.current_round = 1
        # Never populated; kept for compatibility with the board layout
        self.game_history: List[Dict[str, Any]] = []
        self._confirm = confirm or _always_confirm
        self._ids = itertools.count(1)
        self._listeners: List[Listener] = []
        self._lock = RLock()

    # ---- read accessors ----

    @property
    def participants(self) -> List[Participant]:
        """Participants in insertion order (a copy)."""
        return list(self._participants)

    def get(self, participant_id) -> Optional[Participant]:
        for p in self._participants:
            if p.id == participant_id:
                return p
        return None

    def __len__(self):
        return len(self._participants)

    # ---- notifications ----

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _publish(self, event: str, payload: Dict[str, Any]) -> None:
        for listener in list(self._listeners):
            listener(event, payload)

    # ---- mutations ----

    def add_participant(self) -> Participant:
        with self._lock:
            participant = Participant(
                id=next(self._ids),
                name=default_name(len(self._participants) + 1),
            )
            self._participants.append(participant)
            return participant

    def remove_participant(self, participant_id) -> bool:
        with self._lock:
            remaining = [p for p in self._participants if p.id != participant_id]
            removed = len(remaining) != len(self._participants)
            self._participants = remaining
            return removed

    def adjust_score(self, participant_id, delta: int) -> Optional[Participant]:
        # Non-integer deltas are ignored rather than truncated
        if isinstance(delta, bool) or not isinstance(delta, int):
            return None
        with self._lock:
            participant = self.get(participant_id)
            if participant:
                participant.score = max(0, participant.score + delta)
            return participant

    def begin_rename(self, participant_id) -> Optional[Participant]:
        with self._lock:
            participant = self.get(participant_id)
            if participant:
                participant.is_editing = True
                self._publish(RENAME_STARTED, {'participant_id': participant.id})
            return participant

    def commit_rename(self, participant_id, raw_name: Optional[str]) -> Optional[Participant]:
        with self._lock:
            participant = self.get(participant_id)
            if participant:
                name = (raw_name or '').strip()
                # Position is taken at commit time, after any removals
                participant.name = name or default_name(self._participants.index(participant) + 1)
                participant.is_editing = False
            return participant

    def cancel_rename(self, participant_id) -> Optional[Participant]:
        with self._lock:
            participant = self.get(participant_id)
            if participant:
                participant.is_editing = False
            return participant

    def reset_scores(self, confirm: Optional[ConfirmFn] = None) -> bool:
        if not (confirm or self._confirm)(RESET_PROMPT):
            return False
        with self._lock:
            for p in self._participants:
                p.score = 0
            self.current_round = 1
        return True

    def new_game(self, confirm: Optional[ConfirmFn] = None) -> bool:
        if not (confirm or self._confirm)(NEW_GAME_PROMPT):
            return False
        with self._lock:
            self._participants = []
            self.current_round = 1
        return True

    # ---- derivations ----

    def compute_leader(self) -> Optional[Participant]:
        leader = None
        for p in self._participants:
            if leader is None or p.score > leader.score:
                leader = p
        return leader

    def compute_ranking(self) -> List[Participant]:
        # sorted() is stable: equal scores keep insertion order
        return sorted(self._participants, key=lambda p: p.score, reverse=True)

    def to_dict(self):
        with self._lock:
            leader = self.compute_leader()
            return {
                'participants': [p.to_dict() for p in self._participants],
                'ranking': [p.id for p in self.compute_ranking()],
                'leader': leader.to_dict() if leader else None,
                'current_round': self.current_round,
            }
