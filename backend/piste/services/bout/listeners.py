from piste import socketio
from .fencer import Card


class BoutListener:
    """Display contract for a bout. Override only the renders you need."""

    def set_left_score(self, score: int) -> None:
        pass

    def set_right_score(self, score: int) -> None:
        pass

    def set_current_time(self, time: float) -> None:
        pass

    def set_left_card(self, card: Card) -> None:
        pass

    def set_right_card(self, card: Card) -> None:
        pass

    def stop_timer(self) -> None:
        pass


class SocketIOBoutListener(BoutListener):
    """Pushes renders to every client in the bout's room on /ws."""

    def __init__(self, bout_code: str, namespace: str = '/ws'):
        self.bout_code = bout_code
        self.namespace = namespace

    @property
    def room(self) -> str:
        return f"bout:{self.bout_code}"

    def _emit(self, event: str, payload: dict) -> None:
        payload = dict(payload, bout_code=self.bout_code)
        socketio.emit(event, payload, to=self.room, namespace=self.namespace)

    def set_left_score(self, score):
        self._emit('score_update', {'side': 'left', 'score': score})

    def set_right_score(self, score):
        self._emit('score_update', {'side': 'right', 'score': score})

    def set_current_time(self, time):
        self._emit('time_update', {'current_time': time})

    def set_left_card(self, card):
        self._emit('card_update', {'side': 'left', 'card': card.value})

    def set_right_card(self, card):
        self._emit('card_update', {'side': 'right', 'card': card.value})

    def stop_timer(self):
        self._emit('timer_stopped', {})
