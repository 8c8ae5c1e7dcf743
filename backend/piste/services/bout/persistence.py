import logging

from piste import db
from piste.models import Bout, BoutEventRecord
from .controller import BoutController
from .listeners import BoutListener

logger = logging.getLogger(__name__)


def sync_bout(bout: Bout, controller: BoutController) -> None:
    """Copy the controller's live state onto its row.

    Scores, cards, period and clock are overwritten; events the row has not
    stored yet are appended in log order. Stored events are never edited.
    """
    bout.left_score = controller.left_score
    bout.right_score = controller.right_score
    bout.left_card = controller.left_card.value
    bout.right_card = controller.right_card.value
    bout.period = controller.period
    bout.remaining_time = controller.current_time

    stored = bout.events.count()
    events = controller.events.as_sequence()
    for seq in range(stored, len(events)):
        ev = events[seq]
        db.session.add(BoutEventRecord(
            bout_id=bout.id,
            seq=seq,
            timestamp=ev.timestamp,
            left_score=ev.left_score,
            right_score=ev.right_score,
            message=ev.message,
        ))
    try:
        db.session.add(bout)
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception(f"[persist-failed] bout={bout.bout_code}")
        raise


class ExpiryRecorder(BoutListener):
    """Stores the final snapshot when the clock runs out.

    Expiry arrives from the clock's background task, outside any request,
    so the row is synced under a fresh app context.
    """

    def __init__(self, app, bout_code: str, controller: BoutController):
        self.app = app
        self.bout_code = bout_code
        self.controller = controller

    def stop_timer(self):
        with self.app.app_context():
            bout = Bout.query.filter_by(bout_code=self.bout_code).first()
            if not bout or bout.status != 'active':
                return
            try:
                sync_bout(bout, self.controller)
            except Exception:
                # already logged and rolled back; the next action retries
                return
            self.app.logger.info(f"[clock-expired] bout={self.bout_code} stored")
