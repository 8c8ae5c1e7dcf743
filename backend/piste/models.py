from piste import db
import random
import string
import time


def generate_bout_code(length=4):
    """Generate a unique, short bout code."""
    while True:
        code = ''.join(random.choices(string.ascii_uppercase + string.digits, k=length))
        if not Bout.query.filter_by(bout_code=code).first():
            return code


class Bout(db.Model):
    __tablename__ = 'bout'
    id = db.Column(db.Integer, primary_key=True)
    bout_code = db.Column(db.String(4), unique=True, index=True)
    session_id = db.Column(db.String(64), nullable=True, index=True)
    status = db.Column(db.String(16), default='active')  # active, closed
    default_time = db.Column(db.Float, nullable=False)
    remaining_time = db.Column(db.Float, nullable=True)
    period = db.Column(db.Integer, default=1)
    left_score = db.Column(db.Integer, default=0)
    right_score = db.Column(db.Integer, default=0)
    left_card = db.Column(db.String(16), default='none')
    right_card = db.Column(db.String(16), default='none')
    created_at = db.Column(db.Float, default=time.time)
    events = db.relationship('BoutEventRecord', backref='bout', lazy='dynamic',
                             order_by='BoutEventRecord.seq')

    def __init__(self, **kwargs):
        super(Bout, self).__init__(**kwargs)
        if not self.bout_code:
            self.bout_code = generate_bout_code()

    def to_dict(self):
        return {
            'id': self.id,
            'bout_code': self.bout_code,
            'status': self.status,
            'default_time': self.default_time,
            'current_time': self.remaining_time,
            'period': self.period,
            'left': {'score': self.left_score, 'card': self.left_card},
            'right': {'score': self.right_score, 'card': self.right_card},
            'event_count': self.events.count(),
        }


class BoutEventRecord(db.Model):
    __tablename__ = 'bout_event'
    id = db.Column(db.Integer, primary_key=True)
    bout_id = db.Column(db.Integer, db.ForeignKey('bout.id'), nullable=False)
    seq = db.Column(db.Integer, nullable=False)
    timestamp = db.Column(db.Float, nullable=False)
    left_score = db.Column(db.Integer, nullable=False)
    right_score = db.Column(db.Integer, nullable=False)
    message = db.Column(db.String(64), nullable=False)

    def to_dict(self):
        return {
            'timestamp': self.timestamp,
            'left_score': self.left_score,
            'right_score': self.right_score,
            'message': self.message,
        }
