from flagquiz import db
from datetime import datetime, timezone
import json


def _utcnow():
    return datetime.now(timezone.utc)


class GameResult(db.Model):
    __tablename__ = 'game_result'
    id = db.Column(db.Integer, primary_key=True)
    session_code = db.Column(db.String(4), nullable=False, index=True)
    score = db.Column(db.Integer, nullable=False, default=0)
    total_rounds = db.Column(db.Integer, nullable=False)
    correct_answers = db.Column(db.Integer, nullable=False, default=0)
    round_history = db.Column(db.Text, nullable=True)  # JSON-encoded list of round summaries
    finished_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)

    def to_dict(self):
        try:
            history = json.loads(self.round_history) if self.round_history else []
        except ValueError:
            history = []
        return {
            'id': self.id,
            'session_code': self.session_code,
            'score': self.score,
            'total_rounds': self.total_rounds,
            'correct_answers': self.correct_answers,
            'round_history': history,
            'finished_at': self.finished_at.isoformat() if self.finished_at else None,
        }
