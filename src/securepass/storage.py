"""
Persistence of analysis records for statistics and per-user history.

Only SHA-256 digests of passwords are stored.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from .errors import StorageError
from .models import STRENGTH_LEVELS, AnalysisResult, round_half_up

db = SQLAlchemy()


class PasswordCheck(db.Model):
    __tablename__ = "password_checks"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(64), nullable=True, index=True)
    password_hash = db.Column(db.String(64), nullable=False)
    strength_score = db.Column(db.Integer, nullable=False)
    strength_level = db.Column(db.String(20), nullable=False)
    entropy = db.Column(db.Float, nullable=False)
    is_breached = db.Column(db.Boolean, default=False)
    breach_count = db.Column(db.Integer, default=0)
    ip_address = db.Column(db.String(64))
    user_agent = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)


class PasswordHistory(db.Model):
    __tablename__ = "password_history"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(64), nullable=False, index=True)
    password_hash = db.Column(db.String(64), nullable=False)
    strength_score = db.Column(db.Integer, nullable=False)
    strength_level = db.Column(db.String(20), nullable=False)
    entropy = db.Column(db.Float, nullable=False)
    is_breached = db.Column(db.Boolean, default=False)
    breach_count = db.Column(db.Integer, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "strength": self.strength_level,
            "score": self.strength_score,
            "entropy": self.entropy,
            "isBreached": bool(self.is_breached),
            "breachCount": self.breach_count or 0,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


class SQLRecorder:
    """Write-only persistence collaborator used by the analyzer."""

    def __init__(self, history_limit: int = 10):
        self.history_limit = history_limit

    def record_check(self, user_id: Optional[str], password_hash: str,
                     result: AnalysisResult, metadata: Dict[str, Any]) -> None:
        user_agent = metadata.get("user_agent")
        check = PasswordCheck(
            user_id=user_id,
            password_hash=password_hash,
            strength_score=result.score,
            strength_level=result.strength,
            entropy=round(result.entropy, 1),
            is_breached=bool(result.is_breached),
            breach_count=result.breach_count or 0,
            ip_address=metadata.get("ip_address"),
            user_agent=user_agent[:255] if user_agent else None,
        )
        self._commit(check)

    def record_history(self, user_id: str, password_hash: str, result: AnalysisResult) -> None:
        entry = PasswordHistory(
            user_id=user_id,
            password_hash=password_hash,
            strength_score=result.score,
            strength_level=result.strength,
            entropy=round(result.entropy, 1),
            is_breached=bool(result.is_breached),
            breach_count=result.breach_count or 0,
        )
        self._commit(entry)
        self._prune_history(user_id)

    def _prune_history(self, user_id: str) -> None:
        stale = (
            PasswordHistory.query.filter_by(user_id=user_id)
            .order_by(PasswordHistory.id.desc())
            .offset(self.history_limit)
            .all()
        )
        if not stale:
            return
        try:
            for entry in stale:
                db.session.delete(entry)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StorageError(f"Failed to prune password history: {e}") from e

    @staticmethod
    def _commit(row) -> None:
        try:
            db.session.add(row)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StorageError(f"Failed to store {row.__tablename__} record: {e}") from e


def get_history(user_id: str, limit: int = 10) -> List[PasswordHistory]:
    """Most recent history entries for a user, newest first."""
    return (
        PasswordHistory.query.filter_by(user_id=user_id)
        .order_by(PasswordHistory.id.desc())
        .limit(limit)
        .all()
    )


def get_stats() -> Dict[str, Any]:
    """Aggregate statistics over every recorded check."""
    total = db.session.query(func.count(PasswordCheck.id)).scalar() or 0
    breached = (
        db.session.query(func.count(PasswordCheck.id))
        .filter(PasswordCheck.is_breached.is_(True))
        .scalar()
        or 0
    )
    average = db.session.query(func.avg(PasswordCheck.strength_score)).scalar()

    distribution = {level: 0 for level in STRENGTH_LEVELS}
    rows = (
        db.session.query(PasswordCheck.strength_level, func.count(PasswordCheck.id))
        .group_by(PasswordCheck.strength_level)
        .all()
    )
    for level, count in rows:
        if level in distribution:
            distribution[level] = count

    return {
        "totalPasswordsChecked": total,
        "breachedPasswordsFound": breached,
        "averagePasswordStrength": round_half_up(float(average)) if average is not None else 0,
        "strengthDistribution": distribution,
    }
