import threading
from contextlib import contextmanager
from typing import List, Optional, Tuple

from flask import current_app
from sqlalchemy.exc import IntegrityError

from gameapi import db
from gameapi.errors import Internal, NotFound
from gameapi.models import Player, Score, utcnow

# Fixed pool of locks striped over (player_id, game_mode); guards the
# read-then-write flag update without growing with client-chosen modes
LOCK_STRIPES = 64
_key_locks: Tuple[threading.Lock, ...] = tuple(threading.Lock() for _ in range(LOCK_STRIPES))


def _lock_for(player_id: int, game_mode: str) -> threading.Lock:
    return _key_locks[hash((player_id, game_mode)) % LOCK_STRIPES]


@contextmanager
def _serialized(player_id: int, game_mode: str):
    with _lock_for(player_id, game_mode):
        yield


def clamp_size(value: Optional[int], default: int, maximum: int) -> int:
    """Sizes below 1 (or missing) fall back to ``default``; large ones cap at ``maximum``."""
    if value is None or value < 1:
        return default
    return min(value, maximum)


def _lock_player(player_id: int) -> Player:
    # Row lock for multi-process deployments; SQLite ignores FOR UPDATE
    player = Player.query.filter_by(id=player_id).with_for_update().first()
    if player is None:
        raise NotFound('Player not found')
    return player


def _record_score(player_id: int, game_mode: str, points: int, **stats) -> Score:
    _lock_player(player_id)
    existing = Score.query.filter_by(player_id=player_id, game_mode=game_mode).all()
    best = max((s.points for s in existing), default=None)
    # Strictly greater: a tie leaves the current holder flagged
    is_new_high = best is None or points > best
    if is_new_high:
        for old in existing:
            if old.is_high_score:
                old.is_high_score = False
        db.session.flush()

    score = Score(
        player_id=player_id,
        game_mode=game_mode,
        points=points,
        is_high_score=is_new_high,
        achieved_at=utcnow(),
        **stats,
    )
    db.session.add(score)
    db.session.flush()
    return score


def submit_score(player_id: int, game_mode: str, points: int, kills: int = 0, deaths: int = 0,
                 time_played: float = 0.0, difficulty_level: int = 1) -> Score:
    """Record a score and keep the per-(player, mode) high score flag consistent.

    The new score takes the flag only when it beats every existing score for
    the same player and game mode; the previous holder loses it.
    """
    attempts = max(1, int(current_app.config.get('SCORE_SUBMIT_RETRIES', 3)))
    for attempt in range(1, attempts + 1):
        with _serialized(player_id, game_mode):
            try:
                score = _record_score(
                    player_id, game_mode, points,
                    kills=kills, deaths=deaths,
                    time_played=time_played, difficulty_level=difficulty_level,
                )
                db.session.commit()
            except IntegrityError:
                db.session.rollback()
                current_app.logger.warning(
                    f"[score] high score collision player={player_id} mode={game_mode} attempt={attempt}/{attempts}"
                )
                continue
        current_app.logger.info(
            f"[score] player={player_id} mode={game_mode} points={points} high={score.is_high_score}"
        )
        return score
    raise Internal(f"score submission for player={player_id} mode={game_mode} kept colliding")


def _promote_best(player_id: int, game_mode: str) -> Optional[Score]:
    best = (
        Score.query.filter_by(player_id=player_id, game_mode=game_mode)
        .order_by(Score.points.desc(), Score.achieved_at.asc(), Score.id.asc())
        .first()
    )
    if best is not None:
        best.is_high_score = True
    return best


def remove_score(score: Score) -> None:
    """Delete a score; if it held the high score flag, the next best inherits it."""
    player_id, game_mode = score.player_id, score.game_mode
    with _serialized(player_id, game_mode):
        _lock_player(player_id)
        was_high = score.is_high_score
        db.session.delete(score)
        db.session.flush()
        promoted = _promote_best(player_id, game_mode) if was_high else None
        db.session.commit()
    if promoted is not None:
        current_app.logger.info(
            f"[score] high score for player={player_id} mode={game_mode} passed to score={promoted.id}"
        )


def get_leaderboard(game_mode: str, top: Optional[int] = None) -> List[dict]:
    """Best scores for ``game_mode`` (case-insensitive), ranked from 1.

    Ties on points are ordered by who got there first.
    """
    cfg = current_app.config
    limit = clamp_size(top, int(cfg.get('LEADERBOARD_DEFAULT_TOP', 10)), int(cfg.get('LEADERBOARD_MAX_TOP', 100)))
    rows = (
        db.session.query(Score, Player.name)
        .join(Player, Score.player_id == Player.id)
        .filter(db.func.lower(Score.game_mode) == game_mode.lower())
        .order_by(Score.points.desc(), Score.achieved_at.asc(), Score.id.asc())
        .limit(limit)
        .all()
    )
    current_app.logger.debug(f"[leaderboard] mode={game_mode} top={limit} entries={len(rows)}")
    return [
        {
            'rank': rank,
            'playerName': player_name,
            'points': score.points,
            'kills': score.kills,
            'deaths': score.deaths,
            'timePlayed': score.time_played,
            'difficultyLevel': score.difficulty_level,
            'achievedAt': score.achieved_at.isoformat(),
        }
        for rank, (score, player_name) in enumerate(rows, start=1)
    ]
