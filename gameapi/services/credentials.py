from flask import current_app
from sqlalchemy.exc import IntegrityError

from gameapi import db
from gameapi.errors import Conflict, Unauthenticated
from gameapi.models import ROLE_PLAYER, User, utcnow


def register(username: str, email: str, password: str) -> User:
    """Create a user with the Player role.

    Username and email must both be unused (exact, case-sensitive match).
    """
    if User.query.filter_by(username=username).first():
        raise Conflict('Username already exists')
    if User.query.filter_by(email=email).first():
        raise Conflict('Email already exists')

    user = User(username=username, email=email, role=ROLE_PLAYER, created_at=utcnow())
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same name/email
        db.session.rollback()
        raise Conflict('Username or email already exists')

    current_app.logger.info(f"[auth] registered user={user.id} username={user.username}")
    return user


def login(username: str, password: str) -> User:
    user = User.query.filter_by(username=username).first()
    if not user or not user.check_password(password):
        current_app.logger.info(f"[auth] failed login username={username}")
        raise Unauthenticated('Invalid username or password')

    user.last_login = utcnow()
    db.session.commit()
    current_app.logger.info(f"[auth] login user={user.id} username={user.username}")
    return user
