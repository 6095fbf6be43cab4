from flask import Blueprint, current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError

from gameapi import db

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the game dashboard API!'})

@main.route('/api/health')
def health_check():
    database = 'ok'
    try:
        db.session.execute(db.text('SELECT 1'))
    except SQLAlchemyError as exc:
        current_app.logger.error(f"[health] database check failed: {exc}")
        db.session.rollback()
        database = 'unavailable'
    status = 'ok' if database == 'ok' else 'error'
    return jsonify({'status': status, 'services': {'database': database}}), (200 if status == 'ok' else 503)
