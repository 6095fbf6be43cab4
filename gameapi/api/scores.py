from flask import Blueprint, jsonify, request
from flask_login import login_required

from gameapi.api import created_response, current_caller, flag_arg, int_arg, no_content, page_response, payload
from gameapi.schemas import ScoreCreate
from gameapi.services import ranking
from gameapi.services.resources import scores as service

scores = Blueprint('scores', __name__)


@scores.route('/leaderboard/<string:game_mode>', methods=['GET'])
def get_leaderboard(game_mode):
    """Public leaderboard for a game mode; no session needed."""
    return jsonify(ranking.get_leaderboard(game_mode, int_arg('top')))


@scores.route('', methods=['GET'])
@login_required
def list_scores():
    page = service.list(
        current_caller(),
        page=int_arg('page'),
        page_size=int_arg('pageSize'),
        player_id=int_arg('playerId'),
        game_mode=request.args.get('gameMode'),
        high_scores_only=flag_arg('highScoresOnly'),
    )
    return page_response(page)


@scores.route('/<int:score_id>', methods=['GET'])
@login_required
def get_score(score_id):
    return jsonify(service.get(current_caller(), score_id).to_dict())


@scores.route('', methods=['POST'])
@login_required
def submit_score():
    score = service.create(current_caller(), payload(ScoreCreate))
    return created_response(score, 'scores.get_score', score_id=score.id)


@scores.route('/<int:score_id>', methods=['DELETE'])
@login_required
def delete_score(score_id):
    service.delete(current_caller(), score_id)
    return no_content()
