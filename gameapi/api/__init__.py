from flask import jsonify, request, url_for
from flask_login import current_user

from gameapi.errors import ValidationError
from gameapi.models import INT_MAX
from gameapi.schemas import parse


def current_caller():
    """The authenticated Caller for this request (routes are login_required)."""
    return current_user._get_current_object()


def payload(schema, partial=False):
    data = request.get_json(silent=True)
    if data is None:
        raise ValidationError('Request body must be JSON')
    return parse(schema, data, partial=partial)


def int_arg(name):
    raw = request.args.get(name)
    if raw is None or raw == '':
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f'{name} must be an integer')
    if abs(value) > INT_MAX:
        raise ValidationError(f'{name} is out of range')
    return value


def flag_arg(name):
    return (request.args.get(name) or '').strip().lower() in ('1', 'true', 'yes', 'on')


def page_response(page):
    response = jsonify([row.to_dict() for row in page.items])
    response.headers['X-Total-Count'] = str(page.total)
    response.headers['X-Page'] = str(page.page)
    response.headers['X-Page-Size'] = str(page.page_size)
    return response


def created_response(row, endpoint, **values):
    response = jsonify(row.to_dict())
    response.status_code = 201
    response.headers['Location'] = url_for(endpoint, **values)
    return response


def no_content():
    return '', 204
