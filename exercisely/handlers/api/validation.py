"""
Parsing and shape checks on what arrives in an http api event,
before anything is handed to a manager.
"""
import json

from exercisely.exceptions import BadRequest
from exercisely.models.exercise.manager import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from exercisely.models.list.enums import ListVisibility


def get_json_body(event):
    body = event.get('body') or '{}'
    try:
        data = json.loads(body)
    except ValueError as err:
        raise BadRequest('Request body is not valid json') from err
    if not isinstance(data, dict):
        raise BadRequest('Request body must be a json object')
    return data


def get_query_params(event):
    return event.get('queryStringParameters') or {}


def get_path_param(event, name):
    value = (event.get('pathParameters') or {}).get(name)
    if not value:
        raise BadRequest(f'Path parameter `{name}` is required')
    return value


def require_string(data, name):
    value = data.get(name)
    if not isinstance(value, str) or not value:
        raise BadRequest(f'`{name}` is required and must be a non-empty string')
    return value


def optional_string(data, name):
    value = data.get(name)
    if value is not None and not isinstance(value, str):
        raise BadRequest(f'`{name}` must be a string')
    return value


def optional_string_list(data, name):
    value = data.get(name)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise BadRequest(f'`{name}` must be a list of strings')
    return value


def optional_visibility(data, name='visibility'):
    value = optional_string(data, name)
    if value is not None and value not in ListVisibility._ALL:
        raise BadRequest(f'`{name}` must be one of: ' + ', '.join(ListVisibility._ALL))
    return value


def positive_int(params, name, default, maximum=None):
    raw = params.get(name)
    if raw is None or raw == '':
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError) as err:
        raise BadRequest(f'`{name}` must be an integer') from err
    if value < 1:
        raise BadRequest(f'`{name}` must be at least 1')
    if maximum is not None and value > maximum:
        raise BadRequest(f'`{name}` must be at most {maximum}')
    return value


def get_page_params(params):
    "(page, page_size) from query parameters"
    page = positive_int(params, 'page', 1)
    page_size = positive_int(params, 'pageSize', DEFAULT_PAGE_SIZE, maximum=MAX_PAGE_SIZE)
    return page, page_size
