import json
import logging

from exercisely.exceptions import BadRequest, Forbidden, NotFound, Unauthenticated
from exercisely.logging import LogLevelContext, api_event_extras, handler_logging
from exercisely.utils.json_encoder import DynamoJsonEncoder

logger = logging.getLogger()

# domain error kind -> (http status code, error code)
ERROR_RESPONSES = (
    (NotFound, 404, 'NOT_FOUND'),
    (Forbidden, 403, 'FORBIDDEN'),
    (Unauthenticated, 401, 'UNAUTHORIZED'),
    (BadRequest, 400, 'BAD_REQUEST'),
)


def get_caller_user_id(event):
    "The subject claim of the token the http api's authorizer already verified, if any"
    claims = (((event.get('requestContext') or {}).get('authorizer') or {}).get('jwt') or {}).get('claims') or {}
    return claims.get('sub')


def response(status_code, data):
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps(data, cls=DynamoJsonEncoder),
    }


def handler(required_query_params=None, authenticated=True, status_code=200):
    """
    Decorator for http api handlers.

    The wrapped function is called as `func(event, context, caller_user_id, *query_param_values)`,
    where `caller_user_id` is None for anonymous callers of unauthenticated handlers.
    Its return value becomes the json body of the response. Domain errors become 4XX
    responses, anything else is logged and propagates to the lambda runtime.
    """
    required_query_params = required_query_params or []

    def decorator(func):
        def inner(event, context):
            caller_user_id = get_caller_user_id(event)
            if authenticated and not caller_user_id:
                raise Unauthenticated('Missing user identity')
            extra_args = []
            query_string_params = event.get('queryStringParameters') or {}
            for qp in required_query_params:
                if not query_string_params.get(qp):
                    raise BadRequest(f'Query parameter `{qp}` is required')
                extra_args.append(query_string_params[qp])
            return func(event, context, caller_user_id, *extra_args)

        @handler_logging(event_to_extras=api_event_extras)
        def outer(event, context):
            with LogLevelContext(logger, logging.INFO):
                logger.info(f'Handling `{func.__name__}` event', extra={'event': event})
            try:
                data = inner(event, context)
            except (NotFound, Forbidden, Unauthenticated, BadRequest) as err:
                code, error_code = next((code, ec) for kind, code, ec in ERROR_RESPONSES if isinstance(err, kind))
                logger.warning(f'Client error from `{func.__name__}`: {err}')
                return response(code, {'message': str(err), 'code': error_code})
            return response(status_code, data)

        outer.__name__ = func.__name__
        return outer

    return decorator
