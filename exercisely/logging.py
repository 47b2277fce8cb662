import functools
import json
import logging

# where lambda unpacks the deployment package
LAMBDA_TASK_ROOT = '/var/task/'


def handler_logging(*args, event_to_extras=None):
    """
    Decorator for lambda handlers. Formats every log line of the invocation as json,
    with whatever `event_to_extras(event)` returns merged in, and logs any exception
    that escapes the handler before letting it propagate.

        @handler_logging
        def my_handler(event, context):

        @handler_logging(event_to_extras=api_event_extras)
        def my_handler(event, context):
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(event, context):
            extras = event_to_extras(event) if callable(event_to_extras) else None

            # the lambda runtime has already installed a handler on the root logger
            logger = logging.getLogger()
            for log_handler in logger.handlers:
                log_handler.setFormatter(CloudWatchFormatter(extras=extras))

            try:
                return func(event, context)
            except Exception as err:
                # logged here as structured json, the runtime then logs it again as a plain traceback
                logger.exception(str(err))
                raise

        return wrapper

    return decorator(args[0]) if args else decorator


def api_event_extras(event):
    "The parts of an http api event worth attaching to every log line"
    request_context = event.get('requestContext') or {}
    claims = ((request_context.get('authorizer') or {}).get('jwt') or {}).get('claims') or {}
    http = request_context.get('http') or {}
    return {
        'method': http.get('method'),
        'path': http.get('path') or event.get('rawPath'),
        'callerUserId': claims.get('sub'),
    }


class LogLevelContext:
    "Temporarily change the level of a logger"

    def __init__(self, logger, level):
        self.logger = logger
        self.level = level

    def __enter__(self):
        self.old_level = self.logger.level
        self.logger.setLevel(self.level)

    def __exit__(self, exc_type, exc_value, traceback):
        self.logger.setLevel(self.old_level)


class CloudWatchFormatter(logging.Formatter):
    "One json object per log record, prefixed so CloudWatch still picks out the level"

    def __init__(self, extras=None, **kwargs):
        self.extras = extras or {}
        super().__init__(**kwargs)

    def format(self, record):
        path = record.pathname
        if path.startswith(LAMBDA_TASK_ROOT):
            path = path[len(LAMBDA_TASK_ROOT) :]

        # set on every record by the lambda runtime, absent when running elsewhere
        request_id = getattr(record, 'aws_request_id', None)

        # message first so it shows in the CloudWatch summary view
        data = {
            'message': record.getMessage(),
            'level': record.levelname,
            'requestId': request_id,
            **self.extras,
            'sourceFile': path,
            'sourceLine': record.lineno,
        }
        if record.exc_info:
            if not record.exc_text:
                record.exc_text = self.formatException(record.exc_info)
            data['exceptionInfo'] = record.exc_text.split('\n')
        if record.stack_info:
            data['stackInfo'] = record.stack_info.split('\n')
        return f'{record.levelname} RequestId: {request_id} Data: {json.dumps(data, default=str)}'
