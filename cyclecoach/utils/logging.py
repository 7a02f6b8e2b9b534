"""
Structured logging for the coach Lambdas.

Handlers share one Powertools logger so CloudWatch sees a single JSON line
per event, tracebacks included.
"""
import os
import sys
import json
import traceback
from aws_lambda_powertools import Logger

def format_exception(exc_info):
    """
    Flatten a traceback onto one line, frames separated by ' | '.

    Accepts True (use the exception being handled), an exception instance
    or a sys.exc_info() tuple. Returns None when there is nothing to format.
    """
    if exc_info is True:
        exc_info = sys.exc_info()
    elif isinstance(exc_info, BaseException):
        exc_info = (type(exc_info), exc_info, exc_info.__traceback__)

    if exc_info and isinstance(exc_info, tuple) and len(exc_info) == 3:
        try:
            trace = ''.join(traceback.format_exception(*exc_info))
            return trace.replace('\n', ' | ').strip()
        except Exception as e:
            return f"Error formatting exception: {str(e)}"
    return None

class SingleLineLogger(Logger):
    """Powertools logger that attaches tracebacks as a one-line `exception` key."""

    def exception(self, message, *args, **kwargs):
        exc_info = kwargs.pop('exc_info', True)
        extra = kwargs.pop('extra', {})
        extra['exception'] = format_exception(exc_info)
        # Traceback already lives in extra
        kwargs['exc_info'] = False
        kwargs['extra'] = extra
        super().exception(message, *args, **kwargs)

logger = SingleLineLogger(
    service=os.environ.get('POWERTOOLS_SERVICE_NAME', 'cyclecoach'),
    level=os.environ.get('LOG_LEVEL', 'INFO'),
    log_uncaught_exceptions=True,
    json_serializer=json.dumps,
    use_rfc3339=True
)

logger.append_keys(
    region=os.environ.get('AWS_REGION'),
    function=os.environ.get('AWS_LAMBDA_FUNCTION_NAME'),
    version=os.environ.get('AWS_LAMBDA_FUNCTION_VERSION')
)

def log_exception(logger, message, exc_info=None, **kwargs):
    """
    Log an error with the current (or given) traceback at ERROR level.

    Used where a failure is expected and mapped to a response, such as a
    chat reply that could not be generated.
    """
    extra = kwargs.pop('extra', {})
    extra['exception'] = format_exception(exc_info if exc_info else sys.exc_info())
    logger.error(message, extra=extra, **kwargs)
