"""
Typed client library for the v4 REST API of the collaboration platform

The ``Client`` class is the single handle through which all API operations
are executed. Every operation returns a tuple of the typed result and the
``Response`` metadata of the call, which carries the status code, the
request ID, the ETag, the server version and the error of the call, if any.
"""

from .base import Response
from .client import Client
from .errors import ApplicationError, ClientError, DecodeAmbiguityError, TransportError
from .version import __version__
