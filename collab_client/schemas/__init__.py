"""
Collab client schema definitions

The domain schemas mirror the JSON objects of the platform's v4 API. Every
field defaults to its zero value, since the server owns the lifecycle of
those objects and omits or blanks fields freely (e.g. the password of a user
is always blank in responses). Objects that should be created only need the
fields required by the server, the identifier is always assigned remotely.

Request bodies that are not domain objects (e.g. for logging in or changing
a password) have their own small schemas with a ``Request`` suffix, e.g.
``LoginRequest`` or ``PasswordUpdateRequest``.

This package also contains the ``config`` module, but it's not
exported by default, since it's only used by the settings provider.
"""

from .bases import *
from .errors import *
from .bodies import *
