"""
Collab client library containing logging helper functionality
"""

import re
import logging


class NoDebugFilter(logging.Filter):
    """
    Logging filter that filters out any DEBUG message for the specified logger or handler
    """

    def filter(self, record: logging.LogRecord) -> int:
        if super().filter(record):
            return record.levelno > logging.DEBUG
        return True


class TokenRedactingFilter(logging.Filter):
    """
    Logging filter that masks session tokens in authorization-like header values

    Records are never dropped by this filter, only their message gets rewritten.
    """

    PATTERN = re.compile(r"((?:Authorization|Token)['\"]?\s*[:=]\s*['\"]?(?:Bearer |Token )?)[\w\-.~+/]+=*", re.IGNORECASE)
    REPLACEMENT = r"\1***"

    def filter(self, record: logging.LogRecord) -> int:
        message = record.getMessage()
        redacted = self.PATTERN.sub(self.REPLACEMENT, message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True
