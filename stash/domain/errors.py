# stash/domain/errors.py
"""
Domain errors raised by services and the authorization gate.

Every error carries the HTTP status it maps to; the handlers registered in
``stash.main`` turn them into ``{"msg": ...}`` responses.
"""


class StashError(Exception):
    status_code = 500

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg


class ValidationError(StashError):
    status_code = 400


class Unauthenticated(StashError):
    status_code = 401


class Forbidden(StashError):
    status_code = 403


class NotFound(StashError):
    status_code = 404


class InvalidState(StashError):
    status_code = 400


class UpstreamFailure(StashError):
    """Store or payment processor failure. The message is never shown to the client."""

    status_code = 500


class InvalidSignature(Unauthenticated):
    """Webhook payload failed verification. Answered as a 400, like the processor expects."""

    status_code = 400
