"""
Custom exception classes for the application.

This module defines the exceptions raised by the click hub core. All of
them are recoverable at the session or dispatcher level; none of them is
allowed to take down the server loop.
"""


class AppException(Exception):
    """
    Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str):
        """
        Initialize the exception with a message.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)


class MessageDecodeError(AppException):
    """
    Inbound frame could not be decoded.

    Raised for malformed JSON, non UTF-8 binary frames and unknown `type`
    tags. The session drops the frame and keeps reading.
    """


class SinkClosedError(AppException):
    """
    Outbound queue no longer accepts frames.

    Raised when enqueueing on a connection whose session is already
    tearing down.
    """


class DuplicateConnectionError(AppException):
    """
    Connection id is already registered.

    Indicates an id collision; every accepted connection must get a
    fresh id.
    """


class ChannelClosedError(AppException):
    """
    Peer closed the WebSocket.

    Raised by a message channel when the stream ends; ends the session's
    inbound duty.
    """
