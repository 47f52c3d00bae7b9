from .base import Transport
from .console import ConsoleTransport
from .recording import RecordingTransport

__all__ = ["Transport", "ConsoleTransport", "RecordingTransport"]
