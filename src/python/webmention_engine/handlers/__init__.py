from ._discovery import EndpointDiscoveryEngine
from ._handler import WebmentionsHandler
from ._notifier import NotificationDispatcher
from ._parser import WebmentionsRequestParser
from ._verification import VerificationEngine

__all__ = [
    "EndpointDiscoveryEngine",
    "NotificationDispatcher",
    "VerificationEngine",
    "WebmentionsHandler",
    "WebmentionsRequestParser",
]
