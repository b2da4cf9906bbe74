"""
Preview host: editable preview state, live preview panes and the export
action. Front ends bind their form inputs to the setters and connect to
the signals.
"""

from .preview_host import PreviewHost, PreviewPane
from .logging_utils import QueueLogHandler, attach_queue_handler, detach_queue_handler

__all__ = [
    "PreviewHost",
    "PreviewPane",
    "QueueLogHandler",
    "attach_queue_handler",
    "detach_queue_handler",
]
