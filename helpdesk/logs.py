"""
Logging setup for the help-desk service.

Modules log through logging.getLogger(__name__); this only wires the root
handler once, at application startup.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
HANDLER_NAME = "helpdesk"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if not any(h.get_name() == HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    logging.getLogger("helpdesk").setLevel(level.upper())
