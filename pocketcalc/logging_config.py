from __future__ import annotations
import logging

HANDLER_NAME = "pocketcalc-console"


def setup_logging(level: str = "INFO") -> None:
    """
    Configure application logging.
    Streamlit reruns the script on every interaction; the console handler is
    only installed once per process.
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    if any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        return

    console = logging.StreamHandler()
    console.set_name(HANDLER_NAME)
    console.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s"))
    logger.addHandler(console)

    logger.info("Logging initialized at level %s", level)
