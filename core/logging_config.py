"""
Logging-Konfiguration für den CityJSON-Codec.
"""
import logging
import sys
from contextlib import contextmanager

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def setup_logging(level: int = logging.INFO) -> None:
    """Konfiguriert das Logging-System.

    Args:
        level: Logging-Level (default: INFO)
    """
    # Prüfe, ob Logger bereits konfiguriert ist
    root_logger = logging.getLogger()
    if root_logger.handlers:
        root_logger.setLevel(level)
        return

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    root_logger.debug("🔧 Logging-System initialisiert")

@contextmanager
def LoggedOperation(operation_name: str, logger: logging.Logger = None):
    """Kontext-Manager für geloggte Operationen.

    Args:
        operation_name: Name der Operation
        logger: Optionaler Logger, sonst der Logger dieses Moduls
    """
    logger = logger or logging.getLogger(__name__)
    logger.info(f"🔄 Starte: {operation_name}")
    try:
        yield
    except Exception as e:
        logger.error(f"❌ Fehler bei {operation_name}: {str(e)}")
        raise
    else:
        logger.info(f"✅ Beendet: {operation_name}")
