import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def configure_logging(level="INFO"):
    """Attach a single stream handler to the root logger."""
    root = logging.getLogger()
    if not any(getattr(h, "_tenant_admin", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._tenant_admin = True
        root.addHandler(handler)
    root.setLevel(level)
