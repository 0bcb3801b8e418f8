import logging
import os

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

class SafeLabelFormatter(logging.Formatter):
    def format(self, record):
        if not hasattr(record, 'label'):
            record.label = '-'
        return super().format(record)

class LabelLoggerAdapter(logging.LoggerAdapter):
    def __init__(self, logger, label):
        super().__init__(logger, {'label': label})

    def process(self, msg, kwargs):
        # Formatter already prints the module, so only the label goes in front
        return f"{self.extra['label']}: {msg}", kwargs

def _resolve_level(level_name: str) -> int:
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO

def new_logger(label, module_name=None):
    """
    Build a labelled logger for the calling module.

    Every module gets one stream handler; the label identifies the endpoint
    or job inside the module, e.g. new_logger("verify_login_code").
    """
    if module_name is None:
        import inspect
        frame = inspect.currentframe()
        try:
            module_name = frame.f_back.f_globals['__name__']
        finally:
            del frame
    logger = logging.getLogger(module_name)
    logger.propagate = False  # Prevent duplicate log messages

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = SafeLabelFormatter(
            fmt='%(asctime)s %(levelname)s %(module)s %(label)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(_resolve_level(LOG_LEVEL))
    return LabelLoggerAdapter(logger, label)
