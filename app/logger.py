"""
Structured logging with PHI masking.
Every module logs through this logger so that patient phone numbers,
e-mail addresses and credentials never reach the console in clear text.
"""
import logging
import re
import sys

from app.config import settings


# ── PHI redaction patterns ──────────────────────────────

PHI_PATTERNS = [
    # Phone numbers: (555) 200-0001, 555-200-0001, 5552000001
    (re.compile(r'\(\d{3}\)\s*\d{3}-\d{4}'), '[PHONE_REDACTED]'),
    (re.compile(r'\b\d{3}-\d{3}-\d{4}\b'), '[PHONE_REDACTED]'),
    (re.compile(r'\b\d{10}\b'), '[PHONE_REDACTED]'),
    # E-mail addresses
    (re.compile(r'[\w.+-]+@[\w-]+\.[\w.-]+'), '[EMAIL_REDACTED]'),
    # Credentials in key=value or key: value form
    (re.compile(r'(password|passwd|pwd)\s*[=:]\s*\S+', re.IGNORECASE), r'\1=[REDACTED]'),
]


class PHIMaskingFilter(logging.Filter):
    """Logging filter that masks PHI data in log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = mask_phi(record.msg)
        if record.args:
            if isinstance(record.args, dict):
                record.args = {
                    k: mask_phi(v) if isinstance(v, str) else v
                    for k, v in record.args.items()
                }
            elif isinstance(record.args, tuple):
                record.args = tuple(
                    mask_phi(a) if isinstance(a, str) else a
                    for a in record.args
                )
        return True


def mask_phi(text: str) -> str:
    """Redact PHI patterns from a string."""
    for pattern, replacement in PHI_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def setup_logger(name: str = "clinic_ops", level: int | str = logging.INFO) -> logging.Logger:
    """
    Create and configure the application logger with PHI masking.
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers on reload
    if logger.handlers:
        return logger

    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)
    handler.addFilter(PHIMaskingFilter())

    logger.addHandler(handler)
    logger.propagate = False

    return logger


# Global logger instance
logger = setup_logger(level=settings.LOG_LEVEL.upper())
