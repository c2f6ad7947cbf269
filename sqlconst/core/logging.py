import logging
import sys


class ContextFormatter(logging.Formatter):
    """Formatter for pipeline records that may carry the table being generated and its stage."""
    def format(self, record):
        # Records logged outside a table task have neither field
        if not hasattr(record, 'table'):
            record.table = '-'
        if not hasattr(record, 'stage'):
            record.stage = '-'
        return super().format(record)


def configure_logging(level: str = "INFO") -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ContextFormatter(
        "%(asctime)s %(levelname)s %(name)s [table=%(table)s stage=%(stage)s] - %(message)s"
    ))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
    )
