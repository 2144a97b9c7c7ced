import logging

from webmention_engine import Webmention

logger = logging.getLogger(__name__)


def log_mention(mention: Webmention):
    logger.info(
        "Received Webmention from %s to %s", mention.source, mention.target
    )
