"""data module"""

from .base import DocumentStoreAdapter
from .memory import InMemoryDocumentStore
from .serializer import build_where, document_fields, document_serializer, parse_where
import logging

logger = logging.getLogger(__name__)


# Conditional import - only available with the `mongo` extra installed
try:
    from .mongodb import MongoDocumentStore, mongo_store_from_config
except ImportError:
    logger.info("MongoDocumentStore not loaded - probably, missing dependencies")
    pass
