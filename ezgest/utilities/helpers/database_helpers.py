# ezgest/utilities/helpers/database_helpers.py
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional
from bson import ObjectId
from loguru import logger


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Parse a store identifier, returning None when it is not one"""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def parse_object_ids(values: Iterable[Any]) -> List[ObjectId]:
    """Parse identifiers, silently dropping the ones that are corrupt"""
    parsed = []
    for value in values:
        object_id = to_object_id(value)
        if object_id is None:
            logger.debug(f"Dropping invalid identifier: {value!r}")
            continue
        parsed.append(object_id)
    return parsed


def serialize_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Make a Mongo document JSON friendly (ObjectId -> str, datetime -> ISO)"""
    serialized = {}
    for key, value in doc.items():
        if isinstance(value, ObjectId):
            serialized[key] = str(value)
        elif isinstance(value, datetime):
            serialized[key] = value.isoformat()
        elif isinstance(value, dict):
            serialized[key] = serialize_document(value)
        elif isinstance(value, list):
            serialized[key] = [
                serialize_document(item) if isinstance(item, dict)
                else str(item) if isinstance(item, ObjectId)
                else item
                for item in value
            ]
        else:
            serialized[key] = value
    return serialized
