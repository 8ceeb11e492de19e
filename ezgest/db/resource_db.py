# ezgest/db/resource_db.py
"""Tenant-scoped collections: every query is filtered by companyId."""
from datetime import datetime, timezone
from typing import List
from bson import ObjectId
from pymongo import DESCENDING
from pymongo.database import Database

# Fields a client body may never set
PROTECTED_FIELDS = ("_id", "companyId")


def _clean(body: dict) -> dict:
    return {key: value for key, value in body.items() if key not in PROTECTED_FIELDS}


def list_documents(db: Database, collection: str, company_id: str,
                   newest_first: bool = False) -> List[dict]:
    cursor = db[collection].find({"companyId": company_id})
    if newest_first:
        cursor = cursor.sort("createdAt", DESCENDING)
    return list(cursor)


def insert_document(db: Database, collection: str, company_id: str, body: dict,
                    timestamped: bool = False) -> ObjectId:
    document = {**_clean(body), "companyId": company_id}
    if timestamped:
        document["createdAt"] = datetime.now(timezone.utc)
    return db[collection].insert_one(document).inserted_id


def update_document(db: Database, collection: str, company_id: str,
                    document_id: ObjectId, body: dict) -> bool:
    changes = _clean(body)
    if not changes:
        return db[collection].count_documents({"_id": document_id, "companyId": company_id}, limit=1) > 0
    result = db[collection].update_one(
        {"_id": document_id, "companyId": company_id},
        {"$set": changes},
    )
    return result.matched_count == 1


def delete_document(db: Database, collection: str, company_id: str,
                    document_id: ObjectId) -> bool:
    result = db[collection].delete_one({"_id": document_id, "companyId": company_id})
    return result.deleted_count == 1

