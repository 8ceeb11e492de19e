# ezgest/db/company_db.py
from typing import List, Optional
from bson import ObjectId
from pymongo.database import Database


def get_company_by_id(db: Database, company_id: ObjectId) -> Optional[dict]:
    return db.companies.find_one({"_id": company_id})


def get_company_by_invite_code(db: Database, invite_code: str) -> Optional[dict]:
    return db.companies.find_one({"inviteCode": invite_code})


def get_companies_by_ids(db: Database, company_ids: List[ObjectId]) -> List[dict]:
    if not company_ids:
        return []
    return list(db.companies.find({"_id": {"$in": company_ids}}))


def invite_code_exists(db: Database, invite_code: str) -> bool:
    return db.companies.count_documents({"inviteCode": invite_code}, limit=1) > 0


def create_company(db: Database, name: str, invite_code: str, owner: str) -> ObjectId:
    result = db.companies.insert_one({
        "name": name,
        "inviteCode": invite_code,
        "owner": owner,
    })
    return result.inserted_id
