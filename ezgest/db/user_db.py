# ezgest/db/user_db.py
from datetime import datetime, timezone
from typing import List, Optional
from bson import ObjectId
from pymongo.database import Database

# Credentials are never sent back to clients
PUBLIC_PROJECTION = {"password": 0, "salt": 0}


def get_user_by_email(db: Database, email: str) -> Optional[dict]:
    return db.users.find_one({"email": email})


def get_user_by_id(db: Database, user_id: ObjectId) -> Optional[dict]:
    return db.users.find_one({"_id": user_id})


def create_user(db: Database, nome: str, cognome: str, dob: str, email: str,
                password_digest: str, salt: str) -> ObjectId:
    result = db.users.insert_one({
        "nome": nome,
        "cognome": cognome,
        "dob": dob,
        "email": email,
        "password": password_digest,
        "salt": salt,
        "companies": [],
        "createdAt": datetime.now(timezone.utc),
    })
    return result.inserted_id


def add_company(db: Database, email: str, company_id: str) -> bool:
    """$addToSet: adding an existing membership is a no-op"""
    result = db.users.update_one({"email": email}, {"$addToSet": {"companies": company_id}})
    return result.matched_count == 1


def remove_company(db: Database, user_id: ObjectId, company_id: str) -> bool:
    result = db.users.update_one({"_id": user_id}, {"$pull": {"companies": company_id}})
    return result.modified_count == 1


def get_members(db: Database, company_id: str) -> List[dict]:
    """Members are derived from the users whose companies contain the id"""
    return list(db.users.find({"companies": company_id}, PUBLIC_PROJECTION).sort("email", 1))
