# ezgest/models/users.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class RegisterRequest(BaseModel):
    """Registration body. Fields are optional so that missing ones are
    reported as ``success: false`` rather than a 422."""
    nome: Optional[str] = None
    cognome: Optional[str] = None
    dob: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class User(BaseModel):
    """Public view of a user document; never carries password material"""
    id: str
    email: str
    nome: Optional[str] = None
    cognome: Optional[str] = None
    dob: Optional[str] = None
    companies: List[str] = Field(default_factory=list)
    createdAt: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: dict) -> "User":
        # Corrupt membership entries are skipped, as in the company listing
        companies = doc.get("companies")
        if not isinstance(companies, list):
            companies = []
        return cls(
            id=str(doc["_id"]),
            email=doc["email"],
            nome=doc.get("nome"),
            cognome=doc.get("cognome"),
            dob=doc.get("dob"),
            companies=[company for company in companies if isinstance(company, str)],
            createdAt=doc.get("createdAt"),
        )


class TokenClaims(BaseModel):
    """Claims carried by a session token"""
    email: str
    nome: Optional[str] = None
    cognome: Optional[str] = None
    id: str
    exp: Optional[int] = None

    @classmethod
    def for_user(cls, doc: dict) -> "TokenClaims":
        return cls(
            email=doc["email"],
            nome=doc.get("nome"),
            cognome=doc.get("cognome"),
            id=str(doc["_id"]),
        )


class AuthResponse(BaseModel):
    """Login / registration outcome, always sent with HTTP 200"""
    success: bool
    message: Optional[str] = None
    token: Optional[str] = None
    user: Optional[User] = None
