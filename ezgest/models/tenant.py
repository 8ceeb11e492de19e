# ezgest/models/tenant.py
from pydantic import BaseModel
from typing import Optional


class Company(BaseModel):
    """Tenant record as returned to members"""
    id: str
    name: str
    inviteCode: str
    owner: str

    @classmethod
    def from_document(cls, doc: dict) -> "Company":
        return cls(
            id=str(doc["_id"]),
            name=doc.get("name") or "",
            inviteCode=doc.get("inviteCode") or "",
            owner=doc.get("owner") or "",
        )


class CreateCompanyRequest(BaseModel):
    companyName: Optional[str] = None


class JoinCompanyRequest(BaseModel):
    inviteCode: Optional[str] = None


class Member(BaseModel):
    """One entry of a tenant's derived roster"""
    id: str
    email: str
    nome: Optional[str] = None
    cognome: Optional[str] = None
    isOwner: bool = False


class SuccessResponse(BaseModel):
    success: bool = True
    company: Optional[Company] = None
