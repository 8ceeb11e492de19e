# ezgest/api/routes/companies.py
from typing import List
from fastapi import APIRouter, Depends, Query
from pymongo.database import Database

from ...models.tenant import Company, CreateCompanyRequest, JoinCompanyRequest, Member, SuccessResponse
from ...services.tenant_service import tenant_service
from ..dependencies import company_scope, current_email, get_db

router = APIRouter()


@router.get("/user/companies", response_model=List[Company])
def list_user_companies(email: str = Depends(current_email), db: Database = Depends(get_db)):
    """Companies the caller belongs to"""
    return tenant_service.list_memberships(db, email)


@router.post("/azienda/crea", response_model=SuccessResponse)
def create_company(
    request: CreateCompanyRequest,
    email: str = Depends(current_email),
    db: Database = Depends(get_db)
):
    company = tenant_service.create(db, request.companyName, email)
    return SuccessResponse(company=company)


@router.post("/azienda/unisciti", response_model=SuccessResponse)
def join_company(
    request: JoinCompanyRequest,
    email: str = Depends(current_email),
    db: Database = Depends(get_db)
):
    company = tenant_service.join(db, request.inviteCode, email)
    return SuccessResponse(company=company)


@router.get("/azienda/membri", response_model=List[Member])
def list_company_members(company_id: str = Depends(company_scope), db: Database = Depends(get_db)):
    return tenant_service.list_members(db, company_id)


@router.delete("/azienda/membri", response_model=SuccessResponse, response_model_exclude_none=True)
def remove_company_member(
    company_id: str = Depends(company_scope),
    userId: str = Query(...),
    email: str = Depends(current_email),
    db: Database = Depends(get_db)
):
    """Owner-only: drop a member from the company"""
    tenant_service.remove_member(db, company_id, userId, email)
    return SuccessResponse()
