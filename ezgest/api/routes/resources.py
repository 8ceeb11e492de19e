# ezgest/api/routes/resources.py
"""
Tenant-scoped CRUD. Every route requires ``companyId``; the authorization
gate has already checked membership by the time a handler runs.
"""
from typing import Any, Dict, List
from fastapi import APIRouter, Body, Depends
from bson import ObjectId
from pymongo.database import Database

from ...core.exceptions import NotFoundError
from ...db import resource_db
from ...models.tenant import SuccessResponse
from ...utilities.helpers.database_helpers import serialize_document
from ..dependencies import company_scope, document_id, get_db

router = APIRouter()


def add_crud_routes(path: str, collection: str, writable: bool = True,
                    timestamped: bool = False, newest_first: bool = False) -> None:
    """Attach list/create (and update/delete when ``writable``) to ``path``"""

    def list_documents(company_id: str = Depends(company_scope), db: Database = Depends(get_db)) -> List[Dict[str, Any]]:
        documents = resource_db.list_documents(db, collection, company_id, newest_first=newest_first)
        return [serialize_document(doc) for doc in documents]

    def create_document(
        body: Dict[str, Any] = Body(...),
        company_id: str = Depends(company_scope),
        db: Database = Depends(get_db)
    ) -> SuccessResponse:
        resource_db.insert_document(db, collection, company_id, body, timestamped=timestamped)
        return SuccessResponse()

    router.add_api_route(path, list_documents, methods=["GET"], name=f"list_{collection}")
    router.add_api_route(path, create_document, methods=["POST"], name=f"create_{collection}",
                         response_model=SuccessResponse, response_model_exclude_none=True)

    if not writable:
        return

    def update_document(
        body: Dict[str, Any] = Body(...),
        object_id: ObjectId = Depends(document_id),
        company_id: str = Depends(company_scope),
        db: Database = Depends(get_db)
    ) -> SuccessResponse:
        if not resource_db.update_document(db, collection, company_id, object_id, body):
            raise NotFoundError("Document not found")
        return SuccessResponse()

    def delete_document(
        object_id: ObjectId = Depends(document_id),
        company_id: str = Depends(company_scope),
        db: Database = Depends(get_db)
    ) -> SuccessResponse:
        if not resource_db.delete_document(db, collection, company_id, object_id):
            raise NotFoundError("Document not found")
        return SuccessResponse()

    router.add_api_route(path, update_document, methods=["PUT"], name=f"update_{collection}",
                         response_model=SuccessResponse, response_model_exclude_none=True)
    router.add_api_route(path, delete_document, methods=["DELETE"], name=f"delete_{collection}",
                         response_model=SuccessResponse, response_model_exclude_none=True)


add_crud_routes("/categorie", "categories")
add_crud_routes("/prodotti", "products")
add_crud_routes("/vendite", "sales", writable=False, timestamped=True, newest_first=True)
