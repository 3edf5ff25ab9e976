from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from propdoc.database import get_db
from propdoc.dependencies import get_current_user
from propdoc.exceptions import NotFoundError
from propdoc.schemas.template import TemplateInput, TemplateUpdateInput, TemplateOutput
from propdoc.services import template_service
from propdoc.services.n8n_service import N8nGateway, get_gateway

router = APIRouter(prefix="/api/templates", tags=["Templates"], dependencies=[Depends(get_current_user)])

@router.get("", response_model=List[TemplateOutput])
def list_templates(db: Session = Depends(get_db)):
    return template_service.list_templates(db)

@router.post("", status_code=status.HTTP_201_CREATED, response_model=TemplateOutput)
async def create_template(
    payload: TemplateInput,
    db: Session = Depends(get_db),
    gateway: N8nGateway = Depends(get_gateway),
):
    """
    Creates a template and forwards it to n8n (create-template).

    Example payload:
    {
      "name": "Standard Sales Agreement",
      "documentType": "Sales Contract",
      "content": "<p>{{buyerName}} buys from {{sellerName}}</p>"
    }
    """
    return await template_service.create_template(db, gateway, payload)

@router.get("/{template_id}", response_model=TemplateOutput)
def get_template(template_id: int, db: Session = Depends(get_db)):
    try:
        return template_service.get_template(db, template_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.patch("/{template_id}", response_model=TemplateOutput)
def update_template(template_id: int, payload: TemplateUpdateInput, db: Session = Depends(get_db)):
    try:
        return template_service.update_template(db, template_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
