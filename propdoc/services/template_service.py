import logging
from sqlalchemy.orm import Session
from propdoc.exceptions import NotFoundError
from propdoc.models.template import Template
from propdoc.schemas.template import TemplateInput, TemplateUpdateInput, TemplateOutput
from propdoc.services.audit_service import record_gateway_result
from propdoc.services.n8n_service import N8nGateway

def list_templates(db: Session):
    return db.query(Template).order_by(Template.created_at.desc(), Template.id.desc()).all()

def get_template(db: Session, template_id: int) -> Template:
    template = db.query(Template).filter(Template.id == template_id).first()
    if not template:
        raise NotFoundError("Template not found", "template", template_id)
    return template

async def create_template(db: Session, gateway: N8nGateway, payload: TemplateInput) -> Template:
    template = Template(name=payload.name, document_type=payload.document_type, content=payload.content)
    db.add(template)
    db.commit()
    db.refresh(template)
    logging.info(f"Template {template.id} created: {template.name}")

    # n8n keeps its own copy of the template; a failure here is only logged
    body = TemplateOutput.model_validate(template).model_dump(by_alias=True, mode="json")
    result = await gateway.create_template(body)
    record_gateway_result(db, None, result)
    return template

def update_template(db: Session, template_id: int, payload: TemplateUpdateInput) -> Template:
    """Partial update. Documents render against the current content, so edits show up on them too."""
    template = get_template(db, template_id)
    for field, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(template, field, value)
    db.commit()
    db.refresh(template)
    return template
