import logging
from sqlalchemy.orm import Session
from propdoc.models.document import Document, DocumentStatus
from propdoc.models.template import Template
from propdoc.services.auth_service import create_user, get_user_by_email
from propdoc.services.renderer import normalize_metadata

ADMIN_EMAIL = "admin@example.com"

SALES_AGREEMENT = (
    "<h1>Sales Agreement</h1>"
    "<p>This agreement is made at {{agreementPlace}} on {{agreementDay}} {{agreementMonth}} {{agreementYear}} "
    "between {{sellerName}} (the Seller) and {{buyerName}} (the Buyer).</p>"
    "<p>The Seller agrees to sell the property at {{propertyAddress}} for {{saleAmount}}.</p>"
)

def seed_database(db: Session) -> bool:
    """Create the admin user, a template and a document on an empty database."""
    if get_user_by_email(db, ADMIN_EMAIL):
        return False

    create_user(db, ADMIN_EMAIL, "admin123", "Admin User")
    logging.info("Seeded admin user")

    template = Template(name="Standard Sales Agreement", document_type="Sales Contract", content=SALES_AGREEMENT)
    db.add(template)
    db.commit()
    db.refresh(template)
    logging.info("Seeded template")

    document = Document(
        template_id=template.id,
        meta=normalize_metadata({"buyerName": "John Doe", "sellerName": "Jane Smith", "price": 500000}),
        status=DocumentStatus.PENDING,
    )
    db.add(document)
    db.commit()
    logging.info("Seeded document")
    return True
