# Overview: Service-layer operations for partners.

from ..extensions import db
from ..models import Partner
from ..validation import ModelValidationPolicy, NotFoundError, ValidationError, validate_payload


PARTNER_POLICY = ModelValidationPolicy(
    writable_fields={"name", "contact_person", "email", "phone"},
    required_on_create={"name"},
)


def create_partner(payload: dict) -> Partner:
    cleaned = validate_payload(model=Partner, payload=payload, policy=PARTNER_POLICY)

    if db.session.query(Partner).filter_by(name=cleaned["name"]).first():
        raise ValidationError(f"Partner '{cleaned['name']}' already exists")

    partner = Partner(**cleaned)
    db.session.add(partner)
    db.session.commit()
    return partner


def list_partners(include_inactive: bool = False) -> list[Partner]:
    query = db.session.query(Partner)
    if not include_inactive:
        query = query.filter(Partner.is_active.is_(True))
    return query.order_by(Partner.name).all()


def get_partner(partner_id: int) -> Partner:
    partner = db.session.get(Partner, partner_id)
    if partner is None:
        raise NotFoundError(f"Partner {partner_id} not found")
    return partner
