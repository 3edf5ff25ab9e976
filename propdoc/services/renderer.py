"""
Template rendering for document previews.

Templates are HTML with ``{{identifier}}`` tokens. A document's metadata is
flattened into a fixed set of well-known keys (``sellerName``,
``propertyAddress``, ``saleAmount``...) and every token is substituted in a
single, non-recursive pass.
"""
import copy
import html
import re
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

# Anything up to the next "}}"; no escape for literal braces
PLACEHOLDER_PATTERN = re.compile(r"\{\{(.*?)\}\}")

MISSING_DATE = "—"

# nested party field -> suffix of the flat key ("seller" + "PAN")
PARTY_FIELDS = {
    "name": "Name",
    "parentName": "ParentName",
    "age": "Age",
    "occupation": "Occupation",
    "address": "Address",
    "pan": "PAN",
    "aadhaar": "Aadhaar",
}

# nested field -> flat key
PROPERTY_FIELDS = {
    "type": "propertyType",
    "address": "propertyAddress",
    "surveyNo": "surveyNo",
    "municipalNo": "municipalNo",
    "area": "area",
    "builtUpArea": "builtUpArea",
    "carpetArea": "carpetArea",
    "boundaryNorth": "boundaryNorth",
    "boundarySouth": "boundarySouth",
    "boundaryEast": "boundaryEast",
    "boundaryWest": "boundaryWest",
}

FINANCIAL_FIELDS = {
    "saleAmount": "saleAmount",
    "saleAmountWords": "saleAmountWords",
    "earnestMoney": "earnestMoney",
    "balanceAmount": "balanceAmount",
    "paymentMode": "paymentMode",
}

# Older clients sent these flat keys under other names
LEGACY_ALIASES = {
    "price": ("financial", "saleAmount"),
}

LOCATION_FIELDS = ["agreementPlace", "stateName", "jurisdictionCity", "arbitrationCity"]

LEGAL_FIELDS = [
    "reraNumber",
    "stampDutyBearer",
    "witness1Name",
    "witness1Address",
    "witness2Name",
    "witness2Address",
]


def _section_fields():
    """Yield (section, nested field, flat key) for every foldable field."""
    for party in ("seller", "buyer"):
        for field, suffix in PARTY_FIELDS.items():
            yield party, field, f"{party}{suffix}"
    for field, flat_key in PROPERTY_FIELDS.items():
        yield "property", field, flat_key
    for field, flat_key in FINANCIAL_FIELDS.items():
        yield "financial", field, flat_key
    for flat_key, (section, field) in LEGACY_ALIASES.items():
        yield section, field, flat_key


def normalize_metadata(raw: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Fold legacy flat keys into the nested seller/buyer/property/financial
    sections.

    A nested value always wins over a flat one. Keys the renderer does not
    know about are kept as they are. Running it twice gives the same result.
    """
    metadata = copy.deepcopy(raw) if raw else {}

    for section, field, flat_key in _section_fields():
        flat_value = metadata.get(flat_key)
        if not flat_value:
            continue
        nested = metadata.setdefault(section, {})
        if not isinstance(nested, dict):
            # e.g. {"buyer": "John Doe"}; nothing to fold into
            continue
        if not nested.get(field):
            nested[field] = flat_value

    return metadata


def _first(*values, default):
    for value in values:
        if value:
            return value
    return default


def _format_date(value: Optional[datetime], fmt: str) -> str:
    if not value:
        return MISSING_DATE
    if fmt == "day":
        return str(value.day)
    return value.strftime(fmt)


def build_template_data(metadata: Optional[Dict[str, Any]], created_at: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Flatten document metadata into the keys templates can reference.

    Each key resolves nested field first, then the flat legacy field, then
    the ``[key]`` marker. Empty strings and zeros count as missing.
    """
    meta = normalize_metadata(metadata)
    data: Dict[str, Any] = {
        "agreementDay": _first(meta.get("agreementDay"), default=_format_date(created_at, "day")),
        "agreementMonth": _first(meta.get("agreementMonth"), default=_format_date(created_at, "%B")),
        "agreementYear": _first(meta.get("agreementYear"), default=_format_date(created_at, "%Y")),
    }

    for key in LOCATION_FIELDS:
        data[key] = _first(meta.get(key), default=f"[{key}]")

    for section, field, flat_key in _section_fields():
        if flat_key in LEGACY_ALIASES:
            continue
        nested = meta.get(section)
        nested_value = nested.get(field) if isinstance(nested, dict) else None
        data[flat_key] = _first(nested_value, meta.get(flat_key), default=f"[{flat_key}]")

    for key in LEGAL_FIELDS:
        data[key] = _first(meta.get(key), default=f"[{key}]")

    return data


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def render_template(
    content: str,
    data: Dict[str, Any],
    escape: bool = True,
    raw_fields: Iterable[str] = (),
) -> str:
    """
    Replace every ``{{key}}`` in ``content``.

    Values are HTML-escaped unless ``escape`` is off or the key is listed in
    ``raw_fields``. Unknown keys and ``None`` values become ``[key]``.
    Substituted text is never scanned again for tokens.
    """
    raw_fields = set(raw_fields)

    def replace(match):
        key = match.group(1)
        value = data.get(key)
        if value is None:
            return f"[{key}]"
        text = _to_text(value)
        if escape and key not in raw_fields:
            text = html.escape(text)
        return text

    return PLACEHOLDER_PATTERN.sub(replace, content)


def render_document(document, escape: bool = True, raw_fields: Iterable[str] = ()) -> Optional[str]:
    """Render a document against the current content of its template."""
    template = document.template
    if template is None or not template.content:
        return None
    data = build_template_data(document.meta, document.created_at)
    return render_template(template.content, data, escape=escape, raw_fields=raw_fields)
