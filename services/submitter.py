import json
from datetime import datetime, timezone
import requests
from loguru import logger
from dictionaries.constants import PASSTHROUGH_ROLES, RECORDS_URL, ROLE_ALIASES
from services.auth import auth_header, get_access_token
from services.config import Settings
from services.errors import SubmissionError, ValidationError, response_body
from services.schema import FieldIndex, resolve_fields


def parse_body(raw) -> dict:
    """Request body as a dict; accepts a parsed object, str or bytes. Junk becomes {}."""
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if not isinstance(raw, str) or not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError):
        return {}
    return data if isinstance(data, dict) else {}


def _text(value) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def full_name(body: dict) -> str:
    # "firstName lastName", falling back to a single "name" field
    parts = [_text(body.get(k)) for k in ("firstName", "lastName")]
    joined = " ".join(p for p in parts if p).strip()
    return joined or _text(body.get("name"))


def _iso_now(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def resolve_roles(index: FieldIndex) -> dict:
    """role -> field ID (or None) for every known role."""
    return {role: index.pick(*aliases) for role, aliases in ROLE_ALIASES.items()}


def build_record(bindings: dict, body: dict, lead_source: str, now: datetime | None = None) -> dict:
    """
    Map the request body onto resolved field IDs.
    Roles whose column wasn't found are left out entirely.
    """
    values = {
        "name": full_name(body),
        "source": lead_source,
        "timestamp": _text(body.get("ts")) or _iso_now(now),
    }
    for role, key in PASSTHROUGH_ROLES.items():
        values[role] = _text(body.get(key))

    record = {}
    for role, fid in bindings.items():
        if fid:
            record[fid] = values.get(role, "")
    return record


def validate_record(record: dict, body: dict):
    if not record:
        raise ValidationError("No matching columns found in table")
    if not full_name(body) and not _text(body.get("phone")):
        raise ValidationError("Name or phone is required")


def create_record(settings: Settings, token: str, record: dict, session: requests.Session):
    data = {**settings.table_params(), "field_ids_with_values": json.dumps(record)}
    resp = session.post(RECORDS_URL, data=data, headers=auth_header(token))
    body = response_body(resp)
    if not resp.ok:
        logger.warning(f"Record create failed with status {resp.status_code}")
        raise SubmissionError(body, upstream_status=resp.status_code)
    return body


def submit_lead(body: dict, settings: Settings, session: requests.Session):
    """token -> fields -> record -> validate -> create. Returns the upstream record payload."""
    token = get_access_token(settings, session)
    index = resolve_fields(settings, token, session)

    bindings = resolve_roles(index)
    missing = [role for role, fid in bindings.items() if not fid]
    if missing:
        logger.info(f"No column found for roles: {', '.join(missing)}")

    record = build_record(bindings, body, settings.lead_source)
    validate_record(record, body)

    out = create_record(settings, token, record, session)
    logger.info(f"Lead created in table {settings.table_id} with {len(record)} fields")
    return out
