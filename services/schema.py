import re
import requests
from loguru import logger
from dictionaries.constants import FIELDS_URL, FIELD_ID_KEYS, FIELD_NAME_KEYS
from services.auth import auth_header
from services.config import Settings
from services.errors import SchemaFetchError, response_body

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize(value) -> str:
    """Lowercase and drop everything but a-z0-9, so "Lead Email ID" == "lead-email-id"."""
    return _NON_ALNUM.sub("", str(value or "").lower())


def extract_fields(payload) -> list[dict]:
    """
    Accept either shape the fields endpoint returns:
      [ {...}, {...} ]            (bare list)
      { "fields": [ {...} ] }     (wrapped)
    Anything else yields no fields.
    """
    if isinstance(payload, dict) and isinstance(payload.get("fields"), list):
        fields = payload["fields"]
    elif isinstance(payload, list):
        fields = payload
    else:
        logger.warning(f"Unexpected field list shape: {type(payload).__name__}")
        return []
    return [f for f in fields if isinstance(f, dict)]


def _field_id(field: dict):
    for key in FIELD_ID_KEYS:
        if field.get(key):
            return field[key]
    return None


class FieldIndex:
    """Normalized column name -> field ID, built fresh for every request."""

    def __init__(self, ids_by_name: dict[str, str] | None = None):
        self.ids_by_name = dict(ids_by_name or {})

    @classmethod
    def from_fields(cls, fields: list[dict]) -> "FieldIndex":
        ids_by_name = {}
        for f in fields:
            fid = _field_id(f)
            if not fid:
                continue  # nothing to address this column by
            for key in FIELD_NAME_KEYS:
                name = f.get(key)
                if name:
                    # later variants (and later fields) overwrite earlier ones on collision
                    ids_by_name[normalize(name)] = fid
        return cls(ids_by_name)

    def pick(self, *aliases: str):
        """
        Return the field ID for the first alias that matches a column, or None.

        1. exact match on the normalized alias, in the order given
        2. otherwise the first column (in table order) whose normalized name
           contains any of the aliases
        """
        wanted = [normalize(a) for a in aliases]

        for key in wanted:
            fid = self.ids_by_name.get(key)
            if fid:
                return fid

        for name, fid in self.ids_by_name.items():
            if any(w and w in name for w in wanted):
                return fid
        return None

    def __len__(self):
        return len(self.ids_by_name)


def fetch_fields(settings: Settings, token: str, session: requests.Session):
    resp = session.get(FIELDS_URL, params=settings.table_params(), headers=auth_header(token))
    body = response_body(resp)
    if not resp.ok:
        logger.warning(f"Field list fetch failed with status {resp.status_code}")
        raise SchemaFetchError(body, upstream_status=resp.status_code)
    return body


def resolve_fields(settings: Settings, token: str, session: requests.Session) -> FieldIndex:
    index = FieldIndex.from_fields(extract_fields(fetch_fields(settings, token, session)))
    logger.info(f"Indexed {len(index)} column names for table {settings.table_id}")
    return index
