import os
from dataclasses import dataclass
from dotenv import load_dotenv
from dictionaries.constants import DEFAULT_DC, DEFAULT_LEAD_SOURCE

load_dotenv()


@dataclass(frozen=True)
class Settings:
    client_id: str
    client_secret: str
    refresh_token: str
    base_id: str
    table_id: str
    view_id: str | None = None
    dc: str = DEFAULT_DC
    lead_source: str = DEFAULT_LEAD_SOURCE

    def table_params(self) -> dict:
        """base_id / table_id (+ view_id when set), as sent on every Tables call."""
        params = {"base_id": self.base_id, "table_id": self.table_id}
        if self.view_id:
            params["view_id"] = self.view_id
        return params


def load_settings() -> Settings:
    return Settings(
        client_id=os.getenv("ZOHO_CLIENT_ID", ""),
        client_secret=os.getenv("ZOHO_CLIENT_SECRET", ""),
        refresh_token=os.getenv("ZOHO_REFRESH_TOKEN", ""),
        base_id=os.getenv("ZOHO_TABLES_BASE_ID", ""),
        table_id=os.getenv("ZOHO_TABLES_TABLE_ID", ""),
        view_id=os.getenv("ZOHO_TABLES_VIEW_ID") or None,
        dc=os.getenv("ZOHO_DC") or DEFAULT_DC,
        lead_source=os.getenv("DEFAULT_LEAD_SOURCE") or DEFAULT_LEAD_SOURCE,
    )
