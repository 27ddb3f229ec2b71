import pytest
from unittest.mock import MagicMock
from services.config import Settings
from tests.fakes import make_response


@pytest.fixture
def settings():
    return Settings(
        client_id="client-123",
        client_secret="secret-456",
        refresh_token="refresh-789",
        base_id="base-1",
        table_id="table-1",
        view_id=None,
        dc="us",
        lead_source="Website",
    )


@pytest.fixture
def fields_payload():
    # columns as named in the lead table
    return {
        "fields": [
            {"fieldID": "f_name", "display_name": "Lead Name"},
            {"fieldID": "f_phone", "display_name": "Lead Number"},
            {"fieldID": "f_email", "display_name": "Lead Email ID"},
            {"fieldID": "f_source", "display_name": "Lead Source"},
            {"fieldID": "f_zip", "display_name": "Postal Zip Code"},
            {"fieldID": "f_ts", "display_name": "Submitted At"},
        ]
    }


@pytest.fixture
def session(fields_payload):
    """A requests.Session stand-in that succeeds at every step."""
    s = MagicMock()
    token_resp = make_response(200, {"access_token": "tok-abc"})
    create_resp = make_response(200, {"code": 0, "data": {"record_id": "rec-1"}})

    def post(url, **kwargs):
        return token_resp if "oauth" in url else create_resp

    s.post.side_effect = post
    s.get.return_value = make_response(200, fields_payload)
    return s
