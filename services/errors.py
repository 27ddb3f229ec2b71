class LeadError(Exception):
    """A failed pipeline step, rendered as a structured JSON error."""

    status_code = 400
    step = "unknown"

    def __init__(self, detail, upstream_status: int | None = None):
        self.detail = detail
        self.upstream_status = upstream_status
        super().__init__(f"{self.step} failed: {upstream_status} {detail}")

    def to_response(self) -> dict:
        return {"ok": False, "step": self.step, "status": self.upstream_status, "detail": self.detail}


class AuthenticationError(LeadError):
    status_code = 401
    step = "token"

    def to_response(self) -> dict:
        return {"ok": False, "step": self.step, "detail": {"status": self.upstream_status, "body": self.detail}}


class SchemaFetchError(LeadError):
    step = "fields"


class ValidationError(LeadError):
    step = "validate"


class SubmissionError(LeadError):
    step = "create"


def response_body(resp):
    """Upstream body as JSON when it parses, raw text otherwise."""
    try:
        return resp.json()
    except ValueError:
        return resp.text
