TOKEN_URL = "https://accounts.zoho.{dc}/oauth/v2/token"
TABLES_API = "https://tables.zoho.com/api/v1"
FIELDS_URL = f"{TABLES_API}/fields"
RECORDS_URL = f"{TABLES_API}/records"

AUTH_SCHEME = "Zoho-oauthtoken"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

# name variants a field descriptor may carry, in write order (last write wins)
FIELD_NAME_KEYS = ("display_name", "column_name", "name", "field_name", "label")
FIELD_ID_KEYS = ("fieldID", "field_id", "id")

# role -> column labels to try, most specific first
ROLE_ALIASES = {
    "name": ("Lead Name", "Name", "Full Name"),
    "phone": ("Lead Number", "Phone", "Phone Number", "Mobile"),
    "email": ("Lead Email ID", "Email", "Email Address"),
    "source": ("Lead Source", "Source"),
    # optional columns, only filled if the table has them
    "zip": ("ZIP", "Zip Code", "Postal Code"),
    "service": ("Service", "Requested Service"),
    "details": ("Details", "Notes", "Message"),
    "page": ("Page", "Page URL", "URL"),
    "route": ("Route", "Path"),
    "timestamp": ("Timestamp", "Submitted At", "Created At", "Submission Date"),
}

# roles copied straight from the same-named body key
PASSTHROUGH_ROLES = {
    "phone": "phone",
    "email": "email",
    "zip": "zip",
    "service": "service",
    "details": "details",
    "page": "page",
    "route": "route",
}

DEFAULT_DC = "us"
DEFAULT_LEAD_SOURCE = "Website"
