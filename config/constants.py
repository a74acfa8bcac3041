"""
Wire constants for the BTCChina JSON-RPC trade API.

Header names, the signature message template and the canonical forms of
boolean params. Changing any of these breaks signature verification on
the remote side.
"""
import re

# ===== HTTP HEADERS =====

TONCE_HEADER = "Json-Rpc-Tonce"
AUTHORIZATION_HEADER = "Authorization"

# ===== SIGNATURE MESSAGE =====
# Only POST is ever signed
REQUEST_METHOD = "post"

SIGNATURE_TEMPLATE = (
    "tonce={tonce}&accesskey={access_key}&requestmethod={request_method}"
    "&id={id}&method={method}&params={params}"
)

# Rendering of a missing tonce in the message
MISSING_TONCE = "null"

# ===== REQUEST BODY EXTRACTION =====
# Groups: id, method, raw params interior. Params never nest.
ENVELOPE_PATTERN = re.compile(
    r'\{"id":([0-9]*),"method":"([^"]*)","params":\[([^\]]*)\]\}',
    re.DOTALL | re.IGNORECASE,
)

# ===== PARAM CANONICALIZATION =====

PARAM_SEPARATOR = ","
STRING_QUOTE = '"'

TRUE_TOKEN = "true"
FALSE_TOKEN = "false"
CANONICAL_TRUE = "1"
CANONICAL_FALSE = ""

# ===== DIGEST =====

HMAC_ALGORITHM = "sha1"
