DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_MAX_REDIRECTS = 20
DEFAULT_USER_AGENT = "webmention-engine/0.1 (+https://www.w3.org/TR/webmention/)"

SUPPORTED_SCHEMES = frozenset({"http", "https"})
WEBMENTION_REL = "webmention"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
