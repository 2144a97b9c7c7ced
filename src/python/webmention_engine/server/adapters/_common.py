from ..._constants import FORM_CONTENT_TYPE


def webmention_link_header_value(endpoint: str) -> str:
    return f"<{endpoint}>; rel=\"webmention\""


def append_link_header(existing: str | None, to_add: str) -> str:
    if not existing:
        return to_add
    if to_add in existing:
        return existing
    return f"{existing}, {to_add}"


def is_text_content_type(content_type: str | None) -> bool:
    return content_type is not None and content_type.split(";", 1)[
        0
    ].strip().startswith("text/")


def is_form_content_type(content_type: str | None) -> bool:
    return (
        content_type is not None
        and content_type.split(";", 1)[0].strip().lower() == FORM_CONTENT_TYPE
    )
