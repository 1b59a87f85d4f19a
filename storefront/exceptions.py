class StorefrontError(Exception):
    """Base class for errors the API reports back to the caller as 400s."""


class DuplicateError(StorefrontError):
    pass


class InvalidUploadError(StorefrontError):
    pass


def format_validation_errors(errors) -> str:
    """Join pydantic error entries into one readable message."""
    parts = []
    for e in errors:
        loc = ".".join(str(p) for p in e.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {e['msg']}" if loc else e["msg"])
    return ", ".join(parts)
