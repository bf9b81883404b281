"""Type-prefixed external identifiers, e.g. ``co_4fK9xQ2mZb7T``."""
import secrets
import string

ID_ALPHABET = string.ascii_letters + string.digits
ID_TOKEN_LENGTH = 12

PREFIXES: dict[str, str] = {
    "company": "co",
    "project": "pj",
    "tool": "tl",
    "impl": "im",
    "progress": "pg",
    "blueprint": "bp",
    "blueprint_step": "bs",
    "blueprint_tool": "bt",
    "project_tool": "pt",
    "industry": "in",
    "niche": "ni",
    "product": "pd",
    "service": "sv",
    "company_industry": "ci",
    "company_niche": "cn",
    "company_product": "cp",
    "company_service": "cs",
    "blueprint_industry": "bi",
    "blueprint_niche": "bn",
}


def generate_id(entity: str) -> str:
    """Return ``{prefix}_{12 random base62 chars}``. Raises KeyError on unknown entity type."""
    prefix = PREFIXES[entity]
    token = "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_TOKEN_LENGTH))
    return f"{prefix}_{token}"


def id_factory(entity: str):
    """Column default callable for ``mapped_column(default=...)``."""
    return lambda: generate_id(entity)
