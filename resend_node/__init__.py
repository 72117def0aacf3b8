# Resend integration helpers - pagination, option lists and parameter normalizers
from .base import (
    ListOptions,
    ResendAuthError,
    ResendConfig,
    ResendConnectionError,
    ResendError,
    ResendNotFoundError,
    ResendRateLimitError,
    TransportError,
    ValidationError,
)
from .http import ResendHttpClient
from .options import (
    OptionItem,
    get_segments,
    get_template_variables,
    get_templates,
    get_topics,
    load_options,
)
from .pagination import CursorMode, CursorState, advance, fetch_collection, resolve_page_size
from .parameters import (
    build_template_send_variables,
    normalize_email_list,
    parse_template_variables,
)
from .schemas import ListResponse

__all__ = [
    "ListOptions",
    "ResendConfig",
    # Errors
    "ResendError",
    "ValidationError",
    "TransportError",
    "ResendAuthError",
    "ResendNotFoundError",
    "ResendRateLimitError",
    "ResendConnectionError",
    # Transport and pagination
    "ResendHttpClient",
    "ListResponse",
    "CursorMode",
    "CursorState",
    "advance",
    "fetch_collection",
    "resolve_page_size",
    # Option lists
    "OptionItem",
    "load_options",
    "get_templates",
    "get_segments",
    "get_topics",
    "get_template_variables",
    # Parameter normalizers
    "normalize_email_list",
    "parse_template_variables",
    "build_template_send_variables",
]
