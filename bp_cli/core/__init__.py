"""Core utilities for bp CLI."""

from .config import CONFIG_PATH, API_MAX_PER_PAGE, Site, load_config, save_config, get_site
from .site import SiteContext, get_site_context
from .http import ApiError, http_json, http_request
from .result import Outcome, Status, fail, report
from .utils import fetch_all, first_record, parse_identifier, parse_list, slugify
from .output import FORMATS, format_item, format_items, format_rows, project, show_item, show_items
from .interactive import confirm, edit_text, read_from_file_or_stdin
from .log import setup_logging

__all__ = [
    "CONFIG_PATH", "API_MAX_PER_PAGE", "Site",
    "load_config", "save_config", "get_site",
    "SiteContext", "get_site_context",
    "ApiError", "http_json", "http_request",
    "Outcome", "Status", "fail", "report",
    "fetch_all", "first_record", "parse_identifier", "parse_list", "slugify",
    "FORMATS", "format_item", "format_items", "format_rows", "project", "show_item", "show_items",
    "confirm", "edit_text", "read_from_file_or_stdin",
    "setup_logging",
]
