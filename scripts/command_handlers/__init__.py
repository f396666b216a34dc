"""Command handlers: thin wrappers that call the engine and print results."""

from .entity_commands import handle_create, handle_delete, handle_list, handle_update
from .reporting import report_error
from .view_commands import handle_add_views, handle_show_views
