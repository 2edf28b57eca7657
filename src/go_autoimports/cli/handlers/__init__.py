"""Command handlers for the go-autoimports CLI."""

from go_autoimports.cli.handlers.autoimports import handle_autoimports

__all__ = ["handle_autoimports"]
