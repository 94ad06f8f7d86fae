"""Utility functions for cuentatrack."""

from cuentatrack.utils.account_resolver import resolve_account, resolve_user

__all__ = ["resolve_account", "resolve_user"]
