"""Accounts and sessions.

Users sign up with name/email/password, sign in to receive an opaque bearer
token, and every task route resolves that token through ``get_current_user``.
"""
