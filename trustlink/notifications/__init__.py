"""Notification consumer."""
