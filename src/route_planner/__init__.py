"""Outlet route planning service."""
