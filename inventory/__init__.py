"""Inventory search, geo filtering and listing resolution."""
