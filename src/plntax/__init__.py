"""Comparative tax estimates for Polish business taxation regimes."""
