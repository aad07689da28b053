"""Useful miscellaneous tools for dicemind."""
