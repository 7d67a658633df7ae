"""
Generic helpers shared across modules.

Includes integer width checks backed by numpy and timestamp/duration
parsing backed by pandas.
"""
