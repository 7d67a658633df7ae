"""
Value sources consulted by the binder.

Environment variable lookups (process, static mapping, .env file) and the
TOML file decoder that produces environment-partitioned sections.
"""
