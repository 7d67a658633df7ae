"""
Settings for the loader itself.

Provides a strongly typed settings object (tag name, omit sentinel, native
integer width) loaded from environment variables and an optional .env file.
"""
