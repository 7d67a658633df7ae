"""
Field binding engine.

Key-name derivation, field descriptors, typed value conversion for both
sources, and the precedence-ordered binder.
"""
