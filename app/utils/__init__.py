"""
Shared helpers: response envelopes, validation, route decorators
"""
