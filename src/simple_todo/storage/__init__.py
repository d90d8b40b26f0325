"""
Persistence subsystem.

Components:
- providers.py: key/value text storage (JSON file per key, in-memory)
- bridge.py: load-once / serialized-save bridge between TaskStore and a provider
"""
