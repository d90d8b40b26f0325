"""
Task subsystem.

Components:
- task_models.py: data structures (Task) + id generation and record (de)serialization
- task_store.py: authoritative in-memory task collection
- task_views.py: pure derived values (counts, progress, date groups)
"""
