"""
Task subsystem.

Components:
- task_models.py: the Task record and its TaskKind tag
- task_list.py: TaskList, the 1-indexed owning container
- task_store.py: SQLite-backed persistence of a whole list
"""
