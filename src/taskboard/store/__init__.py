"""
Document store subsystem (MongoDB via pymongo).

Components:
- mongo.py: client/database setup with a connectivity check
- project_store.py: `projects` collection (boards and tasks embedded)
- task_index.py: flat `tasks` collection used for direct task lookup
"""
