"""CareerTrail: job application tracker.

Components:
- db: SQLAlchemy models (jobs, activities, contacts, interviews, preferences)
- services: user-scoped operations on those models
- board: Kanban status board with optimistic drag-and-drop
- realtime: in-process change feed published after commit
- routers/main: FastAPI service
- client/cli: REST client and command line
"""

__version__ = "0.1.0"
