"""
FastAPI REST API for the task list - serves the tasks directory as JSON, plus the front end entry page.
"""
