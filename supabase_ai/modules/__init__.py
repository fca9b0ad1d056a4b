"""Domain modules for supabase_ai.

Each module is self-contained with its own schemas and services, and
talks to the outside world only through the infrastructure protocols.
"""
