"""
Blog post resource: routes, business logic and raw-SQL persistence.
"""
