# Services package init
"""
Works API - Services Layer
===========================

What:  Storage logic sitting between routes (HTTP) and the database.

Service Inventory:
    - WorkService: find_all / find_by_id / create / update_by_id / delete_by_id
"""
