"""
Admin web server for orphaned-data.

The FastAPI application renders the HTML admin screens; its composition
root is :func:`orphaned_data.api.app.create_app`.
"""
