"""Router backend adapters.

Each adapter implements ``RouterAdapter`` for one router library. Import the
one you use explicitly (``genro_swagger.adapters.werkzeug`` or
``genro_swagger.adapters.starlette``); nothing is imported here so a missing
backend never breaks the core.
"""
