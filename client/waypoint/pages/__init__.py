"""Page state and widget action tables.

Each page owns its state and exposes ``action_table()``; tables are registered
with an ActionRouter and can be exercised independently.
"""
