# Schemas package init
"""
SoulFinder Backend: Pydantic Request/Response Schemas
=======================================================

One module per resource. Wire field names follow the frontend's
camelCase contract (`biodataId`, `totalCount`); Python attributes stay
snake_case where a model is built in code, with aliases for the wire.
Free-form profile documents travel as plain dicts.
"""
