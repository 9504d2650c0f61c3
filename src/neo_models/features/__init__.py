"""Features of neo-models.

- properties/: property definitions, catalogs and storage
- rules/: validation and authorization rules
- state/: lifecycle state machine
- data_portal/: persistence orchestration
- models/: model and collection definitions
"""
